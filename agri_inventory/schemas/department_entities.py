"""
Pydantic schemas for the department-specific inventory registers.

One input schema per register. Most registers share the name/type/status/
image columns of ``InventoryItemBase``; the rest of each schema mirrors what
that department actually records.
"""

from datetime import date
from typing import Annotated, Optional

from pydantic import BeforeValidator, NonNegativeInt, PositiveInt, StringConstraints

from agri_inventory.models.enums import EquipmentStatus
from agri_inventory.schemas.common import (
    CamelModel,
    OptionalAmount,
    OptionalCount,
    OptionalStr,
    RequiredStr,
    blank_to_none,
)

ShortStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
OptionalDate = Annotated[Optional[date], BeforeValidator(blank_to_none)]


class InventoryItemBase(CamelModel):
    name: RequiredStr
    type: ShortStr
    status: EquipmentStatus = EquipmentStatus.AVAILABLE
    image_url: OptionalStr = None


class AdaptiveResearchPositionIn(CamelModel):
    """Post position line; every count is required and non-negative."""

    attached_department: OptionalStr = None
    post_name: RequiredStr
    bps_scale: ShortStr
    sanctioned_posts: NonNegativeInt
    filled_posts: NonNegativeInt
    vacant_posts: NonNegativeInt
    promotion_posts: NonNegativeInt
    initial_recruitment_posts: NonNegativeInt
    remarks: OptionalStr = None
    order_number: OptionalCount = None


class AgriEngineeringAssetIn(InventoryItemBase):
    category: OptionalStr = None
    division_or_city: OptionalStr = None
    office_name: OptionalStr = None
    quantity_or_area: OptionalStr = None
    contact_details: OptionalStr = None


class AgriExtensionAssetIn(CamelModel):
    name: RequiredStr
    type: ShortStr
    location: RequiredStr
    area_square_feet: OptionalCount = None
    remarks: OptionalStr = None
    utilization: ShortStr
    functionality: OptionalStr = None
    status: EquipmentStatus = EquipmentStatus.AVAILABLE


class AgronomyLabEquipmentIn(InventoryItemBase):
    quantity: PositiveInt = 1
    focal_person: OptionalStr = None
    display_order: OptionalCount = None


class AMRIInventoryItemIn(InventoryItemBase):
    asset_category: OptionalStr = None
    item_description: OptionalStr = None
    quantity_or_area: OptionalStr = None
    functional_status: OptionalStr = None
    remarks: OptionalStr = None


class CRIAssetIn(InventoryItemBase):
    make_model: OptionalStr = None
    lab_department: OptionalStr = None
    purpose_function: OptionalStr = None
    year: OptionalStr = None
    location: OptionalStr = None
    quantity: NonNegativeInt = 1
    operational_status: OptionalStr = None
    description: OptionalStr = None


class ERSSStockItemIn(InventoryItemBase):
    quantity_str: OptionalStr = None
    date_received: OptionalDate = None
    last_verification_date: OptionalStr = None
    current_status_remarks: OptionalStr = None


class FloricultureAssetIn(InventoryItemBase):
    category: OptionalStr = None
    item_name_or_post: OptionalStr = None
    bps_scale: OptionalStr = None
    sanctioned_qty: OptionalCount = None
    in_position_qty: OptionalCount = None
    details_or_area: OptionalStr = None


class FoodScienceEquipmentIn(InventoryItemBase):
    lab_section_name: OptionalStr = None
    room_number: OptionalStr = None
    quantity: PositiveInt = 1
    focal_person: OptionalStr = None


class MNSUAMFacilityIn(InventoryItemBase):
    block_name: OptionalStr = None
    facility_type: OptionalStr = None
    capacity_persons: OptionalCount = None
    capacity_label: OptionalStr = None
    display_order: OptionalCount = None


class MRIAssetIn(InventoryItemBase):
    category: OptionalStr = None
    item_name_or_designation: OptionalStr = None
    bps_scale: OptionalCount = None
    total_quantity_or_posts: OptionalCount = None
    filled_or_functional: OptionalCount = None
    vacant_or_non_functional: OptionalCount = None
    remarks_or_location: OptionalStr = None


class PesticideLabRecordIn(InventoryItemBase):
    section_category: OptionalStr = None
    bps_scale: OptionalCount = None
    quantity_or_sanctioned: OptionalCount = None


class RAEDCEquipmentIn(InventoryItemBase):
    facility_type: OptionalStr = None
    capacity: OptionalCount = None
    location: OptionalStr = None
    functionality: OptionalStr = None


class RARIAssetIn(InventoryItemBase):
    category: OptionalStr = None
    make_model_year: OptionalStr = None
    quantity: OptionalCount = None
    condition_status: OptionalStr = None
    use_application: OptionalStr = None


class SoilWaterProjectIn(InventoryItemBase):
    category: OptionalStr = None
    bps: OptionalCount = None
    quantity_required: OptionalCount = None
    budget_allocation_total_million: OptionalAmount = None
    justification_or_year: OptionalStr = None
