"""
Department-specific inventory tables.

Each department keeps its own loosely typed register. The tables share the
owning-department/timestamp columns from ``DepartmentOwnedMixin`` and add
whatever fields that department records.
"""
from sqlalchemy import Column, Date, Float, Integer, String, Text

from agri_inventory.models.base import Base, DepartmentOwnedMixin, status_column


class AdaptiveResearchPosition(DepartmentOwnedMixin, Base):
    """Monthly sanctioned/filled post position of the Adaptive Research Center."""

    __tablename__ = "adaptive_research_positions"

    attached_department = Column(String(255), nullable=True)
    post_name = Column(String(255), nullable=False)
    bps_scale = Column(String(50), nullable=False)
    sanctioned_posts = Column(Integer, nullable=False, default=0)
    filled_posts = Column(Integer, nullable=False, default=0)
    vacant_posts = Column(Integer, nullable=False, default=0)
    promotion_posts = Column(Integer, nullable=False, default=0)
    initial_recruitment_posts = Column(Integer, nullable=False, default=0)
    remarks = Column(Text, nullable=True)
    order_number = Column(Integer, nullable=True)


class AgriEngineeringAsset(DepartmentOwnedMixin, Base):
    __tablename__ = "agri_engineering_assets"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    category = Column(String(255), nullable=True)
    division_or_city = Column(String(255), nullable=True)
    office_name = Column(String(255), nullable=True)
    quantity_or_area = Column(String(255), nullable=True)
    contact_details = Column(String(255), nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class AgriExtensionAsset(DepartmentOwnedMixin, Base):
    """Buildings and facilities of the Agricultural Extension Wing."""

    __tablename__ = "agri_extension_assets"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False)
    area_square_feet = Column(Integer, nullable=True)
    remarks = Column(Text, nullable=True)
    utilization = Column(String(100), nullable=False)
    functionality = Column(String(255), nullable=True)
    status = status_column()


class AgronomyLabEquipment(DepartmentOwnedMixin, Base):
    __tablename__ = "agronomy_lab_equipment"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    focal_person = Column(String(255), nullable=True)
    display_order = Column(Integer, nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class AMRIInventoryItem(DepartmentOwnedMixin, Base):
    __tablename__ = "amri_inventory_items"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    asset_category = Column(String(255), nullable=True)
    item_description = Column(Text, nullable=True)
    quantity_or_area = Column(String(255), nullable=True)
    functional_status = Column(String(255), nullable=True)
    remarks = Column(Text, nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class CRIAsset(DepartmentOwnedMixin, Base):
    """Lab equipment and machinery of the Cotton Research Institute, Multan."""

    __tablename__ = "cri_assets"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    make_model = Column(String(255), nullable=True)
    lab_department = Column(String(255), nullable=True)
    purpose_function = Column(Text, nullable=True)
    year = Column(String(50), nullable=True)
    location = Column(String(255), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    operational_status = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class ERSSStockItem(DepartmentOwnedMixin, Base):
    """Stock register entry of the Entomological Research Sub-Station."""

    __tablename__ = "erss_stock_items"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    quantity_str = Column(String(100), nullable=True)
    date_received = Column(Date, nullable=True)
    last_verification_date = Column(String(100), nullable=True)
    current_status_remarks = Column(Text, nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class FloricultureAsset(DepartmentOwnedMixin, Base):
    __tablename__ = "floriculture_assets"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    category = Column(String(255), nullable=True)
    item_name_or_post = Column(String(255), nullable=True)
    bps_scale = Column(String(50), nullable=True)
    sanctioned_qty = Column(Integer, nullable=True)
    in_position_qty = Column(Integer, nullable=True)
    details_or_area = Column(Text, nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class FoodScienceEquipment(DepartmentOwnedMixin, Base):
    __tablename__ = "food_science_equipment"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    lab_section_name = Column(String(255), nullable=True)
    room_number = Column(String(50), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    focal_person = Column(String(255), nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class MNSUAMFacility(DepartmentOwnedMixin, Base):
    """Estate facilities (halls, hostels, labs) of MNS University of Agriculture."""

    __tablename__ = "mnsuam_facilities"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    block_name = Column(String(255), nullable=True)
    facility_type = Column(String(255), nullable=True)
    capacity_persons = Column(Integer, nullable=True)
    capacity_label = Column(String(255), nullable=True)
    display_order = Column(Integer, nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class MRIAsset(DepartmentOwnedMixin, Base):
    __tablename__ = "mri_assets"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    category = Column(String(255), nullable=True)
    item_name_or_designation = Column(String(255), nullable=True)
    bps_scale = Column(Integer, nullable=True)
    total_quantity_or_posts = Column(Integer, nullable=True)
    filled_or_functional = Column(Integer, nullable=True)
    vacant_or_non_functional = Column(Integer, nullable=True)
    remarks_or_location = Column(Text, nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class PesticideLabRecord(DepartmentOwnedMixin, Base):
    __tablename__ = "pesticide_lab_records"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    section_category = Column(String(255), nullable=True)
    bps_scale = Column(Integer, nullable=True)
    quantity_or_sanctioned = Column(Integer, nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class RAEDCEquipment(DepartmentOwnedMixin, Base):
    __tablename__ = "raedc_equipment"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    facility_type = Column(String(255), nullable=True)
    capacity = Column(Integer, nullable=True)
    location = Column(String(255), nullable=True)
    functionality = Column(String(255), nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class RARIAsset(DepartmentOwnedMixin, Base):
    __tablename__ = "rari_assets"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    category = Column(String(255), nullable=True)
    make_model_year = Column(String(255), nullable=True)
    quantity = Column(Integer, nullable=True)
    condition_status = Column(String(255), nullable=True)
    use_application = Column(Text, nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)


class SoilWaterProject(DepartmentOwnedMixin, Base):
    """Budgeted equipment/post lines of the Soil & Water Testing project."""

    __tablename__ = "soil_water_projects"

    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    category = Column(String(255), nullable=True)
    bps = Column(Integer, nullable=True)
    quantity_required = Column(Integer, nullable=True)
    budget_allocation_total_million = Column(Float, nullable=True)
    justification_or_year = Column(Text, nullable=True)
    status = status_column()
    image_url = Column(String(500), nullable=True)
