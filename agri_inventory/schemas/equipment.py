"""
Pydantic schemas for equipment and maintenance logs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import Field, StringConstraints, field_validator

from agri_inventory.models.enums import EquipmentStatus
from agri_inventory.schemas.common import CamelModel, DepartmentRef, OptionalStr

EARLIEST_PURCHASE_DATE = date(1900, 1, 1)

EquipmentType = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


def check_purchase_date(value: date) -> date:
    if value > date.today():
        raise ValueError("Purchase date cannot be in the future")
    if value < EARLIEST_PURCHASE_DATE:
        raise ValueError("Purchase date is too old")
    return value


class EquipmentBase(CamelModel):
    """Fields of an equipment row as submitted by forms and CSV rows."""

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
    type: EquipmentType
    status: EquipmentStatus = EquipmentStatus.AVAILABLE
    purchase_date: date
    image_url: OptionalStr = None

    @field_validator("purchase_date")
    @classmethod
    def purchase_date_in_range(cls, v):
        return check_purchase_date(v)


class EquipmentCreate(EquipmentBase):
    department_id: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class MaintenanceLogRead(CamelModel):
    id: str
    equipment_id: str
    date: date
    cost: Decimal
    description: str
    created_at: Optional[datetime] = None


class EquipmentRead(CamelModel):
    id: str
    name: str
    type: str
    status: EquipmentStatus
    purchase_date: date
    image_url: Optional[str] = None
    department_id: str
    department: Optional[DepartmentRef] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EquipmentDetail(EquipmentRead):
    maintenance_logs: List[MaintenanceLogRead] = []


class MaintenanceLogCreate(CamelModel):
    equipment_id: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    date: date
    cost: Decimal = Field(ge=0, le=Decimal("999999.99"), decimal_places=2)
    description: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=1000)]

    @field_validator("date")
    @classmethod
    def not_in_future(cls, v):
        if v > date.today():
            raise ValueError("Maintenance date cannot be in the future")
        return v

