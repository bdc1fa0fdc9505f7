"""
Pydantic schemas for departments.

This module defines the request and response schemas for department-related
API endpoints using Pydantic models.
"""

from datetime import datetime
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import field_validator

from agri_inventory.models.enums import EquipmentStatus, Role
from agri_inventory.schemas.common import CamelModel, OptionalStr, RequiredStr


class DepartmentBase(CamelModel):
    """Base schema for department data."""

    name: RequiredStr
    location: RequiredStr
    description: OptionalStr = None
    focal_person: OptionalStr = None
    designation: OptionalStr = None
    phone: OptionalStr = None
    email: OptionalStr = None
    logo: OptionalStr = None

    @field_validator("logo")
    @classmethod
    def logo_is_url_or_empty(cls, v):
        if not v:
            return v
        # Uploaded logos are served from the app itself
        if v.startswith("/"):
            return v
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Logo must be a valid URL")
        return v


class DepartmentCreate(DepartmentBase):
    """Schema for creating a new department."""

    pass


class Department(CamelModel):
    """Schema for department response data."""

    id: str
    name: str
    location: str
    description: Optional[str] = None
    focal_person: Optional[str] = None
    designation: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    logo: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DepartmentWithCounts(Department):
    equipment_count: int = 0
    user_count: int = 0


class DepartmentMember(CamelModel):
    id: str
    name: Optional[str] = None
    email: str
    role: Role


class DepartmentEquipmentSummary(CamelModel):
    id: str
    name: str
    type: str
    status: EquipmentStatus
    created_at: Optional[datetime] = None


class DepartmentDetail(Department):
    """Department with its users and most recent equipment."""

    users: List[DepartmentMember] = []
    recent_equipment: List[DepartmentEquipmentSummary] = []
    equipment_count: int = 0
