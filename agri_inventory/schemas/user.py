"""
Pydantic schemas for users, sessions and profile management.
"""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import EmailStr, Field, StringConstraints, field_validator

from agri_inventory.models.enums import Role
from agri_inventory.schemas.common import CamelModel, DepartmentRef

PersonName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]


class SessionUser(CamelModel):
    """Identity resolved for the current request."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Role
    department_id: Optional[str] = None


class User(CamelModel):
    """Schema for user response data."""

    id: str
    name: Optional[str] = None
    email: str
    role: Role
    image: Optional[str] = None
    department_id: Optional[str] = None
    department: Optional[DepartmentRef] = None
    created_at: Optional[datetime] = None


class UserCreate(CamelModel):
    """Self-service signup; new accounts are department heads."""

    name: PersonName
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    department_id: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class Token(CamelModel):
    """Schema for authentication token."""

    access_token: str
    token_type: str = "bearer"
    user: User


class ProfileUpdate(CamelModel):
    name: PersonName
    email: EmailStr


class PasswordChange(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8, max_length=128)
    confirm_password: str = Field(min_length=1)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v, info):
        new_password = info.data.get("new_password")
        if new_password is not None and v != new_password:
            raise ValueError("Passwords don't match")
        return v


class ProfileImageUpdate(CamelModel):
    image_url: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]


class UserRoleUpdate(CamelModel):
    role: Role


class UserDepartmentUpdate(CamelModel):
    department_id: Optional[str] = None
