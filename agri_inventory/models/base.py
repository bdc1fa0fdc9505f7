"""
Base SQLAlchemy model class and shared column mixins.
"""
import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String
from sqlalchemy.orm import declarative_base, declared_attr, relationship
from sqlalchemy.sql import func

from agri_inventory.models.enums import EquipmentStatus

Base = declarative_base()


def generate_id() -> str:
    return str(uuid.uuid4())


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class DepartmentOwnedMixin(TimestampMixin):
    """Id, owning department and timestamps shared by every department record."""

    id = Column(String(36), primary_key=True, default=generate_id)

    @declared_attr
    def department_id(cls):
        return Column(
            String(64),
            ForeignKey("departments.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,
        )

    @declared_attr
    def department(cls):
        return relationship("Department", lazy="selectin")


def status_column() -> Column:
    return Column(
        Enum(EquipmentStatus, name="equipment_status"),
        nullable=False,
        default=EquipmentStatus.AVAILABLE,
        server_default=EquipmentStatus.AVAILABLE.value,
    )
