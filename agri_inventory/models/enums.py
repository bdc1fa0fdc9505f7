"""
Enumerations shared by models, schemas and services.
"""
from enum import Enum


class Role(str, Enum):
    """User roles."""
    ADMIN = "ADMIN"
    DEPT_HEAD = "DEPT_HEAD"


class EquipmentStatus(str, Enum):
    """Lifecycle status of an inventory item."""
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    NEEDS_REPAIR = "NEEDS_REPAIR"
    DISCARDED = "DISCARDED"
