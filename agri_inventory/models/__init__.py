"""
Models package initialization.

This module imports all models to ensure they are registered with SQLAlchemy.
"""

from agri_inventory.models.base import Base
from agri_inventory.models.enums import EquipmentStatus, Role
from agri_inventory.models.department import Department
from agri_inventory.models.user import User
from agri_inventory.models.equipment import Equipment, MaintenanceLog
from agri_inventory.models.visitor import VisitorCounter
from agri_inventory.models.department_entities import (
    AdaptiveResearchPosition,
    AgriEngineeringAsset,
    AgriExtensionAsset,
    AgronomyLabEquipment,
    AMRIInventoryItem,
    CRIAsset,
    ERSSStockItem,
    FloricultureAsset,
    FoodScienceEquipment,
    MNSUAMFacility,
    MRIAsset,
    PesticideLabRecord,
    RAEDCEquipment,
    RARIAsset,
    SoilWaterProject,
)

__all__ = [
    "Base",
    "EquipmentStatus",
    "Role",
    "Department",
    "User",
    "Equipment",
    "MaintenanceLog",
    "VisitorCounter",
    "AdaptiveResearchPosition",
    "AgriEngineeringAsset",
    "AgriExtensionAsset",
    "AgronomyLabEquipment",
    "AMRIInventoryItem",
    "CRIAsset",
    "ERSSStockItem",
    "FloricultureAsset",
    "FoodScienceEquipment",
    "MNSUAMFacility",
    "MRIAsset",
    "PesticideLabRecord",
    "RAEDCEquipment",
    "RARIAsset",
    "SoilWaterProject",
]
