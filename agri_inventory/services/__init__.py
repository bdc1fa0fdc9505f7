"""
Services package initialization.

This module imports all services to make them available from a single import point.
"""

from agri_inventory.services.bulk_import import BulkImportService
from agri_inventory.services.department import DepartmentService
from agri_inventory.services.equipment import EquipmentService
from agri_inventory.services.maintenance import MaintenanceService
from agri_inventory.services.registry import ENTITY_REGISTRY, get_entity_config
from agri_inventory.services.repository import DepartmentEntityRepository
from agri_inventory.services.stats import StatsService
from agri_inventory.services.user import UserService

__all__ = [
    "BulkImportService",
    "DepartmentService",
    "EquipmentService",
    "MaintenanceService",
    "StatsService",
    "UserService",
    "DepartmentEntityRepository",
    "ENTITY_REGISTRY",
    "get_entity_config",
]
