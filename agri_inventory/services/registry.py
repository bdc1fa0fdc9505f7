"""
Configuration of the department-specific inventory registers.

Every register is served by the same generic repository; this module is the
only place that knows which table, schema, department and dashboard route
belong together.
"""
from dataclasses import dataclass
from typing import Dict, Tuple, Type

from pydantic import BaseModel

from agri_inventory.db.seed_data import SEEDS_BY_ID, DepartmentSeed
from agri_inventory.models import Base
from agri_inventory.models import department_entities as models
from agri_inventory.schemas import department_entities as schemas

ASC = "asc"
DESC = "desc"
NEWEST_FIRST = (("created_at", DESC),)


@dataclass(frozen=True)
class EntityConfig:
    """
    Everything the generic repository needs to serve one register.

    Attributes:
        key: URL segment, e.g. "cri"
        noun: Human label used in messages, e.g. "CRI asset"
        department_label: Used in "<label> department not found"
        model: SQLAlchemy table
        schema: Pydantic input schema
        department: Reference data of the owning department
        upsert_department: Create the department on first use when missing
        dashboard_path: Route revalidated after mutations
        order_by: (column, direction) pairs applied to list queries
    """

    key: str
    noun: str
    department_label: str
    model: Type[Base]
    schema: Type[BaseModel]
    department: DepartmentSeed
    dashboard_path: str
    upsert_department: bool = False
    order_by: Tuple[Tuple[str, str], ...] = NEWEST_FIRST

    @property
    def department_id(self) -> str:
        return self.department.id

    @property
    def revalidation_paths(self) -> Tuple[str, str]:
        return (self.dashboard_path, "/dashboard")


def _config(key: str, department_id: str, **kwargs) -> EntityConfig:
    return EntityConfig(
        key=key,
        department=SEEDS_BY_ID[department_id],
        dashboard_path=f"/dashboard/{key}",
        **kwargs,
    )


ENTITY_CONFIGS = (
    _config(
        "adaptive-research", "arc",
        noun="Position",
        department_label="Adaptive Research",
        model=models.AdaptiveResearchPosition,
        schema=schemas.AdaptiveResearchPositionIn,
        order_by=(("order_number", ASC), ("created_at", DESC)),
    ),
    _config(
        "agri-engineering", "agri-eng",
        noun="Agricultural Engineering asset",
        department_label="Agricultural Engineering",
        model=models.AgriEngineeringAsset,
        schema=schemas.AgriEngineeringAssetIn,
    ),
    _config(
        "agri-extension", "agri-ext",
        noun="Extension asset",
        department_label="Agricultural Extension",
        model=models.AgriExtensionAsset,
        schema=schemas.AgriExtensionAssetIn,
    ),
    _config(
        "agronomy", "agronomy",
        noun="Agronomy equipment",
        department_label="Agronomy",
        model=models.AgronomyLabEquipment,
        schema=schemas.AgronomyLabEquipmentIn,
        order_by=(("display_order", ASC), ("created_at", DESC)),
    ),
    _config(
        "amri", "amri",
        noun="AMRI inventory item",
        department_label="AMRI",
        model=models.AMRIInventoryItem,
        schema=schemas.AMRIInventoryItemIn,
    ),
    _config(
        "cri", "cri",
        noun="CRI asset",
        department_label="CRI",
        model=models.CRIAsset,
        schema=schemas.CRIAssetIn,
    ),
    _config(
        "entomology", "erss",
        noun="Stock item",
        department_label="Entomology",
        model=models.ERSSStockItem,
        schema=schemas.ERSSStockItemIn,
        upsert_department=True,
    ),
    _config(
        "floriculture", "flori",
        noun="Floriculture asset",
        department_label="Floriculture",
        model=models.FloricultureAsset,
        schema=schemas.FloricultureAssetIn,
    ),
    _config(
        "food-science", "food-science",
        noun="Food Science equipment",
        department_label="Food Science",
        model=models.FoodScienceEquipment,
        schema=schemas.FoodScienceEquipmentIn,
        upsert_department=True,
    ),
    _config(
        "mnsuam", "mnsuam",
        noun="Facility",
        department_label="MNSUAM",
        model=models.MNSUAMFacility,
        schema=schemas.MNSUAMFacilityIn,
        order_by=(("display_order", ASC), ("created_at", DESC)),
    ),
    _config(
        "mri", "mri",
        noun="MRI asset",
        department_label="MRI",
        model=models.MRIAsset,
        schema=schemas.MRIAssetIn,
    ),
    _config(
        "pesticide", "pest",
        noun="Pesticide lab record",
        department_label="Pesticide QC",
        model=models.PesticideLabRecord,
        schema=schemas.PesticideLabRecordIn,
    ),
    _config(
        "raedc", "raedc",
        noun="RAEDC equipment",
        department_label="RAEDC",
        model=models.RAEDCEquipment,
        schema=schemas.RAEDCEquipmentIn,
    ),
    _config(
        "rari", "rari",
        noun="RARI asset",
        department_label="RARI",
        model=models.RARIAsset,
        schema=schemas.RARIAssetIn,
    ),
    _config(
        "soil-water", "soil-water",
        noun="Soil & Water project item",
        department_label="Soil & Water",
        model=models.SoilWaterProject,
        schema=schemas.SoilWaterProjectIn,
    ),
)

ENTITY_REGISTRY: Dict[str, EntityConfig] = {config.key: config for config in ENTITY_CONFIGS}


def get_entity_config(key: str) -> EntityConfig:
    """Look up a register by key; raises KeyError for unknown keys."""
    return ENTITY_REGISTRY[key]
