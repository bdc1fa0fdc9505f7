"""
Pydantic schemas for dashboard statistics.
"""

from typing import List, Optional

from agri_inventory.schemas.common import CamelModel
from agri_inventory.schemas.equipment import EquipmentRead


class TypeCount(CamelModel):
    type: str
    count: int


class DashboardStats(CamelModel):
    """Counts, breakdowns and cost totals for one scope."""

    total_equipment: int
    available_count: int
    in_use_count: int
    needs_repair_count: int
    discarded_count: int
    equipment_by_type: List[TypeCount]
    recent_equipment: List[EquipmentRead]
    total_maintenance_cost: float
    department_id: Optional[str] = None


class DepartmentStatusBreakdown(CamelModel):
    department_id: str
    department_name: str
    total_equipment: int
    available_count: int
    in_use_count: int
    needs_repair_count: int
    discarded_count: int
