"""
Dashboard statistics service.

Views are computed from the equipment and maintenance tables on demand and
cached under the ``/dashboard`` view key, which every equipment, maintenance
and register mutation revalidates.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.cache import cached_view, store_view
from agri_inventory.core.config import settings
from agri_inventory.core.logging import logger
from agri_inventory.core.rbac import require_admin, require_session, scoped_department_id
from agri_inventory.models.department import Department
from agri_inventory.models.enums import EquipmentStatus
from agri_inventory.models.equipment import Equipment
from agri_inventory.schemas.equipment import EquipmentRead
from agri_inventory.schemas.stats import DashboardStats, DepartmentStatusBreakdown, TypeCount
from agri_inventory.schemas.user import SessionUser
from agri_inventory.services.maintenance import MaintenanceService

DASHBOARD_PATH = "/dashboard"

STATUS_FIELDS = {
    EquipmentStatus.AVAILABLE: "available_count",
    EquipmentStatus.IN_USE: "in_use_count",
    EquipmentStatus.NEEDS_REPAIR: "needs_repair_count",
    EquipmentStatus.DISCARDED: "discarded_count",
}


def _status_buckets(rows) -> Dict[str, int]:
    buckets = {field: 0 for field in STATUS_FIELDS.values()}
    for status, count in rows:
        buckets[STATUS_FIELDS[EquipmentStatus(status)]] += count
    return buckets


class StatsService:
    """Service class for dashboard statistics."""

    @staticmethod
    async def _compute(db: AsyncSession, department_id: Optional[str]) -> DashboardStats:
        def scoped(query):
            if department_id is not None:
                return query.where(Equipment.department_id == department_id)
            return query

        status_rows = await db.execute(
            scoped(select(Equipment.status, func.count(Equipment.id))).group_by(Equipment.status)
        )
        buckets = _status_buckets(status_rows.all())

        type_count = func.count(Equipment.id).label("count")
        type_rows = await db.execute(
            scoped(select(Equipment.type, type_count))
            .group_by(Equipment.type)
            .order_by(type_count.desc(), Equipment.type.asc())
        )

        recent = await db.execute(
            scoped(select(Equipment))
            .order_by(Equipment.created_at.desc())
            .limit(settings.inventory.recent_equipment_limit)
        )

        return DashboardStats(
            total_equipment=sum(buckets.values()),
            equipment_by_type=[TypeCount(type=type_, count=count) for type_, count in type_rows.all()],
            recent_equipment=[EquipmentRead.model_validate(item) for item in recent.scalars().all()],
            total_maintenance_cost=await MaintenanceService.sum_costs(db, department_id),
            department_id=department_id,
            **buckets,
        )

    @staticmethod
    async def _view(db: AsyncSession, department_id: Optional[str]) -> Dict[str, Any]:
        scope = department_id or "all"
        cached = await cached_view(DASHBOARD_PATH, scope)
        if cached is not None:
            logger.debug(f"Dashboard stats cache hit for scope {scope}")
            return cached

        view = (await StatsService._compute(db, department_id)).model_dump(by_alias=True, mode="json")
        await store_view(DASHBOARD_PATH, view, scope)
        return view

    @staticmethod
    async def get_dashboard_stats(
        db: AsyncSession,
        session: Optional[SessionUser],
        department_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Statistics for the caller's scope.

        Department heads always get their own department; admins get every
        department unless ``department_id`` narrows it.
        """
        session = require_session(session)
        scope = scoped_department_id(session, department_id)
        logger.info(f"Dashboard stats requested by {session.id} for {scope or 'all departments'}")
        return await StatsService._view(db, scope)

    @staticmethod
    async def get_all_departments_stats(db: AsyncSession, session: Optional[SessionUser]) -> Dict[str, Any]:
        """University-wide statistics, open to any signed-in user."""
        require_session(session)
        return await StatsService._view(db, None)

    @staticmethod
    async def get_department_breakdown(db: AsyncSession, session: Optional[SessionUser]) -> List[Dict[str, Any]]:
        """Per-department equipment counts by status (admin only)."""
        require_admin(session)
        cached = await cached_view(DASHBOARD_PATH, "breakdown")
        if cached is not None:
            return cached

        departments = await db.execute(select(Department.id, Department.name).order_by(Department.name.asc()))
        counts = await db.execute(
            select(Equipment.department_id, Equipment.status, func.count(Equipment.id))
            .group_by(Equipment.department_id, Equipment.status)
        )
        by_department: Dict[str, list] = {}
        for department_id, status, count in counts.all():
            by_department.setdefault(department_id, []).append((status, count))

        breakdown = []
        for department_id, name in departments.all():
            buckets = _status_buckets(by_department.get(department_id, []))
            breakdown.append(
                DepartmentStatusBreakdown(
                    department_id=department_id,
                    department_name=name,
                    total_equipment=sum(buckets.values()),
                    **buckets,
                ).model_dump(by_alias=True)
            )

        await store_view(DASHBOARD_PATH, breakdown, "breakdown")
        return breakdown
