"""
Service layer for maintenance logs.

Authorization always goes through the parent equipment's department.
Total cost is summed on every read and never stored.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.cache import revalidate_paths
from agri_inventory.core.errors import NotFoundError
from agri_inventory.core.logging import logger
from agri_inventory.core.rbac import authorize_department, require_session, scoped_department_id
from agri_inventory.models.equipment import Equipment, MaintenanceLog
from agri_inventory.schemas.equipment import MaintenanceLogCreate
from agri_inventory.schemas.user import SessionUser
from agri_inventory.schemas.validation import validate_payload
from agri_inventory.utils import serialize_record

MAINTENANCE_FORBIDDEN_MESSAGE = "Not authorized to manage maintenance for this equipment"


def _maintenance_paths(equipment_id: str) -> tuple:
    return (f"/dashboard/inventory/{equipment_id}", "/dashboard")


def total_cost(logs: List[MaintenanceLog]) -> float:
    return float(sum((Decimal(str(log.cost)) for log in logs), Decimal("0")))


class MaintenanceService:
    """Service class for maintenance log operations."""

    @staticmethod
    async def _equipment(db: AsyncSession, equipment_id: str) -> Equipment:
        equipment = await db.get(Equipment, equipment_id)
        if equipment is None:
            raise NotFoundError("Equipment not found")
        return equipment

    @staticmethod
    def _history(rows) -> Dict[str, Any]:
        logs, entries = [], []
        for log, equipment_name, department_id in rows:
            logs.append(log)
            entry = serialize_record(log)
            entry["equipmentName"] = equipment_name
            entry["departmentId"] = department_id
            entries.append(entry)
        return {"logs": entries, "totalCost": total_cost(logs)}

    @staticmethod
    async def create(db: AsyncSession, session: Optional[SessionUser], payload: Any) -> MaintenanceLog:
        """
        Record a maintenance event.

        Args:
            db: Database session
            session: Caller's session
            payload: Raw request payload

        Returns:
            The created log
        """
        session = require_session(session)
        values = validate_payload(MaintenanceLogCreate, payload)

        equipment = await MaintenanceService._equipment(db, values["equipment_id"])
        authorize_department(session, equipment.department_id, MAINTENANCE_FORBIDDEN_MESSAGE)

        log = MaintenanceLog(**values)
        db.add(log)
        await db.commit()
        await db.refresh(log)
        logger.info(f"Added maintenance log {log.id} to equipment {equipment.id} (cost {log.cost})")

        await revalidate_paths(*_maintenance_paths(equipment.id))
        return log

    @staticmethod
    async def list_for_equipment(db: AsyncSession, session: Optional[SessionUser], equipment_id: str) -> Dict[str, Any]:
        """
        Logs of one piece of equipment, newest first, with their total cost.
        """
        session = require_session(session)
        equipment = await MaintenanceService._equipment(db, equipment_id)
        authorize_department(session, equipment.department_id, MAINTENANCE_FORBIDDEN_MESSAGE)

        result = await db.execute(
            select(MaintenanceLog, Equipment.name, Equipment.department_id)
            .join(Equipment, MaintenanceLog.equipment_id == Equipment.id)
            .where(MaintenanceLog.equipment_id == equipment_id)
            .order_by(MaintenanceLog.date.desc(), MaintenanceLog.created_at.desc())
        )
        return MaintenanceService._history(result.all())

    @staticmethod
    async def list_all(
        db: AsyncSession,
        session: Optional[SessionUser],
        department_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Logs across every piece of equipment in the caller's scope, with their total cost."""
        session = require_session(session)
        scope = scoped_department_id(session, department_id)

        query = (
            select(MaintenanceLog, Equipment.name, Equipment.department_id)
            .join(Equipment, MaintenanceLog.equipment_id == Equipment.id)
        )
        if scope is not None:
            query = query.where(Equipment.department_id == scope)

        result = await db.execute(
            query.order_by(MaintenanceLog.date.desc(), MaintenanceLog.created_at.desc())
        )
        return MaintenanceService._history(result.all())

    @staticmethod
    async def sum_costs(db: AsyncSession, department_id: Optional[str] = None) -> float:
        """Total maintenance spend, optionally for one department."""
        query = select(func.coalesce(func.sum(MaintenanceLog.cost), 0))
        if department_id is not None:
            query = query.join(Equipment, MaintenanceLog.equipment_id == Equipment.id).where(
                Equipment.department_id == department_id
            )
        return float(await db.scalar(query) or 0)

    @staticmethod
    async def delete(db: AsyncSession, session: Optional[SessionUser], log_id: str) -> str:
        session = require_session(session)
        log = await db.get(MaintenanceLog, log_id)
        if log is None:
            raise NotFoundError("Maintenance log not found")

        equipment = await MaintenanceService._equipment(db, log.equipment_id)
        authorize_department(session, equipment.department_id, MAINTENANCE_FORBIDDEN_MESSAGE)

        await db.delete(log)
        await db.commit()
        logger.info(f"Deleted maintenance log {log_id} from equipment {equipment.id}")

        await revalidate_paths(*_maintenance_paths(equipment.id))
        return log_id
