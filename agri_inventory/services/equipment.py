"""
Service layer for equipment operations.

Equipment belongs to exactly one department. Department heads create, edit,
read and delete only their own department's equipment; admins act anywhere.
"""

from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.cache import revalidate_paths
from agri_inventory.core.errors import ForbiddenError, NotFoundError
from agri_inventory.core.logging import logger
from agri_inventory.core.rbac import (
    UNASSIGNED_HEAD_MESSAGE,
    authorize_department,
    require_session,
    scoped_department_id,
)
from agri_inventory.models.department import Department
from agri_inventory.models.enums import EquipmentStatus, Role
from agri_inventory.models.equipment import Equipment
from agri_inventory.schemas.equipment import EquipmentCreate
from agri_inventory.schemas.user import SessionUser
from agri_inventory.schemas.validation import validate_payload
from agri_inventory.services.department import DepartmentService

INVENTORY_PATHS = ("/dashboard", "/dashboard/inventory")
FOREIGN_CREATE_MESSAGE = "You can only add equipment to your own department"


def equipment_paths(equipment_id: str) -> tuple:
    return INVENTORY_PATHS + (f"/dashboard/inventory/{equipment_id}",)


class EquipmentService:
    """Service class for equipment operations."""

    @staticmethod
    async def _fetch(db: AsyncSession, equipment_id: str) -> Equipment:
        result = await db.execute(
            select(Equipment)
            .where(Equipment.id == equipment_id)
            .execution_options(populate_existing=True)
        )
        equipment = result.scalars().first()
        if equipment is None:
            raise NotFoundError("Equipment not found")
        return equipment

    @staticmethod
    async def create(db: AsyncSession, session: Optional[SessionUser], payload: Any) -> Equipment:
        """
        Create a new piece of equipment.

        Args:
            db: Database session
            session: Caller's session
            payload: Raw request payload including ``departmentId``

        Returns:
            Created equipment with its department loaded
        """
        session = require_session(session)
        if session.role == Role.DEPT_HEAD and not session.department_id:
            raise ForbiddenError(UNASSIGNED_HEAD_MESSAGE)

        requested = payload.get("departmentId") if isinstance(payload, dict) else None
        if isinstance(requested, str) and requested:
            authorize_department(session, requested, FOREIGN_CREATE_MESSAGE)

        values = validate_payload(EquipmentCreate, payload)
        authorize_department(session, values["department_id"], FOREIGN_CREATE_MESSAGE)
        await DepartmentService.require(db, values["department_id"], "Invalid department selected")

        equipment = Equipment(**values)
        db.add(equipment)
        await db.commit()
        logger.info(f"Created equipment {equipment.id} ({equipment.name}) in {equipment.department_id}")

        await revalidate_paths(*INVENTORY_PATHS)
        return await EquipmentService._fetch(db, equipment.id)

    @staticmethod
    async def get_by_id(db: AsyncSession, session: Optional[SessionUser], equipment_id: str) -> Equipment:
        """
        Get equipment with its department and maintenance history.

        Department heads only see their own department's equipment.
        """
        session = require_session(session)
        equipment = await EquipmentService._fetch(db, equipment_id)
        authorize_department(session, equipment.department_id, "You don't have access to this equipment")
        return equipment

    @staticmethod
    async def get_all(
        db: AsyncSession,
        session: Optional[SessionUser],
        status: Optional[EquipmentStatus] = None,
        equipment_type: Optional[str] = None,
        search: Optional[str] = None,
        department_id: Optional[str] = None,
    ) -> List[Equipment]:
        """
        List equipment in the caller's scope.

        Args:
            db: Database session
            session: Caller's session
            status: Optional status filter
            equipment_type: Optional exact type filter
            search: Optional case-insensitive name search
            department_id: Optional department filter (admins only)

        Returns:
            Matching equipment, newest first
        """
        session = require_session(session)
        scope = scoped_department_id(session, department_id)

        query = select(Equipment)
        if scope is not None:
            query = query.where(Equipment.department_id == scope)
        if status is not None:
            query = query.where(Equipment.status == status)
        if equipment_type:
            query = query.where(Equipment.type == equipment_type)
        if search:
            query = query.where(Equipment.name.ilike(f"%{search.strip()}%"))

        result = await db.execute(query.order_by(Equipment.created_at.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def get_all_departments(db: AsyncSession, session: Optional[SessionUser]) -> List[Equipment]:
        """Every department's equipment, for cross-department browsing by any user."""
        require_session(session)
        result = await db.execute(
            select(Equipment)
            .join(Department, Equipment.department_id == Department.id)
            .order_by(Department.name.asc(), Equipment.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def update(db: AsyncSession, session: Optional[SessionUser], equipment_id: str, payload: Any) -> Equipment:
        """
        Patch the supplied fields of a piece of equipment.

        Department heads may not move equipment to another department. An
        omitted or empty ``imageUrl`` keeps the current image.
        """
        session = require_session(session)
        equipment = await EquipmentService._fetch(db, equipment_id)
        authorize_department(session, equipment.department_id, "You can only edit your own department's equipment")

        values = validate_payload(EquipmentCreate, payload, partial=True)
        if "image_url" in values and not values["image_url"]:
            del values["image_url"]
        new_department_id = values.get("department_id")
        if new_department_id and new_department_id != equipment.department_id:
            if session.role != Role.ADMIN:
                raise ForbiddenError("You cannot transfer equipment to another department")
            await DepartmentService.require(db, new_department_id, "Invalid department selected")

        for field, value in values.items():
            setattr(equipment, field, value)
        await db.commit()
        logger.info(f"Updated equipment {equipment_id}: {sorted(values)}")

        await revalidate_paths(*equipment_paths(equipment_id))
        return await EquipmentService._fetch(db, equipment_id)

    @staticmethod
    async def delete(db: AsyncSession, session: Optional[SessionUser], equipment_id: str) -> str:
        """Delete equipment together with its maintenance logs."""
        session = require_session(session)
        equipment = await EquipmentService._fetch(db, equipment_id)
        authorize_department(session, equipment.department_id, "You can only delete your own department's equipment")

        await db.delete(equipment)
        await db.commit()
        logger.info(f"Deleted equipment {equipment_id} by user {session.id}")

        await revalidate_paths(*equipment_paths(equipment_id))
        return equipment_id
