"""
Service layer for department operations.

This module contains the business logic for department-related operations,
abstracting away the database operations from the API endpoints.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.cache import revalidate_paths
from agri_inventory.core.errors import ConflictError, NotFoundError
from agri_inventory.core.logging import logger
from agri_inventory.core.rbac import require_admin, require_session
from agri_inventory.db.seed_data import (
    DEPARTMENT_SEEDS,
    FOOD_SCIENCE_DEPARTMENT_NAME,
    FOOD_SCIENCE_FOCAL_PERSON,
    FOOD_SCIENCE_SAMPLE_EQUIPMENT,
)
from agri_inventory.models.department import Department
from agri_inventory.models.department_entities import FoodScienceEquipment
from agri_inventory.models.equipment import Equipment
from agri_inventory.models.user import User
from agri_inventory.schemas.department import DepartmentCreate
from agri_inventory.schemas.user import SessionUser
from agri_inventory.schemas.validation import validate_payload
from agri_inventory.services.registry import ENTITY_CONFIGS, get_entity_config
from agri_inventory.utils import slugify

DEPARTMENT_PATHS = ("/dashboard/admin/departments", "/dashboard")
DUPLICATE_NAME_MESSAGE = "A department with this name already exists"


class DepartmentService:
    """Service class for department operations."""

    @staticmethod
    async def get_by_id(db: AsyncSession, department_id: str) -> Optional[Department]:
        """
        Get a department by ID.

        Args:
            db: Database session
            department_id: Department ID

        Returns:
            Department if found, None otherwise
        """
        logger.debug(f"Getting department by ID: {department_id}")
        return await db.get(Department, department_id)

    @staticmethod
    async def get_by_name(db: AsyncSession, name: str) -> Optional[Department]:
        result = await db.execute(select(Department).where(Department.name == name))
        return result.scalars().first()

    @staticmethod
    async def require(db: AsyncSession, department_id: str, message: str = "Department not found") -> Department:
        department = await DepartmentService.get_by_id(db, department_id)
        if department is None:
            raise NotFoundError(message)
        return department

    @staticmethod
    async def _counts(db: AsyncSession, column) -> Dict[str, int]:
        result = await db.execute(select(column, func.count()).group_by(column))
        return {department_id: count for department_id, count in result.all() if department_id}

    @staticmethod
    async def list_departments(db: AsyncSession, session: Optional[SessionUser]) -> List[Dict[str, Any]]:
        """
        List all departments with their equipment and user counts.

        Args:
            db: Database session
            session: Caller's session

        Returns:
            Departments ordered by name
        """
        require_session(session)

        result = await db.execute(select(Department).order_by(Department.name.asc()))
        departments = result.scalars().all()
        equipment_counts = await DepartmentService._counts(db, Equipment.department_id)
        user_counts = await DepartmentService._counts(db, User.department_id)

        return [
            {
                "department": department,
                "equipment_count": equipment_counts.get(department.id, 0),
                "user_count": user_counts.get(department.id, 0),
            }
            for department in departments
        ]

    @staticmethod
    async def list_public(db: AsyncSession) -> List[Department]:
        """Departments offered on the signup form; needs no session."""
        result = await db.execute(select(Department).order_by(Department.name.asc()))
        return list(result.scalars().all())

    @staticmethod
    async def get_detail(db: AsyncSession, session: Optional[SessionUser], department_id: str) -> Dict[str, Any]:
        """
        Get a department with its users and most recent equipment (admin only).
        """
        require_admin(session)
        department = await DepartmentService.require(db, department_id)

        users = await db.execute(
            select(User).where(User.department_id == department_id).order_by(User.name.asc())
        )
        recent = await db.execute(
            select(Equipment)
            .where(Equipment.department_id == department_id)
            .order_by(Equipment.created_at.desc())
            .limit(10)
        )
        equipment_count = await db.scalar(
            select(func.count(Equipment.id)).where(Equipment.department_id == department_id)
        )
        return {
            "department": department,
            "users": list(users.scalars().all()),
            "recent_equipment": list(recent.scalars().all()),
            "equipment_count": equipment_count or 0,
        }

    @staticmethod
    async def _unique_id(db: AsyncSession, name: str) -> str:
        base = slugify(name)
        candidate, suffix = base, 2
        while await db.get(Department, candidate) is not None:
            candidate = f"{base[:60]}-{suffix}"
            suffix += 1
        return candidate

    @staticmethod
    async def create(db: AsyncSession, session: Optional[SessionUser], payload: Any) -> Department:
        """
        Create a new department (admin only).

        Args:
            db: Database session
            session: Caller's session
            payload: Raw request payload

        Returns:
            Created department

        Raises:
            ConflictError: If the name is already taken
        """
        admin = require_admin(session)
        values = validate_payload(DepartmentCreate, payload)
        logger.info(f"Creating new department: {values['name']} (requested by {admin.id})")

        if await DepartmentService.get_by_name(db, values["name"]):
            logger.warning(f"Department name already exists: {values['name']}")
            raise ConflictError(DUPLICATE_NAME_MESSAGE)

        department = Department(id=await DepartmentService._unique_id(db, values["name"]), **values)
        db.add(department)
        await db.commit()
        await db.refresh(department)

        await revalidate_paths(*DEPARTMENT_PATHS)
        logger.info(f"Created department with ID: {department.id}")
        return department

    @staticmethod
    async def update(db: AsyncSession, session: Optional[SessionUser], department_id: str, payload: Any) -> Department:
        """Patch a department (admin only); renaming onto another department's name conflicts."""
        require_admin(session)
        department = await DepartmentService.require(db, department_id)
        values = validate_payload(DepartmentCreate, payload, partial=True)

        new_name = values.get("name")
        if new_name and new_name != department.name:
            if await DepartmentService.get_by_name(db, new_name):
                raise ConflictError(DUPLICATE_NAME_MESSAGE)

        for field, value in values.items():
            setattr(department, field, value)
        await db.commit()
        await db.refresh(department)

        await revalidate_paths(*DEPARTMENT_PATHS)
        logger.info(f"Updated department {department_id}: {sorted(values)}")
        return department

    @staticmethod
    async def delete(db: AsyncSession, session: Optional[SessionUser], department_id: str) -> str:
        """
        Delete a department (admin only).

        A department that still owns equipment, users or register records is
        left untouched.

        Raises:
            NotFoundError: Unknown department
            ConflictError: Department still owns data
        """
        require_admin(session)
        department = await DepartmentService.require(db, department_id)

        equipment_count = await db.scalar(
            select(func.count(Equipment.id)).where(Equipment.department_id == department_id)
        )
        if equipment_count:
            raise ConflictError(
                f"Cannot delete department. It has {equipment_count} equipment records. "
                "Please reassign or delete the equipment first."
            )

        user_count = await db.scalar(
            select(func.count(User.id)).where(User.department_id == department_id)
        )
        if user_count:
            raise ConflictError(
                f"Cannot delete department. It has {user_count} assigned users. "
                "Please reassign the users first."
            )

        record_count = 0
        for config in ENTITY_CONFIGS:
            record_count += await db.scalar(
                select(func.count(config.model.id)).where(config.model.department_id == department_id)
            ) or 0
        if record_count:
            raise ConflictError(
                f"Cannot delete department. It has {record_count} inventory records. "
                "Please delete the records first."
            )

        await db.delete(department)
        await db.commit()

        await revalidate_paths(*DEPARTMENT_PATHS)
        logger.info(f"Deleted department {department_id}")
        return department_id

    @staticmethod
    async def seed_reference_departments(db: AsyncSession) -> List[Department]:
        """
        Insert or refresh the reference departments.

        Rows are matched by id, then by name, so departments created by hand
        under the same name are updated rather than duplicated.
        """
        seeded = []
        for seed in DEPARTMENT_SEEDS:
            department = await db.get(Department, seed.id) or await DepartmentService.get_by_name(db, seed.name)
            row = seed.as_row()
            if department is None:
                department = Department(**row)
                db.add(department)
                logger.info(f"Created department: {seed.name}")
            else:
                row.pop("id")
                for field, value in row.items():
                    setattr(department, field, value)
                logger.info(f"Updated department: {seed.name}")
            seeded.append(department)

        await db.commit()
        await revalidate_paths(*DEPARTMENT_PATHS)
        return seeded

    @staticmethod
    async def seed_departments(db: AsyncSession, session: Optional[SessionUser]) -> int:
        """Admin-triggered reference data refresh; returns the number of departments seeded."""
        require_admin(session)
        return len(await DepartmentService.seed_reference_departments(db))

    @staticmethod
    async def seed_sample_equipment(db: AsyncSession, session: Optional[SessionUser]) -> Dict[str, Any]:
        """
        Populate the Food Science lab register with its demo equipment.

        Items already present (same name in the department) are left alone, so
        the call can be repeated. Each item is reported as ``created`` or
        ``exists``.
        """
        require_admin(session)
        department = await DepartmentService.get_by_name(db, FOOD_SCIENCE_DEPARTMENT_NAME)
        if department is None:
            raise NotFoundError("Food Science department not found")

        existing = set(
            (
                await db.execute(
                    select(FoodScienceEquipment.name).where(FoodScienceEquipment.department_id == department.id)
                )
            ).scalars()
        )
        results = []
        for name, section in FOOD_SCIENCE_SAMPLE_EQUIPMENT:
            if name in existing:
                results.append({"action": "exists", "equipment": name})
                continue
            db.add(
                FoodScienceEquipment(
                    name=name,
                    type=section,
                    lab_section_name=section,
                    quantity=1,
                    focal_person=FOOD_SCIENCE_FOCAL_PERSON,
                    department_id=department.id,
                )
            )
            results.append({"action": "created", "equipment": name})

        await db.commit()
        created = sum(1 for result in results if result["action"] == "created")
        logger.info(f"Seeded {created} sample equipment records into {department.id}")

        if created:
            await revalidate_paths(*get_entity_config("food-science").revalidation_paths)
        return {"departmentId": department.id, "results": results}
