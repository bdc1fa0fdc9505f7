"""
Generic department-scoped repository.

One implementation serves every register in ``services.registry``. Each
operation follows the same sequence: session check, department resolution,
department scope check, payload validation, store call, revalidation.
"""

from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.cache import revalidate_paths
from agri_inventory.core.config import settings
from agri_inventory.core.errors import NotFoundError
from agri_inventory.core.logging import logger
from agri_inventory.core.rbac import AccessContext, authorize_department, require_session
from agri_inventory.models.department import Department
from agri_inventory.schemas.user import SessionUser
from agri_inventory.schemas.validation import validate_payload
from agri_inventory.services.registry import ASC, EntityConfig


class DepartmentEntityRepository:
    """CRUD surface for one department register."""

    def __init__(self, config: EntityConfig):
        self.config = config
        self.model = config.model

    def __repr__(self) -> str:
        return f"<DepartmentEntityRepository(key={self.config.key})>"

    async def find_department(self, db: AsyncSession) -> Optional[Department]:
        department = await db.get(Department, self.config.department_id)
        if department is not None or not self.config.upsert_department:
            return department

        # A department with the same name but another id may predate the slug
        result = await db.execute(
            select(Department).where(Department.name == self.config.department.name)
        )
        return result.scalars().first()

    async def resolve_department(self, db: AsyncSession) -> Department:
        """
        Find the owning department, creating it first when configured to.

        Raises:
            NotFoundError: When the department does not exist and is not upserted
        """
        department = await self.find_department(db)
        if department is not None:
            return department

        if not self.config.upsert_department:
            raise NotFoundError(f"{self.config.department_label} department not found")

        logger.info(f"Creating department {self.config.department_id} on first use")
        department = Department(**self.config.department.as_row())
        db.add(department)
        await db.commit()
        return department

    async def access(self, db: AsyncSession, session: Optional[SessionUser]) -> AccessContext:
        """Run the authorization guard and return the request context."""
        session = require_session(session)
        department = await self.resolve_department(db)
        authorize_department(
            session,
            department.id,
            f"Not authorized to manage {self.config.department_label} records",
        )
        return AccessContext(session=session, department=department)

    def _ordering(self) -> List[Any]:
        clauses = []
        for column_name, direction in self.config.order_by:
            column = getattr(self.model, column_name)
            clauses.append(column.asc().nulls_last() if direction == ASC else column.desc())
        return clauses

    async def _fetch(self, db: AsyncSession, record_id: str):
        result = await db.execute(
            select(self.model)
            .where(self.model.id == record_id)
            .execution_options(populate_existing=True)
        )
        record = result.scalars().first()
        if record is None:
            raise NotFoundError(f"{self.config.noun} not found")
        return record

    async def get_all(self, db: AsyncSession, session: Optional[SessionUser]) -> List[Any]:
        """
        List the register's records in configured order.

        Args:
            db: Database session
            session: Caller's session

        Returns:
            Records of the owning department
        """
        context = await self.access(db, session)
        result = await db.execute(
            select(self.model)
            .where(self.model.department_id == context.department_id)
            .order_by(*self._ordering())
        )
        records = list(result.scalars().all())
        logger.debug(f"Listed {len(records)} {self.config.key} records")
        return records

    async def browse(self, db: AsyncSession, session: Optional[SessionUser]) -> List[Any]:
        """
        Read-only listing for any signed-in user, whatever their department.

        Backs the public department pages. Nothing is created here: a register
        whose department does not exist yet lists as empty.
        """
        require_session(session)
        department = await self.find_department(db)
        if department is None:
            return []
        result = await db.execute(
            select(self.model)
            .where(self.model.department_id == department.id)
            .order_by(*self._ordering())
        )
        return list(result.scalars().all())

    async def get_by_id(self, db: AsyncSession, session: Optional[SessionUser], record_id: str):
        """
        Get one record.

        Department scope on this read is governed by
        ``settings.inventory.enforce_scope_on_record_reads``.
        """
        session = require_session(session)
        record = await self._fetch(db, record_id)
        if settings.inventory.enforce_scope_on_record_reads:
            authorize_department(session, record.department_id)
        return record

    async def create(self, db: AsyncSession, session: Optional[SessionUser], payload: Any):
        """
        Validate and insert a record for the owning department.

        Args:
            db: Database session
            session: Caller's session
            payload: Raw request payload

        Returns:
            The created record with its department loaded
        """
        context = await self.access(db, session)
        values = validate_payload(self.config.schema, payload)

        record = self.model(**values, department_id=context.department_id)
        db.add(record)
        await db.commit()
        logger.info(f"Created {self.config.key} record {record.id} by user {context.session.id}")

        await revalidate_paths(*self.config.revalidation_paths)
        return await self._fetch(db, record.id)

    async def update(self, db: AsyncSession, session: Optional[SessionUser], record_id: str, payload: Any):
        """
        Patch the supplied fields of an existing record.

        Only keys present in ``payload`` are validated and written.
        """
        context = await self.access(db, session)
        record = await self._fetch(db, record_id)
        authorize_department(context.session, record.department_id)

        values = validate_payload(self.config.schema, payload, partial=True)
        for field, value in values.items():
            setattr(record, field, value)
        await db.commit()
        logger.info(f"Updated {self.config.key} record {record_id}: {sorted(values)}")

        await revalidate_paths(*self.config.revalidation_paths)
        return await self._fetch(db, record_id)

    async def delete(self, db: AsyncSession, session: Optional[SessionUser], record_id: str) -> str:
        context = await self.access(db, session)
        record = await self._fetch(db, record_id)
        authorize_department(context.session, record.department_id)

        await db.delete(record)
        await db.commit()
        logger.info(f"Deleted {self.config.key} record {record_id} by user {context.session.id}")

        await revalidate_paths(*self.config.revalidation_paths)
        return record_id
