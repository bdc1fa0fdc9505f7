"""
Department register endpoints.

``build_entity_router`` turns one ``EntityConfig`` into a CRUD router backed
by the generic repository. ``main`` mounts one per register under
``/api/entities/<key>``.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.auth import get_session
from agri_inventory.core.errors import envelope_response, run_action
from agri_inventory.core.rbac import require_session
from agri_inventory.db.session import get_db
from agri_inventory.schemas.department import Department
from agri_inventory.schemas.user import SessionUser
from agri_inventory.services.registry import ENTITY_CONFIGS, EntityConfig
from agri_inventory.services.repository import DepartmentEntityRepository
from agri_inventory.utils import serialize_record, to_schema


def _serialize_many(records):
    return [serialize_record(record) for record in records]


def build_entity_router(config: EntityConfig) -> APIRouter:
    """
    Build the CRUD router of one department register.

    Args:
        config: Register configuration

    Returns:
        Router exposing list, browse, department, get, create, update and delete
    """
    router = APIRouter()
    repository = DepartmentEntityRepository(config)
    noun = config.noun

    async def owning_department(db: AsyncSession, session: Optional[SessionUser]):
        require_session(session)
        return await repository.resolve_department(db)

    @router.get("/")
    async def list_records(
        db: AsyncSession = Depends(get_db),
        session: Optional[SessionUser] = Depends(get_session),
    ):
        result = await run_action(
            repository.get_all(db, session),
            failure_message=f"Failed to fetch {config.department_label} records",
            serializer=_serialize_many,
        )
        return envelope_response(result)

    @router.get("/department")
    async def get_owning_department(
        db: AsyncSession = Depends(get_db),
        session: Optional[SessionUser] = Depends(get_session),
    ):
        result = await run_action(
            owning_department(db, session),
            failure_message=f"Failed to fetch {config.department_label} department",
            serializer=to_schema(Department),
        )
        return envelope_response(result)

    @router.get("/browse")
    async def browse_records(
        db: AsyncSession = Depends(get_db),
        session: Optional[SessionUser] = Depends(get_session),
    ):
        result = await run_action(
            repository.browse(db, session),
            failure_message=f"Failed to fetch {config.department_label} records",
            serializer=_serialize_many,
        )
        return envelope_response(result)

    @router.get("/{record_id}")
    async def get_record(
        record_id: str,
        db: AsyncSession = Depends(get_db),
        session: Optional[SessionUser] = Depends(get_session),
    ):
        result = await run_action(
            repository.get_by_id(db, session, record_id),
            failure_message=f"Failed to fetch {noun}",
            serializer=serialize_record,
        )
        return envelope_response(result)

    @router.post("/", status_code=status.HTTP_201_CREATED)
    async def create_record(
        payload: Dict[str, Any] = Body(...),
        db: AsyncSession = Depends(get_db),
        session: Optional[SessionUser] = Depends(get_session),
    ):
        result = await run_action(
            repository.create(db, session, payload),
            failure_message=f"Failed to create {noun}",
            success_message=f"{noun} created successfully",
            serializer=serialize_record,
        )
        return envelope_response(result, status.HTTP_201_CREATED)

    @router.put("/{record_id}")
    async def update_record(
        record_id: str,
        payload: Dict[str, Any] = Body(...),
        db: AsyncSession = Depends(get_db),
        session: Optional[SessionUser] = Depends(get_session),
    ):
        result = await run_action(
            repository.update(db, session, record_id, payload),
            failure_message=f"Failed to update {noun}",
            success_message=f"{noun} updated successfully",
            serializer=serialize_record,
        )
        return envelope_response(result)

    @router.delete("/{record_id}")
    async def delete_record(
        record_id: str,
        db: AsyncSession = Depends(get_db),
        session: Optional[SessionUser] = Depends(get_session),
    ):
        result = await run_action(
            repository.delete(db, session, record_id),
            failure_message=f"Failed to delete {noun}",
            success_message=f"{noun} deleted successfully",
            serializer=lambda deleted_id: {"id": deleted_id},
        )
        return envelope_response(result)

    return router


def entity_routers():
    """Yield ``(config, router)`` for every registered department register."""
    for config in ENTITY_CONFIGS:
        yield config, build_entity_router(config)
