"""
Maintenance log endpoints.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.auth import get_session
from agri_inventory.core.errors import envelope_response, run_action
from agri_inventory.db.session import get_db
from agri_inventory.schemas.equipment import MaintenanceLogRead
from agri_inventory.schemas.user import SessionUser
from agri_inventory.services.maintenance import MaintenanceService
from agri_inventory.utils import to_schema

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_maintenance_log(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """
    Record maintenance on a piece of equipment.

    Args:
        payload: ``{equipmentId, date, cost, description}``
        db: Database session
        session: Caller's session

    Returns:
        Envelope with the created log
    """
    result = await run_action(
        MaintenanceService.create(db, session, payload),
        failure_message="An error occurred while adding the maintenance log",
        success_message="Maintenance log added successfully",
        serializer=to_schema(MaintenanceLogRead),
    )
    return envelope_response(result, status.HTTP_201_CREATED)


@router.get("/")
async def list_maintenance_logs(
    department_id: Optional[str] = Query(None, alias="departmentId"),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """All logs in the caller's scope with their total cost."""
    result = await run_action(
        MaintenanceService.list_all(db, session, department_id),
        failure_message="An error occurred while fetching maintenance logs",
    )
    return envelope_response(result)


@router.get("/equipment/{equipment_id}")
async def list_equipment_maintenance(
    equipment_id: str,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    result = await run_action(
        MaintenanceService.list_for_equipment(db, session, equipment_id),
        failure_message="An error occurred while fetching maintenance logs",
    )
    return envelope_response(result)


@router.delete("/{log_id}")
async def delete_maintenance_log(
    log_id: str,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    result = await run_action(
        MaintenanceService.delete(db, session, log_id),
        failure_message="An error occurred while deleting the maintenance log",
        success_message="Maintenance log deleted successfully",
        serializer=lambda deleted_id: {"id": deleted_id},
    )
    return envelope_response(result)
