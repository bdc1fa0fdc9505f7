"""
Department API endpoints.

This module provides CRUD endpoints for departments.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.auth import get_session
from agri_inventory.core.errors import envelope_response, run_action
from agri_inventory.db.session import get_db
from agri_inventory.schemas.department import (
    Department,
    DepartmentDetail,
    DepartmentEquipmentSummary,
    DepartmentMember,
    DepartmentWithCounts,
)
from agri_inventory.schemas.user import SessionUser
from agri_inventory.services.department import DepartmentService
from agri_inventory.utils import to_schema

router = APIRouter()


def _with_counts(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        DepartmentWithCounts(
            **Department.model_validate(entry["department"]).model_dump(),
            equipment_count=entry["equipment_count"],
            user_count=entry["user_count"],
        ).model_dump(by_alias=True)
        for entry in entries
    ]


def _detail(entry: Dict[str, Any]) -> Dict[str, Any]:
    return DepartmentDetail(
        **Department.model_validate(entry["department"]).model_dump(),
        users=[DepartmentMember.model_validate(user) for user in entry["users"]],
        recent_equipment=[DepartmentEquipmentSummary.model_validate(item) for item in entry["recent_equipment"]],
        equipment_count=entry["equipment_count"],
    ).model_dump(by_alias=True)


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_department(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """
    Create a new department.

    Args:
        payload: Department fields
        db: Database session
        session: Caller's session

    Returns:
        Envelope with the created department
    """
    result = await run_action(
        DepartmentService.create(db, session, payload),
        failure_message="An error occurred while creating the department",
        success_message="Department created successfully",
        serializer=to_schema(Department),
    )
    return envelope_response(result, status.HTTP_201_CREATED)


@router.get("/")
async def list_departments(
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """All departments with equipment and user counts."""
    result = await run_action(
        DepartmentService.list_departments(db, session),
        failure_message="An error occurred while fetching departments",
        serializer=_with_counts,
    )
    return envelope_response(result)


@router.get("/{department_id}")
async def get_department(
    department_id: str,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """
    Get a department with its users and most recent equipment.

    Args:
        department_id: Department ID
        db: Database session
        session: Caller's session

    Returns:
        Envelope with department details
    """
    result = await run_action(
        DepartmentService.get_detail(db, session, department_id),
        failure_message="An error occurred while fetching the department",
        serializer=_detail,
    )
    return envelope_response(result)


@router.put("/{department_id}")
async def update_department(
    department_id: str,
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    result = await run_action(
        DepartmentService.update(db, session, department_id, payload),
        failure_message="An error occurred while updating the department",
        success_message="Department updated successfully",
        serializer=to_schema(Department),
    )
    return envelope_response(result)


@router.delete("/{department_id}")
async def delete_department(
    department_id: str,
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """Delete a department that no longer owns equipment, users or records."""
    result = await run_action(
        DepartmentService.delete(db, session, department_id),
        failure_message="An error occurred while deleting the department",
        success_message="Department deleted successfully",
        serializer=lambda deleted_id: {"id": deleted_id},
    )
    return envelope_response(result)
