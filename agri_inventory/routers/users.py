"""
User administration endpoints (admin only).
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.auth import get_session
from agri_inventory.core.errors import envelope_response, run_action
from agri_inventory.db.session import get_db
from agri_inventory.schemas.user import SessionUser, User
from agri_inventory.services.user import UserService
from agri_inventory.utils import to_schema

router = APIRouter()


@router.get("/")
async def list_users(
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """
    List all users with their departments.

    Args:
        db: Database session
        session: Caller's session

    Returns:
        Envelope with users ordered by name
    """
    result = await run_action(
        UserService.list_users(db, session),
        failure_message="An error occurred while fetching users",
        serializer=to_schema(User),
    )
    return envelope_response(result)


@router.put("/{user_id}/department")
async def update_user_department(
    user_id: str,
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """Assign a user to a department; ``departmentId: null`` unassigns."""
    result = await run_action(
        UserService.update_user_department(db, session, user_id, payload),
        failure_message="An error occurred while updating user department",
        success_message="User department updated successfully",
        serializer=to_schema(User),
    )
    return envelope_response(result)


@router.put("/{user_id}/role")
async def update_user_role(
    user_id: str,
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    result = await run_action(
        UserService.update_user_role(db, session, user_id, payload),
        failure_message="An error occurred while updating user role",
        success_message="User role updated successfully",
        serializer=to_schema(User),
    )
    return envelope_response(result)
