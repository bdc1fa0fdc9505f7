"""
Account management endpoints.

Self-service profile reads and updates for the signed-in user.
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


@router.get("/profile")
async def get_profile(
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """
    Get the signed-in user's profile.

    Args:
        db: Database session
        session: Caller's session

    Returns:
        Envelope with the user and their department
    """
    result = await run_action(
        UserService.get_profile(db, session),
        failure_message="An error occurred while fetching profile",
        serializer=to_schema(User),
    )
    return envelope_response(result)


@router.put("/profile")
async def update_profile(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    result = await run_action(
        UserService.update_profile(db, session, payload),
        failure_message="An error occurred while updating profile",
        success_message="Profile updated successfully",
        serializer=to_schema(User),
    )
    return envelope_response(result)


@router.post("/password")
async def change_password(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """Change password: ``{currentPassword, newPassword, confirmPassword}``."""
    result = await run_action(
        UserService.change_password(db, session, payload),
        failure_message="An error occurred while changing password",
        success_message="Password changed successfully",
    )
    return envelope_response(result)


@router.put("/profile/image")
async def update_profile_image(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    result = await run_action(
        UserService.update_profile_image(db, session, payload),
        failure_message="An error occurred while updating profile image",
        success_message="Profile image updated successfully",
        serializer=to_schema(User),
    )
    return envelope_response(result)
