"""
Dashboard statistics endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.auth import get_session
from agri_inventory.core.errors import envelope_response, run_action
from agri_inventory.db.session import get_db
from agri_inventory.schemas.user import SessionUser
from agri_inventory.services.stats import StatsService

router = APIRouter()


@router.get("/stats")
async def get_dashboard_stats(
    department_id: Optional[str] = Query(None, alias="departmentId"),
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """
    Dashboard statistics for the caller's scope.

    Args:
        department_id: Optional department filter (admins only)
        db: Database session
        session: Caller's session

    Returns:
        Envelope with status counts, type breakdown, recent equipment and
        maintenance spend
    """
    result = await run_action(
        StatsService.get_dashboard_stats(db, session, department_id),
        failure_message="An error occurred while fetching dashboard statistics",
    )
    return envelope_response(result)


@router.get("/stats/all")
async def get_all_departments_stats(
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    result = await run_action(
        StatsService.get_all_departments_stats(db, session),
        failure_message="An error occurred while fetching dashboard statistics",
    )
    return envelope_response(result)


@router.get("/departments")
async def get_department_breakdown(
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """Per-department equipment counts by status (admin only)."""
    result = await run_action(
        StatsService.get_department_breakdown(db, session),
        failure_message="An error occurred while fetching department statistics",
    )
    return envelope_response(result)
