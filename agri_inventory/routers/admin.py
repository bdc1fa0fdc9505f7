"""
Administrative maintenance endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.auth import get_session
from agri_inventory.core.errors import envelope_response, run_action
from agri_inventory.db.session import get_db
from agri_inventory.schemas.user import SessionUser
from agri_inventory.services.department import DepartmentService

router = APIRouter()


@router.post("/seed-departments")
async def seed_departments(
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    """
    Insert or refresh the reference departments.

    Returns:
        Envelope with the number of departments seeded
    """
    result = await run_action(
        DepartmentService.seed_departments(db, session),
        failure_message="Failed to seed departments",
        success_message="Departments seeded successfully",
        serializer=lambda count: {"count": count},
    )
    return envelope_response(result)


@router.post("/seed-equipment")
async def seed_sample_equipment(
    db: AsyncSession = Depends(get_db),
    session: Optional[SessionUser] = Depends(get_session),
):
    result = await run_action(
        DepartmentService.seed_sample_equipment(db, session),
        failure_message="Equipment seeding failed",
        success_message="Equipment seeded successfully",
    )
    return envelope_response(result)
