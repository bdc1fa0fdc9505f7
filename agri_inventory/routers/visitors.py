"""
Public visitor counter endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.errors import envelope_response, run_action
from agri_inventory.db.session import get_db
from agri_inventory.services.visitor import VisitorService

router = APIRouter()


def _count(value: int) -> dict:
    return {"count": value}


@router.get("/")
async def get_visitor_count(db: AsyncSession = Depends(get_db)):
    result = await run_action(
        VisitorService.get_count(db),
        failure_message="Failed to fetch visitor count",
        serializer=_count,
    )
    return envelope_response(result)


@router.post("/")
async def record_visit(db: AsyncSession = Depends(get_db)):
    result = await run_action(
        VisitorService.increment(db),
        failure_message="Failed to update visitor count",
        serializer=_count,
    )
    return envelope_response(result)
