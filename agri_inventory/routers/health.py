"""
Liveness and dependency checks for the load balancer.
"""

from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.cache import check_redis_connection, redis_client
from agri_inventory.core.logging import logger
from agri_inventory.db.session import get_db

router = APIRouter()

HealthStatus = Dict[str, str]


@router.get("/", response_model=HealthStatus)
async def liveness() -> HealthStatus:
    return {"status": "ok"}


@router.get("/db", response_model=HealthStatus)
async def database_check(db: AsyncSession = Depends(get_db)) -> HealthStatus:
    """Round-trip ``SELECT 1`` through the pool."""
    try:
        value = await db.scalar(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(f"Database health check failed: {exc}")
        return {"status": "error", "database": "connection_error"}

    if value != 1:
        logger.error(f"Database health check returned {value!r}")
        return {"status": "error", "database": "unexpected_result"}
    return {"status": "ok", "database": "connected"}


@router.get("/cache", response_model=HealthStatus)
async def cache_check() -> HealthStatus:
    if redis_client is None:
        return {"status": "ok", "cache": "disabled"}
    reachable = await check_redis_connection()
    return {"status": "ok" if reachable else "error", "cache": "connected" if reachable else "unreachable"}
