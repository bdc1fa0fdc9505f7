"""
Seed command: ``python -m agri_inventory.db.seed``.

Creates missing tables, inserts or refreshes the reference departments and
creates the initial administrator from settings when no admin exists yet.
"""
import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.config import settings
from agri_inventory.core.logging import logger
from agri_inventory.db.session import AsyncSessionLocal, engine, init_models
from agri_inventory.models.enums import Role
from agri_inventory.models.user import User
from agri_inventory.services.department import DepartmentService
from agri_inventory.services.user import UserService


async def ensure_admin(db: AsyncSession) -> bool:
    """Create the configured admin unless an admin already exists; returns True when created."""
    result = await db.execute(select(User.id).where(User.role == Role.ADMIN).limit(1))
    if result.first() is not None:
        logger.info("Admin user already present; skipping")
        return False

    await UserService.create_admin(
        db,
        name=settings.seed_admin_name,
        email=settings.seed_admin_email,
        password=settings.seed_admin_password.get_secret_value(),
    )
    return True


async def seed() -> None:
    await init_models()
    async with AsyncSessionLocal() as db:
        departments = await DepartmentService.seed_reference_departments(db)
        logger.info(f"Seeded {len(departments)} departments")
        await ensure_admin(db)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
