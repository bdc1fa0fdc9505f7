"""
Visitor counter for the public landing page.
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.logging import logger
from agri_inventory.models.visitor import VisitorCounter


class VisitorService:
    """Read and bump the single visitor counter row, creating it on first use."""

    @staticmethod
    async def _counter(db: AsyncSession) -> VisitorCounter:
        result = await db.execute(select(VisitorCounter).order_by(VisitorCounter.id).limit(1))
        counter = result.scalars().first()
        if counter is None:
            counter = VisitorCounter(count=0)
            db.add(counter)
            await db.flush()
            logger.info("Created visitor counter")
        return counter

    @staticmethod
    async def get_count(db: AsyncSession) -> int:
        counter = await VisitorService._counter(db)
        await db.commit()
        return counter.count

    @staticmethod
    async def increment(db: AsyncSession) -> int:
        """Count one visit and return the new total."""
        counter = await VisitorService._counter(db)
        # Incremented in SQL so concurrent visits are not lost
        await db.execute(
            update(VisitorCounter)
            .where(VisitorCounter.id == counter.id)
            .values(count=VisitorCounter.count + 1)
        )
        await db.commit()
        await db.refresh(counter)
        return counter.count
