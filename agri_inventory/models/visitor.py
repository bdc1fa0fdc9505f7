"""
Site-wide visitor counter.
"""
from sqlalchemy import Column, Integer

from agri_inventory.models.base import Base, TimestampMixin


class VisitorCounter(TimestampMixin, Base):
    """Single-row table holding the public site's visit count."""

    __tablename__ = "visitor_counters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    count = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<VisitorCounter(count={self.count})>"
