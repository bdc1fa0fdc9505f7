"""
Generic cross-department equipment and its maintenance history.
"""
from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from agri_inventory.models.base import Base, DepartmentOwnedMixin, generate_id, status_column


class Equipment(DepartmentOwnedMixin, Base):
    """A tracked piece of equipment owned by one department."""

    __tablename__ = "equipment"

    name = Column(String(255), nullable=False, index=True)
    type = Column(String(100), nullable=False, index=True)
    status = status_column()
    purchase_date = Column(Date, nullable=False)
    image_url = Column(String(500), nullable=True)

    department = relationship("Department", back_populates="equipment", lazy="selectin")
    maintenance_logs = relationship(
        "MaintenanceLog",
        back_populates="equipment",
        cascade="all, delete-orphan",
        order_by="MaintenanceLog.date.desc()",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Equipment(id={self.id}, name='{self.name}', status={self.status})>"


class MaintenanceLog(Base):
    """
    A maintenance event on a piece of equipment.

    Costs are summed at read time; no running total is stored.
    """

    __tablename__ = "maintenance_logs"

    id = Column(String(36), primary_key=True, default=generate_id)
    equipment_id = Column(
        String(36),
        ForeignKey("equipment.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date = Column(Date, nullable=False)
    cost = Column(Numeric(12, 2), nullable=False, default=0)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    equipment = relationship("Equipment", back_populates="maintenance_logs")
