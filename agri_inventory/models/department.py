"""
Department model.

Departments are the research institutes, labs and administrative wings that
own equipment, department-specific inventory records and users.
"""
from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from agri_inventory.models.base import Base, TimestampMixin


class Department(TimestampMixin, Base):
    """
    Department model representing a university department or institute.

    The id is a stable slug (e.g. "cri", "food-science") so configuration
    can refer to a department before it exists in the database.
    """

    __tablename__ = "departments"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    focal_person = Column(String(255), nullable=True)
    designation = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    logo = Column(String(500), nullable=True)

    users = relationship("User", back_populates="department", passive_deletes=True)
    equipment = relationship("Equipment", back_populates="department", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Department(id={self.id}, name='{self.name}')>"
