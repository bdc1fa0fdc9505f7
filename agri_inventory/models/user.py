"""
User model for authentication and authorization.
"""
from sqlalchemy import Column, Enum, ForeignKey, String
from sqlalchemy.orm import relationship

from agri_inventory.models.base import Base, TimestampMixin, generate_id
from agri_inventory.models.enums import Role


class User(TimestampMixin, Base):
    """
    User model representing system users.

    Users are either administrators or heads of a single department and
    are authenticated using JWT tokens.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(Enum(Role, name="user_role"), nullable=False, default=Role.DEPT_HEAD)
    image = Column(String(500), nullable=True)

    department_id = Column(
        String(64),
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    department = relationship("Department", back_populates="users", lazy="selectin")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
