# rbac.py
"""
Role-based access control.

Two roles exist. ADMIN acts on any department; DEPT_HEAD acts only on the
department it is assigned to. Every scoped operation runs the same guard:
session present, target department resolved, department scope checked.
"""
from dataclasses import dataclass
from typing import Optional

from agri_inventory.core.errors import ForbiddenError, UnauthorizedError
from agri_inventory.core.logging import logger
from agri_inventory.models.department import Department
from agri_inventory.models.enums import Role
from agri_inventory.schemas.user import SessionUser

ADMIN_REQUIRED_MESSAGE = "Access denied. Admin privileges required."
UNASSIGNED_HEAD_MESSAGE = "Department head must be assigned to a department"


class ResourcePolicy:
    """Resource-based access control policies."""

    @staticmethod
    def can_access_department(user_role: Role, user_department_id: Optional[str], target_department_id: str) -> bool:
        """
        Check if a user can act on records of a department.

        Args:
            user_role: User's role
            user_department_id: User's assigned department ID
            target_department_id: Target department ID

        Returns:
            True if access is allowed
        """
        if user_role == Role.ADMIN:
            return True
        if user_role == Role.DEPT_HEAD:
            return user_department_id is not None and user_department_id == target_department_id
        return False

    @staticmethod
    def can_change_role(current_user_id: str, target_user_id: str) -> bool:
        """Admins cannot demote or promote themselves."""
        return current_user_id != target_user_id


@dataclass(frozen=True)
class AccessContext:
    """Request-scoped pair of the caller's session and the resolved department."""

    session: SessionUser
    department: Department

    @property
    def department_id(self) -> str:
        return self.department.id


def require_session(session: Optional[SessionUser]) -> SessionUser:
    """Raise Unauthorized when no one is logged in."""
    if session is None:
        raise UnauthorizedError()
    return session


def require_admin(session: Optional[SessionUser]) -> SessionUser:
    session = require_session(session)
    if session.role != Role.ADMIN:
        logger.warning(f"Admin-only action refused for user {session.id}")
        raise ForbiddenError(ADMIN_REQUIRED_MESSAGE)
    return session


def authorize_department(
    session: SessionUser,
    department_id: str,
    message: Optional[str] = None,
) -> None:
    """
    Enforce department scope for ``session``.

    Args:
        session: Caller's session
        department_id: Department owning the target record(s)
        message: Optional Forbidden message

    Raises:
        ForbiddenError: DEPT_HEAD outside its own department
    """
    if not ResourcePolicy.can_access_department(session.role, session.department_id, department_id):
        logger.warning(
            f"User {session.id} ({session.role.value}, department={session.department_id}) "
            f"denied access to department {department_id}"
        )
        raise ForbiddenError(message)


def scoped_department_id(session: SessionUser, requested: Optional[str] = None) -> Optional[str]:
    """
    Department filter to apply for a read in the caller's scope.

    ADMIN gets the optional ``requested`` filter (None means every
    department). DEPT_HEAD is always pinned to its own department.
    """
    if session.role == Role.ADMIN:
        return requested
    if not session.department_id:
        raise ForbiddenError(UNASSIGNED_HEAD_MESSAGE)
    return session.department_id
