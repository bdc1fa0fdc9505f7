"""
Service layer for user operations.

This module contains the business logic for authentication, signup,
user administration and self-service profile management.
"""

from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agri_inventory.core.cache import revalidate_paths
from agri_inventory.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError, ValidationFailedError
from agri_inventory.core.logging import logger
from agri_inventory.core.rbac import ResourcePolicy, require_admin, require_session
from agri_inventory.core.security import PasswordManager, get_password_hash, verify_password
from agri_inventory.models.enums import Role
from agri_inventory.models.user import User
from agri_inventory.schemas.user import (
    LoginRequest,
    PasswordChange,
    ProfileImageUpdate,
    ProfileUpdate,
    SessionUser,
    UserCreate,
    UserDepartmentUpdate,
    UserRoleUpdate,
)
from agri_inventory.schemas.validation import validate_payload
from agri_inventory.services.department import DepartmentService

ADMIN_USERS_PATH = "/dashboard/admin/users"
PROFILE_PATHS = ("/dashboard/settings", "/dashboard")
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class UserService:
    """Service class for user operations."""

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[User]:
        """
        Get a user by email, ignoring case.

        Args:
            db: Database session
            email: Email address

        Returns:
            User if found, None otherwise
        """
        result = await db.execute(select(User).where(func.lower(User.email) == email.strip().lower()))
        return result.scalars().first()

    @staticmethod
    async def _require_user(db: AsyncSession, user_id: str) -> User:
        result = await db.execute(
            select(User).where(User.id == user_id).execution_options(populate_existing=True)
        )
        user = result.scalars().first()
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    async def authenticate(db: AsyncSession, email: str, password: str) -> User:
        """
        Check a user's credentials.

        Args:
            db: Database session
            email: Email
            password: Password

        Returns:
            The authenticated user

        Raises:
            UnauthorizedError: Unknown email or wrong password
        """
        user = await UserService.get_by_email(db, email)
        if not user:
            logger.warning(f"Authentication failed: User not found - {email}")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        if not verify_password(password, user.password):
            logger.warning(f"Authentication failed: Invalid password for user - {email}")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        logger.info(f"User authenticated: {user.id} ({user.role.value})")
        return user

    @staticmethod
    async def login(db: AsyncSession, payload: Any) -> User:
        """Validate a JSON login payload, then authenticate it."""
        try:
            values = validate_payload(LoginRequest, payload)
        except ValidationFailedError as exc:
            raise ValidationFailedError(exc.field_errors, "Invalid email or password format") from exc
        return await UserService.authenticate(db, values["email"], values["password"])

    @staticmethod
    async def register(db: AsyncSession, payload: Any) -> User:
        """
        Self-service signup of a department head.

        Raises:
            ValidationFailedError: Invalid payload or weak password
            ConflictError: Email already registered
            NotFoundError: Unknown department
        """
        values = validate_payload(UserCreate, payload)
        email = values["email"].lower()
        logger.info(f"Registration attempt for email: {email}")

        problems = PasswordManager.password_problems(values["password"])
        if problems:
            raise ValidationFailedError({"password": problems})

        if await UserService.get_by_email(db, email):
            logger.warning(f"Registration failed: Email already exists - {email}")
            raise ConflictError("User with this email already exists")

        await DepartmentService.require(db, values["department_id"], "Invalid department selected")

        user = User(
            name=values["name"],
            email=email,
            password=get_password_hash(values["password"]),
            role=Role.DEPT_HEAD,
            department_id=values["department_id"],
        )
        db.add(user)
        await db.commit()
        logger.info(f"User registered successfully: {user.id} in {user.department_id}")

        await revalidate_paths(ADMIN_USERS_PATH)
        return await UserService._require_user(db, user.id)

    @staticmethod
    async def create_admin(db: AsyncSession, name: str, email: str, password: str) -> User:
        """Create an administrator account; used by the seed command."""
        user = User(name=name, email=email.lower(), password=get_password_hash(password), role=Role.ADMIN)
        db.add(user)
        await db.commit()
        await db.refresh(user)
        logger.info(f"Created admin user {user.email}")
        return user

    @staticmethod
    async def list_users(db: AsyncSession, session: Optional[SessionUser]) -> List[User]:
        """Every user ordered by name, with their department (admin only)."""
        require_admin(session)
        result = await db.execute(select(User).order_by(User.name.asc(), User.email.asc()))
        return list(result.scalars().all())

    @staticmethod
    async def update_user_department(
        db: AsyncSession,
        session: Optional[SessionUser],
        user_id: str,
        payload: Any,
    ) -> User:
        """
        Assign a user to a department, or unassign with ``departmentId: null``.
        """
        admin = require_admin(session)
        user = await UserService._require_user(db, user_id)
        values = validate_payload(UserDepartmentUpdate, payload)

        department_id = values["department_id"] or None
        if department_id is not None:
            await DepartmentService.require(db, department_id, "Invalid department selected")

        user.department_id = department_id
        await db.commit()
        logger.info(f"User {user_id} moved to department {department_id} by {admin.id}")

        await revalidate_paths(ADMIN_USERS_PATH)
        return await UserService._require_user(db, user_id)

    @staticmethod
    async def update_user_role(
        db: AsyncSession,
        session: Optional[SessionUser],
        user_id: str,
        payload: Any,
    ) -> User:
        """
        Change a user's role (admin only).

        Raises:
            ForbiddenError: An admin changing their own role
        """
        admin = require_admin(session)
        user = await UserService._require_user(db, user_id)
        values = validate_payload(UserRoleUpdate, payload)

        if not ResourcePolicy.can_change_role(admin.id, user.id):
            raise ForbiddenError("You cannot change your own role")

        user.role = values["role"]
        await db.commit()
        logger.info(f"User {user_id} role set to {user.role.value} by {admin.id}")

        await revalidate_paths(ADMIN_USERS_PATH)
        return await UserService._require_user(db, user_id)

    @staticmethod
    async def get_profile(db: AsyncSession, session: Optional[SessionUser]) -> User:
        session = require_session(session)
        return await UserService._require_user(db, session.id)

    @staticmethod
    async def update_profile(db: AsyncSession, session: Optional[SessionUser], payload: Any) -> User:
        """
        Update the caller's name and email.

        Raises:
            ConflictError: Email belongs to another user
        """
        session = require_session(session)
        values = validate_payload(ProfileUpdate, payload)
        email = values["email"].lower()

        existing = await UserService.get_by_email(db, email)
        if existing is not None and existing.id != session.id:
            raise ConflictError("Email is already taken by another user")

        user = await UserService._require_user(db, session.id)
        user.name = values["name"]
        user.email = email
        await db.commit()
        logger.info(f"Profile updated for user {session.id}")

        await revalidate_paths(*PROFILE_PATHS)
        return await UserService._require_user(db, session.id)

    @staticmethod
    async def change_password(db: AsyncSession, session: Optional[SessionUser], payload: Any) -> None:
        """
        Change the caller's password.

        The new password must pass the strength rules, match its
        confirmation and differ from the current one.
        """
        session = require_session(session)
        values = validate_payload(PasswordChange, payload)

        problems = PasswordManager.password_problems(values["new_password"])
        if problems:
            raise ValidationFailedError({"newPassword": problems})

        user = await UserService._require_user(db, session.id)
        if not verify_password(values["current_password"], user.password):
            logger.warning(f"Password change refused for user {session.id}: wrong current password")
            raise ValidationFailedError(
                {"currentPassword": ["Current password is incorrect"]},
                "Current password is incorrect",
            )

        if values["new_password"] == values["current_password"]:
            raise ValidationFailedError(
                {"newPassword": ["New password must be different from the current password"]}
            )

        user.password = get_password_hash(values["new_password"])
        await db.commit()
        logger.info(f"Password changed for user {session.id}")

    @staticmethod
    async def update_profile_image(db: AsyncSession, session: Optional[SessionUser], payload: Any) -> User:
        session = require_session(session)
        values = validate_payload(ProfileImageUpdate, payload)

        user = await UserService._require_user(db, session.id)
        user.image = values["image_url"]
        await db.commit()
        logger.info(f"Profile image updated for user {session.id}")

        await revalidate_paths(*PROFILE_PATHS)
        return await UserService._require_user(db, session.id)
