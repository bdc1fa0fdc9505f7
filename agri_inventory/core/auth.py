"""
Authentication utilities for FastAPI.

Requests carry a bearer token issued at login. The token claims are the
session: user id, email, role and assigned department. A missing or invalid
token resolves to ``None`` and the service layer answers with Unauthorized.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError

from agri_inventory.core.logging import logger
from agri_inventory.core.security import TokenManager
from agri_inventory.models.user import User
from agri_inventory.schemas.user import SessionUser

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def session_claims(user: User) -> dict:
    """Claims embedded in an access token for ``user``."""
    return {
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
        "department_id": user.department_id,
    }


def issue_access_token(user: User) -> str:
    return TokenManager.create_access_token(user.id, additional_claims=session_claims(user))


def session_from_token(token: Optional[str]) -> Optional[SessionUser]:
    """
    Resolve the session carried by a bearer token.

    Args:
        token: Raw JWT, may be None

    Returns:
        SessionUser, or None when the token is absent or invalid
    """
    if not token:
        return None

    payload = TokenManager.verify_token(token)
    if payload is None:
        return None

    try:
        return SessionUser(
            id=payload["sub"],
            email=payload.get("email"),
            name=payload.get("name"),
            role=payload.get("role"),
            department_id=payload.get("department_id"),
        )
    except (KeyError, ValidationError) as e:
        logger.warning(f"Malformed session claims: {e}")
        return None


async def get_session(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[SessionUser]:
    """FastAPI dependency returning the caller's session or None."""
    return session_from_token(token)
