"""
Password hashing and signed session tokens.

Tokens are HS256 JWTs carrying the session claims (role, department) so a
request can be authorised without a database round-trip.
"""
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from agri_inventory.core.config import settings
from agri_inventory.core.logging import logger

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
)


class TokenManager:
    @staticmethod
    def create_access_token(
        subject: Any,
        expires_delta: Optional[timedelta] = None,
        additional_claims: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Sign a token for ``subject``; lifetime defaults to the configured expiry."""
        security = settings.security
        issued = datetime.now(timezone.utc)
        lifetime = expires_delta or timedelta(minutes=security.access_token_expire_minutes)
        claims = dict(additional_claims or {})
        claims.update(
            sub=str(subject),
            type="access",
            iat=issued,
            exp=issued + lifetime,
            jti=secrets.token_hex(16),
        )
        return jwt.encode(claims, security.secret_key_str, algorithm=security.algorithm)

    @staticmethod
    def verify_token(token: str, token_type: str = "access") -> Optional[Dict[str, Any]]:
        """
        Decode ``token`` and return its claims.

        Returns None for a bad signature, an expired token or a token of
        another type; the reason is logged.
        """
        security = settings.security
        try:
            claims = jwt.decode(token, security.secret_key_str, algorithms=[security.algorithm])
        except JWTError as exc:
            logger.warning(f"Rejected token: {exc}")
            return None

        if claims.get("type") != token_type:
            logger.warning(f"Rejected token of type {claims.get('type')!r}, wanted {token_type!r}")
            return None
        return claims


class PasswordManager:
    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        # Malformed stored hashes count as a mismatch
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as exc:
            logger.error(f"Unreadable password hash: {exc}")
            return False

    @staticmethod
    def get_password_hash(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def password_problems(password: str) -> list[str]:
        """Messages for each strength rule ``password`` breaks; empty when acceptable."""
        minimum = settings.security.password_min_length
        problems = [] if len(password) >= minimum else [f"Password must be at least {minimum} characters"]
        problems.extend(message for pattern, message in PASSWORD_RULES if not pattern.search(password))
        return problems


verify_password = PasswordManager.verify_password
get_password_hash = PasswordManager.get_password_hash
