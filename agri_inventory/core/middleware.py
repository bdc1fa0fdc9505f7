"""
HTTP middleware: hardening headers and one access-log line per request.
"""
import time
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from agri_inventory.core.auth import session_from_token
from agri_inventory.core.logging import logger

SLOW_REQUEST_SECONDS = 2.0
WATCHED_STATUSES = frozenset({401, 403, 404})

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}


def bearer_token(request: Request) -> Optional[str]:
    scheme, _, token = request.headers.get("authorization", "").partition(" ")
    return token if scheme.lower() == "bearer" and token else None


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log keyed by the caller's user id when a valid token is present."""

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        session = session_from_token(bearer_token(request))
        caller = session.id if session else "anonymous"
        ip = request.client.host if request.client else "-"
        line = f"{request.method} {request.url.path} -> {response.status_code} in {elapsed:.3f}s [user={caller} ip={ip}]"

        if response.status_code in WATCHED_STATUSES:
            logger.warning(f"Denied or missing: {line}")
        elif elapsed > SLOW_REQUEST_SECONDS:
            logger.warning(f"Slow request: {line}")
        else:
            logger.info(line)
        return response
