"""
Action error taxonomy and the result-envelope boundary.

Services raise the typed errors below. Routers never let them escape:
``run_action`` converts every outcome into an ``ActionResult`` and
``envelope_response`` renders it with a matching HTTP status.
"""
from typing import Any, Awaitable, Callable, Dict, List, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

from agri_inventory.core.logging import logger
from agri_inventory.schemas.common import ActionResult

FieldErrors = Dict[str, List[str]]


class ActionError(Exception):
    """Base class for failures surfaced through the result envelope."""

    kind = "INTERNAL"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, data: Any = None):
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)


class UnauthorizedError(ActionError):
    kind = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized. Please log in."


class ForbiddenError(ActionError):
    kind = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not authorized to perform this action"


class NotFoundError(ActionError):
    kind = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ValidationFailedError(ActionError):
    """Schema rejection; ``data`` holds the per-field error map."""

    kind = "VALIDATION_FAILED"
    status_code = 422
    default_message = "Invalid input data"

    def __init__(self, field_errors: FieldErrors, message: Optional[str] = None):
        super().__init__(message, data=field_errors)
        self.field_errors = field_errors


class ConflictError(ActionError):
    kind = "CONFLICT"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict with existing data"


STATUS_BY_KIND = {
    cls.kind: cls.status_code
    for cls in (
        ActionError,
        UnauthorizedError,
        ForbiddenError,
        NotFoundError,
        ValidationFailedError,
        ConflictError,
    )
}


async def run_action(
    operation: Awaitable[Any],
    *,
    failure_message: str,
    success_message: Optional[str] = None,
    serializer: Optional[Callable[[Any], Any]] = None,
) -> ActionResult:
    """
    Await a service call and convert its outcome into a result envelope.

    Args:
        operation: The service coroutine to run
        failure_message: Generic message surfaced for unexpected failures
        success_message: Optional message attached to a successful result
        serializer: Optional callable applied to the returned value

    Returns:
        ActionResult describing success or the failure kind
    """
    try:
        value = await operation
        data = serializer(value) if serializer is not None else value
    except ActionError as exc:
        logger.warning(f"Action rejected ({exc.kind}): {exc.message}")
        return ActionResult(success=False, message=exc.message, data=exc.data, error=exc.kind)
    except Exception:
        logger.exception(failure_message)
        return ActionResult(success=False, message=failure_message, error=ActionError.kind)

    return ActionResult(success=True, message=success_message, data=data)


def envelope_response(
    result: ActionResult,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Render an envelope, mapping failure kinds onto HTTP status codes."""
    if not result.success:
        status_code = STATUS_BY_KIND.get(result.error, status.HTTP_500_INTERNAL_SERVER_ERROR)
    payload = {key: value for key, value in result.model_dump().items() if value is not None}
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))
