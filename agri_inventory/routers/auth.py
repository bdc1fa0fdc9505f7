"""
Authentication endpoints.

This module provides endpoints for signup, login and the department list
shown on the signup form.
"""
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from fastapi.encoders import jsonable_encoder
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from agri_inventory.core.auth import issue_access_token
from agri_inventory.core.errors import envelope_response, run_action
from agri_inventory.core.logging import logger
from agri_inventory.db.session import get_db
from agri_inventory.models.user import User as UserModel
from agri_inventory.schemas.common import DepartmentRef
from agri_inventory.schemas.user import Token, User
from agri_inventory.services.department import DepartmentService
from agri_inventory.services.user import UserService
from agri_inventory.utils import to_schema

router = APIRouter()


def _token(user: UserModel) -> Dict[str, Any]:
    token = Token(access_token=issue_access_token(user), user=User.model_validate(user))
    return token.model_dump(by_alias=True)


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new department head.

    Args:
        payload: ``{name, email, password, departmentId}``
        db: Database session

    Returns:
        Envelope with the created user
    """
    result = await run_action(
        UserService.register(db, payload),
        failure_message="An error occurred during registration",
        success_message="Account created successfully",
        serializer=to_schema(User),
    )
    return envelope_response(result, status.HTTP_201_CREATED)


@router.post("/token")
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """
    OAuth2 password flow; the form's ``username`` is the email.

    The envelope also carries ``access_token``/``token_type`` at the top
    level so OAuth2 clients can read it directly.
    """
    logger.info(f"Login attempt for: {form_data.username}")
    result = await run_action(
        UserService.authenticate(db, form_data.username, form_data.password),
        failure_message="An error occurred during login",
        success_message="Login successful",
        serializer=_token,
    )
    if not result.success:
        return envelope_response(result)

    body = result.model_dump(exclude_none=True)
    body["access_token"] = result.data["accessToken"]
    body["token_type"] = result.data["tokenType"]
    return JSONResponse(content=jsonable_encoder(body))


@router.post("/login")
async def login(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_db),
):
    """JSON login: ``{email, password}`` to an access token and the user."""
    result = await run_action(
        UserService.login(db, payload),
        failure_message="An error occurred during login",
        success_message="Login successful",
        serializer=_token,
    )
    return envelope_response(result)


@router.get("/departments")
async def signup_departments(db: AsyncSession = Depends(get_db)):
    """Departments offered on the signup form; no login required."""
    result = await run_action(
        DepartmentService.list_public(db),
        failure_message="Failed to fetch departments",
        serializer=to_schema(DepartmentRef),
    )
    return envelope_response(result)
