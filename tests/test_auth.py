"""
Tests for authentication, account and user administration.
"""

import pytest
from fastapi import status

from agri_inventory.core.auth import session_from_token
from agri_inventory.core.errors import ConflictError, ForbiddenError, UnauthorizedError, ValidationFailedError
from agri_inventory.core.security import TokenManager, verify_password
from agri_inventory.models.enums import Role
from agri_inventory.services.user import UserService

PASSWORD = "Secret123"
SIGNUP = {
    "name": "Sana Iqbal",
    "email": "Sana.Iqbal@MNSUAM.edu.pk",
    "password": "Harvest2024",
    "departmentId": "mri",
}


@pytest.mark.asyncio
async def test_register_creates_department_head(db_session, departments, revalidations):
    user = await UserService.register(db_session, SIGNUP)

    assert user.email == "sana.iqbal@mnsuam.edu.pk"
    assert user.role == Role.DEPT_HEAD
    assert user.department.name == "Mango Research Institute"
    assert user.password != SIGNUP["password"]
    assert verify_password(SIGNUP["password"], user.password)
    assert revalidations == [("/dashboard/admin/users",)]


@pytest.mark.asyncio
async def test_register_rules(db_session, cri_head):
    with pytest.raises(ValidationFailedError) as exc_info:
        await UserService.register(db_session, {**SIGNUP, "password": "harvesting"})
    assert exc_info.value.field_errors["password"] == [
        "Password must contain at least one uppercase letter",
        "Password must contain at least one number",
    ]

    with pytest.raises(ConflictError) as exc_info:
        await UserService.register(db_session, {**SIGNUP, "email": "HEAD.CRI@mnsuam.edu.pk"})
    assert exc_info.value.message == "User with this email already exists"

    with pytest.raises(ValidationFailedError) as exc_info:
        await UserService.register(db_session, {**SIGNUP, "email": "not-an-email"})
    assert "email" in exc_info.value.field_errors


@pytest.mark.asyncio
async def test_register_over_http(async_client, departments):
    response = await async_client.post("/api/auth/register", json=SIGNUP)

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["message"] == "Account created successfully"
    assert body["data"]["role"] == "DEPT_HEAD"
    assert body["data"]["department"] == {"id": "mri", "name": "Mango Research Institute"}
    assert "password" not in body["data"]

    response = await async_client.post("/api/auth/register", json={**SIGNUP, "departmentId": "nowhere"})
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_login_issues_session_token(async_client, cri_head):
    response = await async_client.post(
        "/api/auth/login", json={"email": "head.cri@mnsuam.edu.pk", "password": PASSWORD}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["tokenType"] == "bearer"
    session = session_from_token(data["accessToken"])
    assert session.id == cri_head.id
    assert session.role == Role.DEPT_HEAD
    assert session.department_id == "cri"


@pytest.mark.asyncio
async def test_login_rejections(async_client, cri_head):
    response = await async_client.post(
        "/api/auth/login", json={"email": "head.cri@mnsuam.edu.pk", "password": "Wrong1234"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "Invalid email or password"

    response = await async_client.post("/api/auth/login", json={"email": "nobody", "password": ""})
    assert response.status_code == 422
    assert response.json()["message"] == "Invalid email or password format"


@pytest.mark.asyncio
async def test_oauth2_token_endpoint(async_client, admin_user):
    response = await async_client.post(
        "/api/auth/token",
        data={"username": "admin@mnsuam.edu.pk", "password": PASSWORD},
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["success"] is True
    assert body["token_type"] == "bearer"
    assert body["access_token"] == body["data"]["accessToken"]
    assert TokenManager.verify_token(body["access_token"])["role"] == "ADMIN"

    response = await async_client.post(
        "/api/auth/token",
        data={"username": "admin@mnsuam.edu.pk", "password": "nope"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_tampered_token_has_no_session():
    assert session_from_token(None) is None
    assert session_from_token("not.a.jwt") is None


@pytest.mark.asyncio
async def test_profile_roundtrip(async_client, cri_headers, rari_head):
    response = await async_client.get("/api/account/profile", headers=cri_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["email"] == "head.cri@mnsuam.edu.pk"

    response = await async_client.put(
        "/api/account/profile",
        json={"name": "Cotton Head", "email": "head.rari@mnsuam.edu.pk"},
        headers=cri_headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["message"] == "Email is already taken by another user"

    response = await async_client.put(
        "/api/account/profile",
        json={"name": "Cotton Head", "email": "cotton.head@mnsuam.edu.pk"},
        headers=cri_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["name"] == "Cotton Head"


@pytest.mark.asyncio
async def test_change_password_rules(db_session, cri_session, cri_head):
    def change(current, new, confirm=None):
        return UserService.change_password(
            db_session,
            cri_session,
            {"currentPassword": current, "newPassword": new, "confirmPassword": confirm or new},
        )

    with pytest.raises(ValidationFailedError) as exc_info:
        await change(PASSWORD, "NewSecret456", "NewSecret789")
    assert exc_info.value.field_errors["confirmPassword"] == ["Passwords don't match"]

    with pytest.raises(ValidationFailedError) as exc_info:
        await change(PASSWORD, "lowercase1")
    assert "newPassword" in exc_info.value.field_errors

    with pytest.raises(ValidationFailedError) as exc_info:
        await change("Wrong1234", "NewSecret456")
    assert exc_info.value.message == "Current password is incorrect"

    with pytest.raises(ValidationFailedError) as exc_info:
        await change(PASSWORD, PASSWORD)
    assert exc_info.value.field_errors["newPassword"] == ["New password must be different from the current password"]

    await change(PASSWORD, "NewSecret456")
    user = await UserService.authenticate(db_session, "head.cri@mnsuam.edu.pk", "NewSecret456")
    assert user.id == cri_head.id

    with pytest.raises(UnauthorizedError):
        await UserService.authenticate(db_session, "head.cri@mnsuam.edu.pk", PASSWORD)


@pytest.mark.asyncio
async def test_profile_image(db_session, cri_session):
    user = await UserService.update_profile_image(
        db_session, cri_session, {"imageUrl": "https://example.com/me.jpg"}
    )
    assert user.image == "https://example.com/me.jpg"

    with pytest.raises(ValidationFailedError):
        await UserService.update_profile_image(db_session, cri_session, {"imageUrl": ""})


@pytest.mark.asyncio
async def test_admin_manages_users(db_session, admin_session, cri_session, unassigned_head):
    with pytest.raises(ForbiddenError):
        await UserService.list_users(db_session, cri_session)

    users = await UserService.list_users(db_session, admin_session)
    assert {user.email for user in users} == {
        "admin@mnsuam.edu.pk",
        "head.cri@mnsuam.edu.pk",
        "head.none@mnsuam.edu.pk",
    }

    assigned = await UserService.update_user_department(
        db_session, admin_session, unassigned_head.id, {"departmentId": "flori"}
    )
    assert assigned.department.id == "flori"

    unassigned = await UserService.update_user_department(
        db_session, admin_session, unassigned_head.id, {"departmentId": None}
    )
    assert unassigned.department_id is None

    promoted = await UserService.update_user_role(db_session, admin_session, unassigned_head.id, {"role": "ADMIN"})
    assert promoted.role == Role.ADMIN

    with pytest.raises(ValidationFailedError):
        await UserService.update_user_role(db_session, admin_session, unassigned_head.id, {"role": "OWNER"})


@pytest.mark.asyncio
async def test_admin_cannot_change_own_role(db_session, admin_session):
    with pytest.raises(ForbiddenError) as exc_info:
        await UserService.update_user_role(db_session, admin_session, admin_session.id, {"role": "DEPT_HEAD"})
    assert exc_info.value.message == "You cannot change your own role"


@pytest.mark.asyncio
async def test_users_endpoint_requires_admin(async_client, cri_headers):
    response = await async_client.get("/api/users/", headers=cri_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["error"] == "FORBIDDEN"
