"""
Tests for access control, payload validation and the result envelope.
"""

import json

import pytest

from agri_inventory.core.errors import (
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
    envelope_response,
    run_action,
)
from agri_inventory.core.rbac import (
    ResourcePolicy,
    authorize_department,
    require_admin,
    require_session,
    scoped_department_id,
)
from agri_inventory.models.enums import Role
from agri_inventory.schemas.department_entities import AdaptiveResearchPositionIn
from agri_inventory.schemas.user import SessionUser
from agri_inventory.schemas.validation import partial_model, validate_payload

ADMIN = SessionUser(id="admin-1", role=Role.ADMIN)
CRI_HEAD = SessionUser(id="head-1", role=Role.DEPT_HEAD, department_id="cri")
UNASSIGNED = SessionUser(id="head-2", role=Role.DEPT_HEAD)


class TestResourcePolicy:
    """Test department scope rules."""

    def test_admin_reaches_every_department(self):
        assert ResourcePolicy.can_access_department(Role.ADMIN, None, "cri")
        assert ResourcePolicy.can_access_department(Role.ADMIN, "rari", "cri")

    def test_head_reaches_only_own_department(self):
        assert ResourcePolicy.can_access_department(Role.DEPT_HEAD, "cri", "cri")
        assert not ResourcePolicy.can_access_department(Role.DEPT_HEAD, "cri", "rari")
        assert not ResourcePolicy.can_access_department(Role.DEPT_HEAD, None, "cri")

    def test_role_change_on_self(self):
        assert not ResourcePolicy.can_change_role("admin-1", "admin-1")
        assert ResourcePolicy.can_change_role("admin-1", "head-1")


class TestGuards:
    def test_require_session(self):
        with pytest.raises(UnauthorizedError):
            require_session(None)
        assert require_session(CRI_HEAD) is CRI_HEAD

    def test_require_admin(self):
        with pytest.raises(ForbiddenError) as exc_info:
            require_admin(CRI_HEAD)
        assert exc_info.value.message == "Access denied. Admin privileges required."
        assert require_admin(ADMIN) is ADMIN

    def test_authorize_department_message(self):
        authorize_department(CRI_HEAD, "cri")
        with pytest.raises(ForbiddenError) as exc_info:
            authorize_department(CRI_HEAD, "rari", "Not yours")
        assert exc_info.value.message == "Not yours"

    def test_scoped_department_id(self):
        assert scoped_department_id(ADMIN) is None
        assert scoped_department_id(ADMIN, "rari") == "rari"
        assert scoped_department_id(CRI_HEAD, "rari") == "cri"
        with pytest.raises(ForbiddenError):
            scoped_department_id(UNASSIGNED)


class TestValidation:
    """Test raw payload validation."""

    def test_errors_are_keyed_by_wire_name(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_payload(AdaptiveResearchPositionIn, {"bpsScale": "17", "sanctionedPosts": "many"})
        errors = exc_info.value.field_errors
        assert {"postName", "sanctionedPosts", "filledPosts"} <= set(errors)
        assert "bpsScale" not in errors

    def test_non_object_payload(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_payload(AdaptiveResearchPositionIn, ["not", "an", "object"])
        assert exc_info.value.field_errors == {"_form": ["Expected an object"]}

    def test_partial_returns_only_supplied_keys(self):
        values = validate_payload(AdaptiveResearchPositionIn, {"remarks": "ok"}, partial=True)
        assert values == {"remarks": "ok"}

    def test_partial_model_is_cached(self):
        assert partial_model(AdaptiveResearchPositionIn) is partial_model(AdaptiveResearchPositionIn)


class TestEnvelope:
    @pytest.mark.asyncio
    async def test_success_envelope(self):
        async def operation():
            return {"id": "x"}

        result = await run_action(operation(), failure_message="failed", success_message="Done")
        response = envelope_response(result, 201)

        assert response.status_code == 201
        assert json.loads(response.body) == {"success": True, "message": "Done", "data": {"id": "x"}}

    @pytest.mark.asyncio
    async def test_typed_error_maps_to_status(self):
        async def operation():
            raise NotFoundError("Equipment not found")

        result = await run_action(operation(), failure_message="failed")
        assert result.error == "NOT_FOUND"
        assert envelope_response(result).status_code == 404

    @pytest.mark.asyncio
    async def test_unexpected_error_is_internal(self):
        async def operation():
            raise RuntimeError("database exploded")

        result = await run_action(operation(), failure_message="An error occurred while creating equipment")
        response = envelope_response(result)

        assert response.status_code == 500
        assert json.loads(response.body) == {
            "success": False,
            "message": "An error occurred while creating equipment",
            "error": "INTERNAL",
        }
