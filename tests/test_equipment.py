"""
Tests for equipment service and endpoints.
"""

from datetime import date, timedelta

import pytest
from fastapi import status
from sqlalchemy import func, select

from agri_inventory.core.errors import ForbiddenError, NotFoundError, ValidationFailedError
from agri_inventory.models.enums import EquipmentStatus
from agri_inventory.models.equipment import Equipment
from agri_inventory.services.equipment import EquipmentService

TRACTOR = {
    "name": "Tractor X",
    "type": "Machinery",
    "status": "AVAILABLE",
    "purchaseDate": "2023-01-15",
    "departmentId": "agronomy",
}


def equipment_payload(**overrides):
    return {**TRACTOR, **overrides}


@pytest.mark.asyncio
async def test_admin_creates_equipment_and_sees_it_listed(async_client, admin_headers):
    """Tractor X created by an admin shows up with its department name joined in."""
    response = await async_client.post("/api/equipment/", json=TRACTOR, headers=admin_headers)
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["success"] is True
    assert body["data"]["name"] == "Tractor X"

    response = await async_client.get("/api/equipment/", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    items = response.json()["data"]
    assert len(items) == 1
    assert items[0]["name"] == "Tractor X"
    assert items[0]["status"] == "AVAILABLE"
    assert items[0]["purchaseDate"] == "2023-01-15"
    assert items[0]["department"] == {"id": "agronomy", "name": "Agronomy Department"}


@pytest.mark.asyncio
async def test_head_cannot_create_in_other_department(db_session, cri_session):
    with pytest.raises(ForbiddenError) as exc_info:
        await EquipmentService.create(db_session, cri_session, TRACTOR)
    assert exc_info.value.message == "You can only add equipment to your own department"


@pytest.mark.asyncio
async def test_foreign_department_wins_over_invalid_payload(db_session, cri_session):
    """Scope is checked before the payload, so a broken body for agronomy is still Forbidden."""
    payload = {"name": "", "type": "Machinery", "purchaseDate": "2023-01-15", "departmentId": "agronomy"}

    with pytest.raises(ForbiddenError):
        await EquipmentService.create(db_session, cri_session, payload)
    assert await db_session.scalar(select(func.count(Equipment.id))) == 0


@pytest.mark.asyncio
async def test_unknown_department_is_rejected(db_session, admin_session):
    with pytest.raises(NotFoundError) as exc_info:
        await EquipmentService.create(db_session, admin_session, equipment_payload(departmentId="nowhere"))
    assert exc_info.value.message == "Invalid department selected"


@pytest.mark.asyncio
async def test_purchase_date_bounds(db_session, admin_session):
    tomorrow = (date.today() + timedelta(days=1)).isoformat()

    with pytest.raises(ValidationFailedError) as exc_info:
        await EquipmentService.create(db_session, admin_session, equipment_payload(purchaseDate=tomorrow))
    assert exc_info.value.field_errors["purchaseDate"] == ["Purchase date cannot be in the future"]

    with pytest.raises(ValidationFailedError) as exc_info:
        await EquipmentService.create(db_session, admin_session, equipment_payload(purchaseDate="1899-12-31"))
    assert exc_info.value.field_errors["purchaseDate"] == ["Purchase date is too old"]


@pytest.mark.asyncio
async def test_invalid_status_is_rejected(db_session, admin_session):
    with pytest.raises(ValidationFailedError) as exc_info:
        await EquipmentService.create(db_session, admin_session, equipment_payload(status="LOST"))
    assert "status" in exc_info.value.field_errors


@pytest.mark.asyncio
async def test_head_listing_is_pinned_to_own_department(db_session, admin_session, cri_session):
    await EquipmentService.create(db_session, admin_session, equipment_payload(departmentId="cri", name="Ginning Machine"))
    await EquipmentService.create(db_session, admin_session, TRACTOR)

    own = await EquipmentService.get_all(db_session, cri_session, department_id="agronomy")
    assert [item.name for item in own] == ["Ginning Machine"]

    everything = await EquipmentService.get_all(db_session, admin_session)
    assert {item.name for item in everything} == {"Ginning Machine", "Tractor X"}

    filtered = await EquipmentService.get_all(db_session, admin_session, search="tractor")
    assert [item.name for item in filtered] == ["Tractor X"]

    browsing = await EquipmentService.get_all_departments(db_session, cri_session)
    assert [item.department.name for item in browsing] == ["Agronomy Department", "Cotton Research Institute"]


@pytest.mark.asyncio
async def test_head_cannot_read_other_department_equipment(db_session, admin_session, cri_session):
    tractor = await EquipmentService.create(db_session, admin_session, TRACTOR)
    with pytest.raises(ForbiddenError):
        await EquipmentService.get_by_id(db_session, cri_session, tractor.id)


@pytest.mark.asyncio
async def test_update_keeps_image_and_blocks_transfer(db_session, admin_session, cri_session):
    machine = await EquipmentService.create(
        db_session,
        cri_session,
        equipment_payload(departmentId="cri", name="Ginning Machine", imageUrl="https://example.com/gin.jpg"),
    )

    updated = await EquipmentService.update(
        db_session, cri_session, machine.id, {"status": "NEEDS_REPAIR", "imageUrl": ""}
    )
    assert updated.status == EquipmentStatus.NEEDS_REPAIR
    assert updated.image_url == "https://example.com/gin.jpg"
    assert updated.name == "Ginning Machine"

    with pytest.raises(ForbiddenError) as exc_info:
        await EquipmentService.update(db_session, cri_session, machine.id, {"departmentId": "rari"})
    assert exc_info.value.message == "You cannot transfer equipment to another department"

    moved = await EquipmentService.update(db_session, admin_session, machine.id, {"departmentId": "rari"})
    assert moved.department_id == "rari"
    assert moved.department.name == "Regional Agricultural Research Institute"


@pytest.mark.asyncio
async def test_mutations_revalidate_inventory(db_session, admin_session, revalidations):
    tractor = await EquipmentService.create(db_session, admin_session, TRACTOR)
    await EquipmentService.delete(db_session, admin_session, tractor.id)

    assert revalidations[0] == ("/dashboard", "/dashboard/inventory")
    assert revalidations[1] == ("/dashboard", "/dashboard/inventory", f"/dashboard/inventory/{tractor.id}")
    assert await db_session.get(Equipment, tractor.id) is None


@pytest.mark.asyncio
async def test_get_equipment_over_http_includes_history(async_client, db_session, admin_session, admin_headers):
    tractor = await EquipmentService.create(db_session, admin_session, TRACTOR)

    response = await async_client.get(f"/api/equipment/{tractor.id}", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["id"] == tractor.id
    assert data["maintenanceLogs"] == []

    response = await async_client.get("/api/equipment/missing", headers=admin_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Equipment not found"


@pytest.mark.asyncio
async def test_status_filter_rejects_unknown_value(async_client, admin_headers):
    response = await async_client.get("/api/equipment/?status=LOST", headers=admin_headers)
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_FAILED"
