"""
Tests for department management.
"""

import pytest
from fastapi import status

from agri_inventory.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationFailedError
from agri_inventory.db.seed_data import DEPARTMENT_SEEDS, FOOD_SCIENCE_SAMPLE_EQUIPMENT
from agri_inventory.models.department import Department
from agri_inventory.models.enums import Role
from agri_inventory.schemas.user import SessionUser
from agri_inventory.services.department import DepartmentService
from agri_inventory.services.equipment import EquipmentService
from agri_inventory.services.registry import get_entity_config
from agri_inventory.services.repository import DepartmentEntityRepository

SEED_STATION = {"name": "Seed Testing Station", "location": "Multan", "focalPerson": "Dr. Amina Khan"}


@pytest.mark.asyncio
async def test_create_department_derives_slug_id(db_session, admin_session, revalidations):
    department = await DepartmentService.create(db_session, admin_session, SEED_STATION)

    assert department.id == "seed-testing-station"
    assert department.focal_person == "Dr. Amina Khan"
    assert revalidations == [("/dashboard/admin/departments", "/dashboard")]


@pytest.mark.asyncio
async def test_create_department_rules(db_session, admin_session, cri_session):
    with pytest.raises(ForbiddenError):
        await DepartmentService.create(db_session, cri_session, SEED_STATION)

    with pytest.raises(ValidationFailedError) as exc_info:
        await DepartmentService.create(db_session, admin_session, {"name": "Lab", "logo": "not-a-url"})
    assert set(exc_info.value.field_errors) == {"location", "logo"}

    with pytest.raises(ConflictError) as exc_info:
        await DepartmentService.create(
            db_session, admin_session, {"name": "Cotton Research Institute", "location": "Multan"}
        )
    assert exc_info.value.message == "A department with this name already exists"


@pytest.mark.asyncio
async def test_rename_onto_existing_name_conflicts(db_session, admin_session):
    with pytest.raises(ConflictError):
        await DepartmentService.update(db_session, admin_session, "rari", {"name": "Cotton Research Institute"})

    updated = await DepartmentService.update(db_session, admin_session, "rari", {"phone": "061-1234567"})
    assert updated.phone == "061-1234567"
    assert updated.name == "Regional Agricultural Research Institute"


@pytest.mark.asyncio
async def test_delete_refused_while_equipment_remains(db_session, admin_session):
    await EquipmentService.create(
        db_session,
        admin_session,
        {"name": "Tractor", "type": "Machinery", "purchaseDate": "2020-01-01", "departmentId": "amri"},
    )

    with pytest.raises(ConflictError) as exc_info:
        await DepartmentService.delete(db_session, admin_session, "amri")
    assert "1 equipment records" in exc_info.value.message
    assert await db_session.get(Department, "amri") is not None


@pytest.mark.asyncio
async def test_delete_refused_while_users_remain(db_session, admin_session, cri_head):
    with pytest.raises(ConflictError) as exc_info:
        await DepartmentService.delete(db_session, admin_session, "cri")
    assert "1 assigned users" in exc_info.value.message


@pytest.mark.asyncio
async def test_delete_refused_while_register_records_remain(db_session, admin_session):
    repo = DepartmentEntityRepository(get_entity_config("floriculture"))
    await repo.create(db_session, admin_session, {"name": "Greenhouse Sprinkler", "type": "Irrigation"})

    with pytest.raises(ConflictError) as exc_info:
        await DepartmentService.delete(db_session, admin_session, "flori")
    assert "inventory records" in exc_info.value.message


@pytest.mark.asyncio
async def test_delete_empty_department(db_session, admin_session):
    department = await DepartmentService.create(db_session, admin_session, SEED_STATION)

    assert await DepartmentService.delete(db_session, admin_session, department.id) == department.id
    with pytest.raises(NotFoundError):
        await DepartmentService.delete(db_session, admin_session, department.id)


@pytest.mark.asyncio
async def test_seeding_is_idempotent(db_session, admin_session):
    first = await DepartmentService.seed_departments(db_session, admin_session)
    second = await DepartmentService.seed_departments(db_session, admin_session)

    assert first == second == len(DEPARTMENT_SEEDS)
    listed = await DepartmentService.list_public(db_session)
    assert len(listed) == len(DEPARTMENT_SEEDS)


@pytest.mark.asyncio
async def test_list_departments_with_counts(async_client, admin_headers, cri_head):
    response = await async_client.get("/api/departments/", headers=admin_headers)

    assert response.status_code == status.HTTP_200_OK
    by_id = {entry["id"]: entry for entry in response.json()["data"]}
    assert by_id["cri"]["userCount"] == 1
    assert by_id["cri"]["equipmentCount"] == 0
    assert by_id["rari"]["userCount"] == 0


@pytest.mark.asyncio
async def test_department_detail_is_admin_only(async_client, admin_headers, cri_headers, cri_head):
    response = await async_client.get("/api/departments/cri", headers=cri_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = await async_client.get("/api/departments/cri", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["name"] == "Cotton Research Institute"
    assert [member["email"] for member in data["users"]] == ["head.cri@mnsuam.edu.pk"]
    assert data["equipmentCount"] == 0


@pytest.mark.asyncio
async def test_signup_department_list_is_public(async_client, departments):
    response = await async_client.get("/api/auth/departments")

    assert response.status_code == status.HTTP_200_OK
    entries = response.json()["data"]
    assert {"id": "cri", "name": "Cotton Research Institute"} in entries
    assert set(entries[0]) == {"id", "name"}


@pytest.mark.asyncio
async def test_seed_endpoint_requires_admin(async_client, admin_headers, cri_headers):
    response = await async_client.post("/api/admin/seed-departments", headers=cri_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = await async_client.post("/api/admin/seed-departments", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"] == {"count": len(DEPARTMENT_SEEDS)}


@pytest.mark.asyncio
async def test_sample_equipment_seeding_is_repeatable(db_session, admin_session, revalidations):
    first = await DepartmentService.seed_sample_equipment(db_session, admin_session)

    assert first["departmentId"] == "food-science"
    assert [entry["action"] for entry in first["results"]] == ["created"] * len(FOOD_SCIENCE_SAMPLE_EQUIPMENT)

    second = await DepartmentService.seed_sample_equipment(db_session, admin_session)
    assert {entry["action"] for entry in second["results"]} == {"exists"}

    records = await DepartmentEntityRepository(get_entity_config("food-science")).get_all(db_session, admin_session)
    assert len(records) == len(FOOD_SCIENCE_SAMPLE_EQUIPMENT)
    autoclave = next(record for record in records if record.name == "Autoclave")
    assert autoclave.lab_section_name == "Sterilization"
    assert autoclave.focal_person == "Dr. Shabbir Ahmad"
    assert revalidations == [("/dashboard/food-science", "/dashboard")]


@pytest.mark.asyncio
async def test_sample_equipment_needs_food_science_department(db_session):
    admin = SessionUser(id="admin-1", role=Role.ADMIN)
    with pytest.raises(NotFoundError) as exc_info:
        await DepartmentService.seed_sample_equipment(db_session, admin)
    assert exc_info.value.message == "Food Science department not found"


@pytest.mark.asyncio
async def test_sample_equipment_endpoint_requires_admin(async_client, admin_headers, cri_headers):
    response = await async_client.post("/api/admin/seed-equipment", headers=cri_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = await async_client.post("/api/admin/seed-equipment", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["message"] == "Equipment seeded successfully"
    assert len(body["data"]["results"]) == len(FOOD_SCIENCE_SAMPLE_EQUIPMENT)
