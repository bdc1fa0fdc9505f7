"""
Tests for dashboard statistics.
"""

from datetime import date

import fakeredis
import pytest
from fastapi import status

from agri_inventory.core import cache
from agri_inventory.core.config import settings
from agri_inventory.core.errors import ForbiddenError
from agri_inventory.models.equipment import Equipment
from agri_inventory.services.equipment import EquipmentService
from agri_inventory.services.maintenance import MaintenanceService
from agri_inventory.services.stats import StatsService

STATUS_COUNTS = ("availableCount", "inUseCount", "needsRepairCount", "discardedCount")


async def add_equipment(db_session, session, department_id, name, type_="Machinery", status_="AVAILABLE"):
    return await EquipmentService.create(
        db_session,
        session,
        {
            "name": name,
            "type": type_,
            "status": status_,
            "purchaseDate": "2021-07-01",
            "departmentId": department_id,
        },
    )


@pytest.fixture
async def inventory(db_session, admin_session):
    """Four items in CRI and two in RARI, with maintenance on one of each."""
    gin = await add_equipment(db_session, admin_session, "cri", "Ginning Machine")
    await add_equipment(db_session, admin_session, "cri", "Microscope", "Lab Equipment", "IN_USE")
    await add_equipment(db_session, admin_session, "cri", "Sprayer", status_="NEEDS_REPAIR")
    await add_equipment(db_session, admin_session, "cri", "Old Sprayer", status_="DISCARDED")
    drill = await add_equipment(db_session, admin_session, "rari", "Seed Drill")
    await add_equipment(db_session, admin_session, "rari", "Balance", "Lab Equipment")

    for equipment, cost in ((gin, "120.00"), (drill, "80.25")):
        await MaintenanceService.create(
            db_session,
            admin_session,
            {"equipmentId": equipment.id, "date": "2024-02-01", "cost": cost, "description": "Service"},
        )


@pytest.mark.asyncio
async def test_status_buckets_add_up(db_session, admin_session, inventory):
    stats = await StatsService.get_dashboard_stats(db_session, admin_session)

    assert stats["totalEquipment"] == 6
    assert sum(stats[key] for key in STATUS_COUNTS) == stats["totalEquipment"]
    assert stats["availableCount"] == 3
    assert stats["totalMaintenanceCost"] == 200.25
    assert stats["departmentId"] is None


@pytest.mark.asyncio
async def test_department_head_stats_are_scoped(db_session, cri_session, inventory):
    """A head asking for another department still gets their own numbers."""
    stats = await StatsService.get_dashboard_stats(db_session, cri_session, department_id="rari")

    assert stats["departmentId"] == "cri"
    assert stats["totalEquipment"] == 4
    assert [stats[key] for key in STATUS_COUNTS] == [1, 1, 1, 1]
    assert stats["totalMaintenanceCost"] == 120.0
    assert {item["department"]["id"] for item in stats["recentEquipment"]} == {"cri"}


@pytest.mark.asyncio
async def test_equipment_by_type_is_ordered_by_count(db_session, admin_session, inventory):
    stats = await StatsService.get_dashboard_stats(db_session, admin_session)

    assert stats["equipmentByType"] == [
        {"type": "Machinery", "count": 4},
        {"type": "Lab Equipment", "count": 2},
    ]


@pytest.mark.asyncio
async def test_recent_equipment_is_limited(db_session, admin_session, inventory, monkeypatch):
    monkeypatch.setattr(settings, "inventory_recent_equipment_limit", 3)

    stats = await StatsService.get_all_departments_stats(db_session, admin_session)
    assert len(stats["recentEquipment"]) == 3
    assert stats["totalEquipment"] == 6


@pytest.mark.asyncio
async def test_empty_inventory(db_session, rari_session):
    stats = await StatsService.get_dashboard_stats(db_session, rari_session)

    assert stats["totalEquipment"] == 0
    assert stats["equipmentByType"] == []
    assert stats["totalMaintenanceCost"] == 0


@pytest.mark.asyncio
async def test_department_breakdown_is_admin_only(db_session, admin_session, cri_session, inventory):
    with pytest.raises(ForbiddenError):
        await StatsService.get_department_breakdown(db_session, cri_session)

    breakdown = {row["departmentId"]: row for row in await StatsService.get_department_breakdown(db_session, admin_session)}
    assert breakdown["cri"]["totalEquipment"] == 4
    assert breakdown["cri"]["discardedCount"] == 1
    assert breakdown["rari"]["availableCount"] == 2
    assert breakdown["agronomy"]["totalEquipment"] == 0


@pytest.mark.asyncio
async def test_stats_over_http(async_client, cri_headers, inventory):
    response = await async_client.get("/api/dashboard/stats", headers=cri_headers)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["success"] is True
    assert body["data"]["totalEquipment"] == 4

    response = await async_client.get("/api/dashboard/departments", headers=cri_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message"] == "Access denied. Admin privileges required."


@pytest.fixture
def fake_redis(monkeypatch):
    """Route the view cache through an in-process Redis."""
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer())
    monkeypatch.setattr(cache, "redis_client", client)
    return client


@pytest.mark.asyncio
async def test_stats_served_from_cache_until_revalidated(db_session, admin_session, fake_redis):
    first = await StatsService.get_dashboard_stats(db_session, admin_session)
    assert first["totalEquipment"] == 0
    assert await fake_redis.exists(cache.view_key("/dashboard", "all")) == 1

    # Written behind the service layer, so nothing is revalidated
    db_session.add(
        Equipment(name="Hidden", type="Machinery", purchase_date=date(2022, 1, 1), department_id="cri")
    )
    await db_session.commit()
    assert (await StatsService.get_dashboard_stats(db_session, admin_session))["totalEquipment"] == 0

    await add_equipment(db_session, admin_session, "cri", "Ginning Machine")
    assert (await StatsService.get_dashboard_stats(db_session, admin_session))["totalEquipment"] == 2


@pytest.mark.asyncio
async def test_revalidation_drops_only_the_exact_path(fake_redis):
    await cache.store_view("/dashboard", {"view": "overview"})
    await cache.store_view("/dashboard", {"view": "cri"}, "cri")
    await cache.store_view("/dashboard/cri", {"view": "register"})

    dropped = await cache.revalidate_paths("/dashboard/cri", "/dashboard/cri")

    assert dropped == 1
    assert await cache.cached_view("/dashboard/cri") is None
    assert await cache.cached_view("/dashboard") == {"view": "overview"}
    assert await cache.cached_view("/dashboard", "cri") == {"view": "cri"}

    assert await cache.revalidate_paths("/dashboard") == 2
    assert await cache.cached_view("/dashboard", "cri") is None
