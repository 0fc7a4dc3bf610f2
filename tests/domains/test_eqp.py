# tests/domains/test_eqp.py

"""
'eqp' 도메인 (장비 및 이력) API 엔드포인트에 대한 통합 테스트 모듈입니다.
"""

import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from app.domains.usr.models import User as UsrUser
from app.domains.prj import models as prj_models
from app.domains.eqp import models as eqp_models


async def _make_equipment(db_session: AsyncSession, name="Tower Crane", status="available", project_id=None):
    db_obj = eqp_models.Equipment(name=name, status=status, assigned_project_id=project_id)
    db_session.add(db_obj)
    await db_session.commit()
    await db_session.refresh(db_obj)
    return db_obj


# =============================================================================
# 1. 장비 등록 및 조회
# =============================================================================
@pytest.mark.asyncio
async def test_create_equipment_writes_history(engineer_client: AsyncClient, test_engineer: UsrUser):
    response = await engineer_client.post(
        "/api/equipment",
        json={"name": " Excavator ", "category": "heavy", "serial_number": "EX-200", "notes": "leased"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Excavator"
    assert body["status"] == "available"
    assert body["condition"] == "good"
    assert body["assigned_project"] is None
    assert len(body["history"]) == 1
    assert body["history"][0]["action"] == "created"
    assert body["history"][0]["changed_by"] == test_engineer.id
    assert body["history"][0]["notes"] == "leased"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["in-use", "retired"])
async def test_create_equipment_rejects_unreachable_initial_status(admin_client: AsyncClient, status):
    response = await admin_client.post("/api/equipment", json={"name": "Loader", "status": status})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_equipment_in_maintenance(admin_client: AsyncClient):
    response = await admin_client.post("/api/equipment", json={"name": "Pump", "status": "maintenance"})
    assert response.status_code == 201
    assert response.json()["status"] == "maintenance"
    assert response.json()["history"][0]["status"] == "maintenance"


@pytest.mark.asyncio
async def test_create_equipment_requires_name(admin_client: AsyncClient):
    response = await admin_client.post("/api/equipment", json={"name": ""})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_equipment_forbidden_for_worker(worker_client: AsyncClient):
    response = await worker_client.post("/api/equipment", json={"name": "Drill"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_read_equipment_not_found(worker_client: AsyncClient):
    response = await worker_client.get("/api/equipment/999999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_equipment_filters(
    worker_client: AsyncClient, test_project: prj_models.Project, db_session: AsyncSession
):
    await _make_equipment(db_session, name="Crane", status="in-use", project_id=test_project.id)
    await _make_equipment(db_session, name="Mixer")
    await _make_equipment(db_session, name="Old Truck", status="retired")

    response = await worker_client.get("/api/equipment", params={"status": "available"})
    assert response.status_code == 200
    assert [e["name"] for e in response.json()["data"]] == ["Mixer"]

    response = await worker_client.get("/api/equipment", params={"project": test_project.id})
    data = response.json()["data"]
    assert [e["name"] for e in data] == ["Crane"]
    assert data[0]["assigned_project"] == {"id": test_project.id, "name": test_project.name}


# =============================================================================
# 2. 프로젝트 배치
# =============================================================================
@pytest.mark.asyncio
async def test_assign_equipment(
    engineer_client: AsyncClient, test_project: prj_models.Project, db_session: AsyncSession
):
    equipment = await _make_equipment(db_session)

    response = await engineer_client.post(
        f"/api/equipment/{equipment.id}/assign", json={"project": test_project.id, "notes": "for slab work"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "in-use"
    assert body["assigned_project_id"] == test_project.id
    assert body["history"][-1]["action"] == "assigned"
    assert body["history"][-1]["project_id"] == test_project.id
    assert body["history"][-1]["notes"] == "for slab work"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["retired", "maintenance"])
async def test_assign_unassignable_equipment(
    admin_client: AsyncClient, test_project: prj_models.Project, db_session: AsyncSession, status
):
    equipment = await _make_equipment(db_session, status=status)
    response = await admin_client.post(f"/api/equipment/{equipment.id}/assign", json={"project": test_project.id})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_assign_equipment_unknown_project(admin_client: AsyncClient, db_session: AsyncSession):
    equipment = await _make_equipment(db_session)
    response = await admin_client.post(f"/api/equipment/{equipment.id}/assign", json={"project": 999999})
    assert response.status_code == 404
    assert response.json()["detail"] == "Project not found"


# =============================================================================
# 3. 상태 변경
# =============================================================================
@pytest.mark.asyncio
async def test_status_available_releases_assignment(
    admin_client: AsyncClient, test_project: prj_models.Project, db_session: AsyncSession
):
    equipment = await _make_equipment(db_session, status="in-use", project_id=test_project.id)

    response = await admin_client.put(
        f"/api/equipment/{equipment.id}/status", json={"status": "available", "notes": "back to yard"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "available"
    assert body["assigned_project_id"] is None
    assert body["history"][-1]["action"] == "status-update"
    assert body["history"][-1]["notes"] == "back to yard"


@pytest.mark.asyncio
async def test_status_maintenance_keeps_assignment(
    admin_client: AsyncClient, test_project: prj_models.Project, db_session: AsyncSession
):
    equipment = await _make_equipment(db_session, status="in-use", project_id=test_project.id)

    response = await admin_client.put(
        f"/api/equipment/{equipment.id}/status",
        json={"status": "maintenance", "condition": "needs-repair", "last_service_date": "2024-06-10"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "maintenance"
    assert body["condition"] == "needs-repair"
    assert body["last_service_date"] == "2024-06-10"
    assert body["assigned_project_id"] == test_project.id


@pytest.mark.asyncio
async def test_retired_is_final(admin_client: AsyncClient, db_session: AsyncSession):
    equipment = await _make_equipment(db_session, status="retired")
    response = await admin_client.put(f"/api/equipment/{equipment.id}/status", json={"status": "available"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_status_update_requires_a_change(admin_client: AsyncClient, db_session: AsyncSession):
    equipment = await _make_equipment(db_session)
    response = await admin_client.put(f"/api/equipment/{equipment.id}/status", json={})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_status_update_invalid_condition(admin_client: AsyncClient, db_session: AsyncSession):
    equipment = await _make_equipment(db_session)
    response = await admin_client.put(f"/api/equipment/{equipment.id}/status", json={"condition": "broken"})
    assert response.status_code == 422
