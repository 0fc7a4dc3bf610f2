# tests/domains/test_mat.py

"""
'mat' 도메인 (자재 요청) API 엔드포인트와 상태 전이 규칙에 대한 테스트 모듈입니다.
"""

import pytest
from fastapi import HTTPException
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from app.domains.usr.models import User as UsrUser
from app.domains.prj import models as prj_models
from app.domains.mat import models as mat_models
from app.domains.mat.crud import check_material_transition


async def _make_request(db_session: AsyncSession, project_id: int, user_id: int, status: str = "pending", name="Rebar D13"):
    db_obj = mat_models.MaterialRequest(
        project_id=project_id, requested_by=user_id, name=name, quantity=5, unit="ton", status=status
    )
    db_session.add(db_obj)
    await db_session.commit()
    await db_session.refresh(db_obj)
    return db_obj


# =============================================================================
# 1. 상태 전이 규칙 (단위 테스트)
# =============================================================================
@pytest.mark.parametrize(
    "current, target",
    [
        ("pending", "approved"),
        ("pending", "rejected"),
        ("approved", "ordered"),
        ("approved", "rejected"),
        ("ordered", "delivered"),
        ("rejected", "pending"),
    ],
)
def test_material_transition_allowed(current, target):
    assert check_material_transition(current, target) is True


def test_material_transition_same_status_is_noop():
    assert check_material_transition("ordered", "ordered") is False


@pytest.mark.parametrize(
    "current, target",
    [("pending", "ordered"), ("pending", "delivered"), ("delivered", "pending"), ("ordered", "approved")],
)
def test_material_transition_rejected(current, target):
    with pytest.raises(HTTPException) as exc_info:
        check_material_transition(current, target)
    assert exc_info.value.status_code == 400


# =============================================================================
# 2. 자재 요청 생성
# =============================================================================
@pytest.mark.asyncio
async def test_contractor_requests_material(
    contractor_client: AsyncClient, test_project: prj_models.Project, test_contractor: UsrUser
):
    response = await contractor_client.post(
        "/api/materials",
        json={"project": test_project.id, "name": " Cement ", "quantity": 120, "unit": "bag"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Cement"
    assert body["status"] == "pending"
    assert body["project_id"] == test_project.id
    assert body["requested_by"] == test_contractor.id
    assert body["requester"]["name"] == "Lee Contractor"
    assert body["approver"] is None


@pytest.mark.asyncio
async def test_request_material_unknown_project(engineer_client: AsyncClient):
    response = await engineer_client.post("/api/materials", json={"project": 999999, "name": "Sand", "quantity": 1})
    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, -3])
async def test_request_material_invalid_quantity(
    engineer_client: AsyncClient, test_project: prj_models.Project, quantity
):
    response = await engineer_client.post(
        "/api/materials", json={"project": test_project.id, "name": "Sand", "quantity": quantity}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_worker_cannot_request_material(worker_client: AsyncClient, test_project: prj_models.Project):
    response = await worker_client.post(
        "/api/materials", json={"project": test_project.id, "name": "Sand", "quantity": 1}
    )
    assert response.status_code == 403


# =============================================================================
# 3. 검토 (승인/반려)
# =============================================================================
@pytest.mark.asyncio
async def test_review_approve_records_reviewer(
    engineer_client: AsyncClient,
    test_project: prj_models.Project,
    test_engineer: UsrUser,
    db_session: AsyncSession,
):
    material = await _make_request(db_session, test_project.id, test_engineer.id)

    response = await engineer_client.post(f"/api/materials/{material.id}/review", json={"action": "approve"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "approved"
    assert body["approved_by"] == test_engineer.id
    assert body["approved_at"] is not None
    assert body["approver"]["id"] == test_engineer.id

    # 이미 처리된 요청은 다시 검토할 수 없습니다.
    response = await engineer_client.post(f"/api/materials/{material.id}/review", json={"action": "reject"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_review_reject_with_notes(
    admin_client: AsyncClient, test_project: prj_models.Project, test_admin_user: UsrUser, db_session: AsyncSession
):
    material = await _make_request(db_session, test_project.id, test_admin_user.id)

    response = await admin_client.post(
        f"/api/materials/{material.id}/review", json={"action": "reject", "notes": "over budget"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["notes"] == "over budget"


@pytest.mark.asyncio
async def test_review_invalid_action(
    admin_client: AsyncClient, test_project: prj_models.Project, test_admin_user: UsrUser, db_session: AsyncSession
):
    material = await _make_request(db_session, test_project.id, test_admin_user.id)
    response = await admin_client.post(f"/api/materials/{material.id}/review", json={"action": "maybe"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_review_not_found(admin_client: AsyncClient):
    response = await admin_client.post("/api/materials/999999/review", json={"action": "approve"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_contractor_cannot_review(
    contractor_client: AsyncClient,
    test_project: prj_models.Project,
    test_contractor: UsrUser,
    db_session: AsyncSession,
):
    material = await _make_request(db_session, test_project.id, test_contractor.id)
    response = await contractor_client.post(f"/api/materials/{material.id}/review", json={"action": "approve"})
    assert response.status_code == 403


# =============================================================================
# 4. 상태 변경 및 목록 조회
# =============================================================================
@pytest.mark.asyncio
async def test_status_flow_to_delivered(
    engineer_client: AsyncClient, test_project: prj_models.Project, test_engineer: UsrUser, db_session: AsyncSession
):
    material = await _make_request(db_session, test_project.id, test_engineer.id, status="approved")
    url = f"/api/materials/{material.id}/status"

    response = await engineer_client.put(url, json={"status": "delivered"})
    assert response.status_code == 400

    response = await engineer_client.put(url, json={"status": "ordered"})
    assert response.status_code == 200
    assert response.json()["status"] == "ordered"

    # 같은 상태로의 변경은 변화 없이 성공합니다.
    response = await engineer_client.put(url, json={"status": "ordered"})
    assert response.status_code == 200

    response = await engineer_client.put(url, json={"status": "delivered"})
    assert response.status_code == 200
    assert response.json()["status"] == "delivered"


@pytest.mark.asyncio
async def test_status_update_unknown_value(
    engineer_client: AsyncClient, test_project: prj_models.Project, test_engineer: UsrUser, db_session: AsyncSession
):
    material = await _make_request(db_session, test_project.id, test_engineer.id)
    response = await engineer_client.put(f"/api/materials/{material.id}/status", json={"status": "lost"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_materials_filters(
    worker_client: AsyncClient,
    test_project: prj_models.Project,
    test_worker: UsrUser,
    db_session: AsyncSession,
):
    other = prj_models.Project(name="Depot")
    db_session.add(other)
    await db_session.commit()

    await _make_request(db_session, test_project.id, test_worker.id, name="Pipe")
    await _make_request(db_session, test_project.id, test_worker.id, status="approved", name="Valve")
    await _make_request(db_session, other.id, test_worker.id, name="Paint")

    response = await worker_client.get("/api/materials", params={"project": test_project.id})
    assert response.status_code == 200
    assert {m["name"] for m in response.json()["data"]} == {"Pipe", "Valve"}

    response = await worker_client.get(
        "/api/materials", params={"project": test_project.id, "status": "approved"}
    )
    data = response.json()["data"]
    assert [m["name"] for m in data] == ["Valve"]
    assert data[0]["requester"]["id"] == test_worker.id
    assert response.json()["pagination"]["total"] == 1


@pytest.mark.asyncio
async def test_status_update_to_approved_records_reviewer(
    engineer_client: AsyncClient,
    test_project: prj_models.Project,
    test_contractor: UsrUser,
    test_engineer: UsrUser,
    db_session: AsyncSession,
):
    material = await _make_request(db_session, test_project.id, test_contractor.id)

    response = await engineer_client.put(f"/api/materials/{material.id}/status", json={"status": "approved"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "approved"
    assert body["approved_by"] == test_engineer.id
    assert body["approved_at"] is not None
    assert body["approver"]["id"] == test_engineer.id
    assert body["requester"]["id"] == test_contractor.id


@pytest.mark.asyncio
async def test_rejected_request_can_be_resubmitted(
    admin_client: AsyncClient,
    test_project: prj_models.Project,
    test_contractor: UsrUser,
    test_admin_user: UsrUser,
    db_session: AsyncSession,
):
    material = await _make_request(db_session, test_project.id, test_contractor.id)
    url = f"/api/materials/{material.id}/status"

    response = await admin_client.put(url, json={"status": "rejected"})
    assert response.status_code == 200
    assert response.json()["approved_by"] == test_admin_user.id

    response = await admin_client.put(url, json={"status": "pending"})
    assert response.status_code == 200
    assert response.json()["status"] == "pending"

    # 재요청된 건은 다시 검토할 수 있습니다.
    response = await admin_client.post(f"/api/materials/{material.id}/review", json={"action": "approve"})
    assert response.status_code == 200
    assert response.json()["status"] == "approved"
