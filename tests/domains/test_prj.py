# tests/domains/test_prj.py

"""
'prj' 도메인 (프로젝트, 엔지니어 배정, 마일스톤) API 엔드포인트에 대한 통합 테스트를 정의하는 모듈입니다.
"""

from datetime import date

import pytest
from fastapi import HTTPException
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.domains.usr.models import User as UsrUser
from app.domains.prj import models as prj_models
from app.domains.prj.crud import check_milestone_transition
from app.domains.mat import models as mat_models
from app.domains.eqp import models as eqp_models


# =============================================================================
# 1. 마일스톤 상태 전이 규칙 (단위 테스트)
# =============================================================================
@pytest.mark.parametrize(
    "current, target",
    [
        ("pending", "in-progress"),
        ("pending", "completed"),
        ("in-progress", "completed"),
        ("completed", "in-progress"),
        ("pending", "pending"),
        ("completed", "completed"),
    ],
)
def test_milestone_transition_allowed(current, target):
    check_milestone_transition(current, target)


@pytest.mark.parametrize("current, target", [("in-progress", "pending"), ("completed", "pending")])
def test_milestone_transition_rejected(current, target):
    with pytest.raises(HTTPException) as exc_info:
        check_milestone_transition(current, target)
    assert exc_info.value.status_code == 400


# =============================================================================
# 2. 프로젝트 생성 / 조회 / 수정
# =============================================================================
@pytest.mark.asyncio
async def test_create_project_with_engineers(engineer_client: AsyncClient, test_engineer: UsrUser):
    response = await engineer_client.post(
        "/api/projects",
        json={
            "name": "Harbor Bridge",
            "start_date": "2024-03-01",
            "end_date": "2024-12-31",
            "budget": 1500000.5,
            "engineers": [test_engineer.id, test_engineer.id],
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Harbor Bridge"
    assert body["status"] == "planned"
    assert body["budget"] == 1500000.5
    assert [e["id"] for e in body["engineers"]] == [test_engineer.id]
    assert body["engineers"][0]["role"] == "engineer"
    assert body["milestones"] == []


@pytest.mark.asyncio
async def test_create_project_unknown_engineer(admin_client: AsyncClient):
    response = await admin_client.post("/api/projects", json={"name": "Ghost", "engineers": [999999]})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_project_end_before_start(admin_client: AsyncClient):
    response = await admin_client.post(
        "/api/projects", json={"name": "Backwards", "start_date": "2024-05-01", "end_date": "2024-04-01"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_project_forbidden_for_contractor(contractor_client: AsyncClient):
    response = await contractor_client.post("/api/projects", json={"name": "Nope"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_projects_filters(worker_client: AsyncClient, db_session: AsyncSession):
    db_session.add_all([
        prj_models.Project(name="North Plant", status="active"),
        prj_models.Project(name="South Plant", status="on-hold"),
        prj_models.Project(name="Office Fit-out", status="active"),
    ])
    await db_session.commit()

    response = await worker_client.get("/api/projects", params={"status": "active"})
    assert response.status_code == 200
    assert {p["name"] for p in response.json()["data"]} == {"North Plant", "Office Fit-out"}

    response = await worker_client.get("/api/projects", params={"search": "plant"})
    assert {p["name"] for p in response.json()["data"]} == {"North Plant", "South Plant"}
    assert response.json()["pagination"]["total"] == 2


@pytest.mark.asyncio
async def test_read_project_not_found(worker_client: AsyncClient):
    response = await worker_client.get("/api/projects/999999")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_project(engineer_client: AsyncClient, test_project: prj_models.Project):
    response = await engineer_client.put(
        f"/api/projects/{test_project.id}", json={"status": "completed", "end_date": "2025-01-31"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert response.json()["end_date"] == "2025-01-31"
    assert response.json()["name"] == test_project.name


@pytest.mark.asyncio
async def test_update_project_null_status_keeps_current(engineer_client: AsyncClient, test_project: prj_models.Project):
    response = await engineer_client.put(
        f"/api/projects/{test_project.id}", json={"status": None, "description": "phase 2"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "active"
    assert response.json()["description"] == "phase 2"


@pytest.mark.asyncio
async def test_update_project_end_before_existing_start(admin_client: AsyncClient, db_session: AsyncSession):
    project = prj_models.Project(name="Dated", start_date=date(2024, 6, 1))
    db_session.add(project)
    await db_session.commit()

    response = await admin_client.put(f"/api/projects/{project.id}", json={"end_date": "2024-01-01"})
    assert response.status_code == 422


# =============================================================================
# 3. 엔지니어 배정
# =============================================================================
@pytest.mark.asyncio
async def test_assign_engineers_is_set_union(
    admin_client: AsyncClient, test_project: prj_models.Project, test_engineer: UsrUser, user_factory
):
    from app.domains.usr.models import UserRole
    second = await user_factory("Choi Engineer", UserRole.ENGINEER)

    response = await admin_client.post(
        f"/api/projects/{test_project.id}/assign-engineers", json={"engineers": [test_engineer.id]}
    )
    assert response.status_code == 200

    response = await admin_client.post(
        f"/api/projects/{test_project.id}/assign-engineers",
        json={"engineers": [test_engineer.id, second.id, second.id, 999999]},
    )
    assert response.status_code == 200
    assert sorted(e["id"] for e in response.json()["engineers"]) == sorted([test_engineer.id, second.id])


@pytest.mark.asyncio
async def test_assign_engineers_requires_list(admin_client: AsyncClient, test_project: prj_models.Project):
    response = await admin_client.post(f"/api/projects/{test_project.id}/assign-engineers", json={"engineers": []})
    assert response.status_code == 422


# =============================================================================
# 4. 마일스톤
# =============================================================================
@pytest.mark.asyncio
async def test_milestone_lifecycle(engineer_client: AsyncClient, test_project: prj_models.Project):
    response = await engineer_client.post(
        f"/api/projects/{test_project.id}/milestones", json={"title": "Foundation", "due_date": "2024-07-01"}
    )
    assert response.status_code == 201
    milestones = response.json()["milestones"]
    assert len(milestones) == 1
    milestone_id = milestones[0]["id"]
    assert milestones[0]["status"] == "pending"

    url = f"/api/projects/{test_project.id}/milestones/{milestone_id}"
    response = await engineer_client.put(url, json={"status": "in-progress"})
    assert response.status_code == 200
    assert response.json()["milestones"][0]["status"] == "in-progress"

    response = await engineer_client.put(url, json={"status": "pending"})
    assert response.status_code == 400

    response = await engineer_client.put(url, json={"status": "completed", "notes": "poured"})
    assert response.status_code == 200
    assert response.json()["milestones"][0]["notes"] == "poured"

    response = await engineer_client.delete(url)
    assert response.status_code == 200
    assert response.json()["milestones"] == []


@pytest.mark.asyncio
async def test_milestone_of_other_project_is_not_found(
    admin_client: AsyncClient, test_project: prj_models.Project, db_session: AsyncSession
):
    other = prj_models.Project(name="Other Site")
    db_session.add(other)
    await db_session.commit()
    milestone = prj_models.Milestone(title="Elsewhere", project_id=other.id)
    db_session.add(milestone)
    await db_session.commit()

    response = await admin_client.put(
        f"/api/projects/{test_project.id}/milestones/{milestone.id}", json={"title": "Hijack"}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_add_milestone_requires_title(admin_client: AsyncClient, test_project: prj_models.Project):
    response = await admin_client.post(f"/api/projects/{test_project.id}/milestones", json={"title": ""})
    assert response.status_code == 422


# =============================================================================
# 5. 프로젝트 삭제
# =============================================================================
@pytest.mark.asyncio
async def test_delete_project_releases_equipment(
    admin_client: AsyncClient, test_project: prj_models.Project, db_session: AsyncSession
):
    equipment = eqp_models.Equipment(name="Excavator", status="in-use", assigned_project_id=test_project.id)
    db_session.add(equipment)
    db_session.add(prj_models.Milestone(title="Kickoff", project_id=test_project.id))
    await db_session.commit()

    response = await admin_client.delete(f"/api/projects/{test_project.id}")
    assert response.status_code == 204

    assert await db_session.get(prj_models.Project, test_project.id) is None
    await db_session.refresh(equipment)
    assert equipment.assigned_project_id is None
    assert equipment.status == "available"
    history = (await db_session.execute(
        select(eqp_models.EquipmentHistory).where(eqp_models.EquipmentHistory.equipment_id == equipment.id)
    )).scalars().all()
    assert [h.action for h in history] == ["released"]


@pytest.mark.asyncio
async def test_delete_project_with_materials_is_refused(
    admin_client: AsyncClient, test_project: prj_models.Project, test_engineer: UsrUser, db_session: AsyncSession
):
    db_session.add(mat_models.MaterialRequest(
        project_id=test_project.id, requested_by=test_engineer.id, name="Cement", quantity=10
    ))
    await db_session.commit()

    response = await admin_client.delete(f"/api/projects/{test_project.id}")
    assert response.status_code == 400
    assert "material requests" in response.json()["detail"]


@pytest.mark.asyncio
async def test_delete_project_admin_only(engineer_client: AsyncClient, test_project: prj_models.Project):
    response = await engineer_client.delete(f"/api/projects/{test_project.id}")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_project_not_found(admin_client: AsyncClient):
    response = await admin_client.delete("/api/projects/999999")
    assert response.status_code == 404
