# app/domains/prj/routers.py

"""
'prj' 도메인 (프로젝트, 엔지니어 배정, 마일스톤)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.core.pagination import Page
from app.domains.usr.models import User as UsrUser

from . import crud as prj_crud
from . import models as prj_models
from . import schemas as prj_schemas


router = APIRouter(
    tags=["Projects (프로젝트)"],
    responses={404: {"description": "Not found"}},
)


#  =============================================================================
#  1. 프로젝트 엔드포인트
#  =============================================================================
@router.post("", response_model=prj_schemas.ProjectRead, status_code=status.HTTP_201_CREATED, summary="프로젝트 생성")
async def create_project(
    project_in: prj_schemas.ProjectCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    """
    새 프로젝트를 생성합니다. (관리자, 엔지니어)
    - `engineers`에 존재하지 않는 사용자 ID가 있으면 400을 반환합니다.
    """
    return await prj_crud.project.create(db, obj_in=project_in)


@router.get("", response_model=Page[prj_schemas.ProjectListItem], summary="프로젝트 목록 조회")
async def read_projects(
    status_filter: Optional[prj_models.ProjectStatus] = Query(None, alias="status", description="상태 필터"),
    search: Optional[str] = Query(None, description="프로젝트 이름 부분 검색"),
    page_params: deps.PageParams = Depends(deps.get_page_params),
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    projects, total = await prj_crud.project.get_page_filtered(
        db, params=page_params, status_filter=status_filter, search=search
    )
    return deps.build_page(projects, total=total, params=page_params)


@router.get("/{project_id}", response_model=prj_schemas.ProjectRead, summary="프로젝트 상세 조회")
async def read_project(
    project_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    return await prj_crud.project.get_or_404(db, id=project_id)


@router.put("/{project_id}", response_model=prj_schemas.ProjectRead, summary="프로젝트 수정")
async def update_project(
    project_id: int,
    project_in: prj_schemas.ProjectUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    db_project = await prj_crud.project.get_or_404(db, id=project_id)
    return await prj_crud.project.update(db, db_obj=db_project, obj_in=project_in)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT, summary="프로젝트 삭제")
async def delete_project(
    project_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.get_current_admin_user),
):
    """
    프로젝트를 삭제합니다. (관리자 권한 필요)
    자재 요청, 출역 기록, 보고서가 남아 있는 프로젝트는 삭제할 수 없습니다.
    """
    db_project = await prj_crud.project.delete(db, id=project_id)
    if db_project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return {}


@router.post("/{project_id}/assign-engineers", response_model=prj_schemas.ProjectRead, summary="엔지니어 배정")
async def assign_engineers(
    project_id: int,
    assign_in: prj_schemas.EngineerAssign,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    db_project = await prj_crud.project.get_or_404(db, id=project_id)
    return await prj_crud.project.assign_engineers(db, db_obj=db_project, engineer_ids=assign_in.engineers)


#  =============================================================================
#  2. 마일스톤 엔드포인트 (응답은 마일스톤이 반영된 프로젝트)
#  =============================================================================
@router.post(
    "/{project_id}/milestones",
    response_model=prj_schemas.ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="마일스톤 추가",
)
async def add_milestone(
    project_id: int,
    milestone_in: prj_schemas.MilestoneCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    await prj_crud.project.get_or_404(db, id=project_id)
    await prj_crud.milestone.create_for_project(db, project_id=project_id, obj_in=milestone_in)
    return await prj_crud.project.get_or_404(db, id=project_id)


@router.put("/{project_id}/milestones/{milestone_id}", response_model=prj_schemas.ProjectRead, summary="마일스톤 수정")
async def update_milestone(
    project_id: int,
    milestone_id: int,
    milestone_in: prj_schemas.MilestoneUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    """
    마일스톤을 부분 수정합니다.
    상태는 pending → in-progress → completed 순으로 진행하며, completed는 in-progress로 되돌릴 수 있습니다.
    """
    await prj_crud.project.get_or_404(db, id=project_id)
    db_milestone = await prj_crud.milestone.get_for_project(db, project_id=project_id, milestone_id=milestone_id)
    await prj_crud.milestone.update(db, db_obj=db_milestone, obj_in=milestone_in)
    return await prj_crud.project.get_or_404(db, id=project_id)


@router.delete("/{project_id}/milestones/{milestone_id}", response_model=prj_schemas.ProjectRead, summary="마일스톤 삭제")
async def delete_milestone(
    project_id: int,
    milestone_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    await prj_crud.project.get_or_404(db, id=project_id)
    await prj_crud.milestone.get_for_project(db, project_id=project_id, milestone_id=milestone_id)
    await prj_crud.milestone.delete(db, id=milestone_id)
    return await prj_crud.project.get_or_404(db, id=project_id)
