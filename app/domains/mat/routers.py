# app/domains/mat/routers.py

"""
'mat' 도메인 (자재 요청)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.core.pagination import Page
from app.domains.usr.models import User as UsrUser

from . import crud as mat_crud
from . import models as mat_models
from . import schemas as mat_schemas


router = APIRouter(
    tags=["Materials (자재 요청)"],
    responses={404: {"description": "Not found"}},
)


@router.post("", response_model=mat_schemas.MaterialRequestRead, status_code=status.HTTP_201_CREATED, summary="자재 요청")
async def request_material(
    material_in: mat_schemas.MaterialRequestCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.site_recorder),
):
    """자재를 요청합니다. (관리자, 엔지니어, 협력업체)"""
    return await mat_crud.material_request.create_request(db, obj_in=material_in, requester=current_user)


@router.post("/{material_id}/review", response_model=mat_schemas.MaterialRequestRead, summary="자재 요청 승인/반려")
async def review_material(
    material_id: int,
    review_in: mat_schemas.MaterialReview,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    """
    대기 중인 자재 요청을 승인(`approve`) 또는 반려(`reject`)합니다. (관리자, 엔지니어)
    이미 처리된 요청은 400을 반환합니다.
    """
    db_obj = await mat_crud.material_request.get_or_404(db, id=material_id)
    return await mat_crud.material_request.review(db, db_obj=db_obj, review_in=review_in, reviewer=current_user)


@router.get("", response_model=Page[mat_schemas.MaterialRequestRead], summary="자재 요청 목록 조회")
async def read_materials(
    project: Optional[int] = Query(None, description="프로젝트 ID 필터"),
    status_filter: Optional[mat_models.MaterialStatus] = Query(None, alias="status", description="상태 필터"),
    page_params: deps.PageParams = Depends(deps.get_page_params),
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    items, total = await mat_crud.material_request.get_page_filtered(
        db, params=page_params, project_id=project, status_filter=status_filter
    )
    return deps.build_page(items, total=total, params=page_params)


@router.put("/{material_id}/status", response_model=mat_schemas.MaterialRequestRead, summary="자재 요청 상태 변경")
async def update_material_status(
    material_id: int,
    status_in: mat_schemas.MaterialStatusUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    db_obj = await mat_crud.material_request.get_or_404(db, id=material_id)
    return await mat_crud.material_request.update_status(
        db, db_obj=db_obj, target=status_in.status, changed_by=current_user
    )
