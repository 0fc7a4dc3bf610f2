# app/domains/eqp/routers.py

"""
'eqp' 도메인 (장비 및 이력)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.core.pagination import Page
from app.domains.usr.models import User as UsrUser

from . import crud as eqp_crud
from . import models as eqp_models
from . import schemas as eqp_schemas


router = APIRouter(
    tags=["Equipment (장비)"],
    responses={404: {"description": "Not found"}},
)


@router.post("", response_model=eqp_schemas.EquipmentRead, status_code=status.HTTP_201_CREATED, summary="장비 등록")
async def create_equipment(
    equipment_in: eqp_schemas.EquipmentCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    """장비를 등록하고 'created' 이력을 남깁니다. (관리자, 엔지니어)"""
    return await eqp_crud.equipment.create(db, obj_in=equipment_in, created_by=current_user)


@router.get("", response_model=Page[eqp_schemas.EquipmentListItem], summary="장비 목록 조회")
async def read_equipment_list(
    status_filter: Optional[eqp_models.EquipmentStatus] = Query(None, alias="status", description="상태 필터"),
    project: Optional[int] = Query(None, description="배치 프로젝트 ID 필터"),
    page_params: deps.PageParams = Depends(deps.get_page_params),
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    items, total = await eqp_crud.equipment.get_page_filtered(
        db, params=page_params, status_filter=status_filter, project_id=project
    )
    return deps.build_page(items, total=total, params=page_params)


@router.get("/{equipment_id}", response_model=eqp_schemas.EquipmentRead, summary="장비 상세 조회 (이력 포함)")
async def read_equipment(
    equipment_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    return await eqp_crud.equipment.get_or_404(db, id=equipment_id)


@router.post("/{equipment_id}/assign", response_model=eqp_schemas.EquipmentRead, summary="장비 프로젝트 배치")
async def assign_equipment(
    equipment_id: int,
    assign_in: eqp_schemas.EquipmentAssign,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    """
    장비를 프로젝트에 배치합니다. (관리자, 엔지니어)
    폐기 또는 정비 중인 장비는 배치할 수 없습니다.
    """
    db_obj = await eqp_crud.equipment.get_or_404(db, id=equipment_id)
    return await eqp_crud.equipment.assign(db, db_obj=db_obj, assign_in=assign_in, assigned_by=current_user)


@router.put("/{equipment_id}/status", response_model=eqp_schemas.EquipmentRead, summary="장비 상태 변경")
async def update_equipment_status(
    equipment_id: int,
    status_in: eqp_schemas.EquipmentStatusUpdate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    db_obj = await eqp_crud.equipment.get_or_404(db, id=equipment_id)
    return await eqp_crud.equipment.update_status(db, db_obj=db_obj, obj_in=status_in, changed_by=current_user)
