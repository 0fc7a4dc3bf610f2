# app/domains/att/routers.py

"""
'att' 도메인 (출역 기록)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.core.pagination import Page
from app.domains.usr.models import User as UsrUser

from . import crud as att_crud
from . import schemas as att_schemas


router = APIRouter(
    tags=["Attendance (출역)"],
    responses={404: {"description": "Not found"}},
)


@router.post("", response_model=att_schemas.AttendanceDetail, status_code=status.HTTP_201_CREATED, summary="출역 기록 (upsert)")
async def mark_attendance(
    attendance_in: att_schemas.AttendanceMark,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.site_recorder),
):
    """
    작업자의 일일 출역을 기록합니다. (관리자, 엔지니어, 협력업체)
    같은 작업자·프로젝트·일자로 다시 기록하면 기존 기록을 갱신합니다.
    """
    return await att_crud.attendance.mark(db, obj_in=attendance_in, recorder=current_user)


@router.get("/worker/{worker_id}", response_model=Page[att_schemas.AttendanceWithProject], summary="작업자별 출역 조회")
async def read_worker_attendance(
    worker_id: int,
    date_from: Optional[date] = Query(None, alias="from", description="시작 일자 (포함)"),
    date_to: Optional[date] = Query(None, alias="to", description="종료 일자 (포함)"),
    page_params: deps.PageParams = Depends(deps.get_page_params),
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    records, total = await att_crud.attendance.get_worker_page(
        db, worker_id=worker_id, params=page_params, date_from=date_from, date_to=date_to
    )
    return deps.build_page(records, total=total, params=page_params)


@router.get("/project/{project_id}", response_model=Page[att_schemas.AttendanceWithWorker], summary="프로젝트별 출역 조회")
async def read_project_attendance(
    project_id: int,
    day: Optional[date] = Query(None, alias="date", description="조회 일자"),
    page_params: deps.PageParams = Depends(deps.get_page_params),
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    records, total = await att_crud.attendance.get_project_page(db, project_id=project_id, params=page_params, day=day)
    return deps.build_page(records, total=total, params=page_params)


@router.get("/project/{project_id}/summary", response_model=List[att_schemas.AttendanceSummaryItem], summary="프로젝트 출역 상태별 집계")
async def read_attendance_summary(
    project_id: int,
    day: Optional[date] = Query(None, alias="date", description="집계 일자"),
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.admin_or_engineer),
):
    return await att_crud.attendance.summarize(db, project_id=project_id, day=day)
