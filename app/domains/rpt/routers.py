# app/domains/rpt/routers.py

"""
'rpt' 도메인 (현장 보고서)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.core.pagination import Page
from app.domains.usr.models import User as UsrUser
from app.utils.dates import parse_calendar_day

from . import crud as rpt_crud
from . import schemas as rpt_schemas
from . import services as rpt_services


router = APIRouter(
    tags=["Reports (현장 보고서)"],
    responses={404: {"description": "Not found"}},
)


@router.post("", response_model=rpt_schemas.ReportRead, status_code=status.HTTP_201_CREATED, summary="현장 보고서 작성")
async def create_report(
    project: int = Form(..., description="프로젝트 ID"),
    text: str = Form(..., description="작업 내용"),
    progress: Optional[str] = Form(None, max_length=255, description="진척 상황"),
    report_date: Optional[str] = Form(None, alias="date", description="보고 일자 (기본값: 오늘)"),
    images: List[UploadFile] = File(default=[], description="첨부 사진 (최대 5장, 장당 5MB)"),
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.report_author),
):
    """
    사진을 첨부한 일일 현장 보고서를 작성합니다. (관리자, 엔지니어, 작업자)
    - 허용 확장자: .jpg .jpeg .png .gif .webp
    """
    day = None
    if report_date:
        try:
            day = parse_calendar_day(report_date)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Invalid date")

    return await rpt_services.create_report(
        db,
        project_id=project,
        text=text,
        progress=progress,
        report_date=day,
        images=images,
        author=current_user,
    )


@router.get("", response_model=Page[rpt_schemas.ReportRead], summary="현장 보고서 목록 조회")
async def read_reports(
    project: Optional[int] = Query(None, description="프로젝트 ID 필터"),
    day: Optional[date] = Query(None, alias="date", description="보고 일자 필터"),
    page_params: deps.PageParams = Depends(deps.get_page_params),
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    reports, total = await rpt_crud.report.get_page_filtered(db, params=page_params, project_id=project, day=day)
    return deps.build_page(reports, total=total, params=page_params)
