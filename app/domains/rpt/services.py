# app/domains/rpt/services.py

"""
'rpt' 도메인의 보고서 생성 서비스 모듈입니다.

첨부 사진을 검증·저장한 뒤 보고서를 DB에 기록합니다.
DB 기록이 실패하면 이미 저장한 사진 파일을 다시 삭제합니다.
"""

import logging
from datetime import date
from typing import List, Optional

from fastapi import HTTPException, UploadFile, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.domains.prj import crud as prj_crud
from app.domains.usr import models as usr_models
from app.utils import files

from . import crud as rpt_crud
from . import models as rpt_models
from . import schemas as rpt_schemas

logger = logging.getLogger(__name__)

REPORT_UPLOAD_SUBDIR = "reports"


def _validate_images(images: List[UploadFile]) -> None:
    if len(images) > settings.MAX_REPORT_IMAGES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At most {settings.MAX_REPORT_IMAGES} images are allowed",
        )
    for upload_file in images:
        files.check_image_extension(upload_file)


async def _discard_files(filenames: List[str]) -> None:
    for filename in filenames:
        await files.delete_stored_file(REPORT_UPLOAD_SUBDIR, filename)


async def create_report(
    db: AsyncSession,
    *,
    project_id: int,
    text: str,
    progress: Optional[str],
    report_date: Optional[date],
    images: List[UploadFile],
    author: usr_models.User,
) -> rpt_models.Report:
    """
    보고서를 생성합니다.

    1. 본문·프로젝트·사진(개수, 확장자)을 검증합니다.
    2. 사진을 UPLOAD_DIR/reports 에 저장합니다. (장당 MAX_UPLOAD_SIZE_MB 초과 시 413)
    3. 보고서와 사진 레코드를 저장합니다.
    """
    text = (text or "").strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Text is required")
    if not await prj_crud.project.exists(db, id=project_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    _validate_images(images)

    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    saved: List[tuple] = []
    try:
        for upload_file in images:
            saved.append(await files.save_upload_file(upload_file, REPORT_UPLOAD_SUBDIR, max_bytes=max_bytes))
    except HTTPException:
        await _discard_files([filename for filename, _ in saved])
        raise

    report_in = rpt_schemas.ReportCreate(
        project_id=project_id,
        text=text,
        progress=progress.strip() if progress else None,
        date=report_date or date.today(),
    )
    try:
        db_report = await rpt_crud.report.create_with_images(
            db, obj_in=report_in, created_by=author.id, images=saved
        )
    except Exception:
        logger.exception("보고서 저장 실패, 업로드 파일 %d건 삭제", len(saved))
        await db.rollback()
        await _discard_files([filename for filename, _ in saved])
        raise

    logger.info("보고서 생성: id=%s project_id=%s images=%d", db_report.id, project_id, len(saved))
    return db_report
