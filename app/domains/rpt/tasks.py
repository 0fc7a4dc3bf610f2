# app/domains/rpt/tasks.py

"""
'rpt' 도메인의 ARQ 백그라운드 태스크 모듈입니다.
"""

import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional

from app.core.config import settings
from app.core.database import get_async_session_context
from app.utils import files

from . import crud as rpt_crud
from .services import REPORT_UPLOAD_SUBDIR

logger = logging.getLogger(__name__)


def find_orphan_files(
    upload_dir: Path,
    referenced: Iterable[str],
    *,
    grace_seconds: float,
    now: Optional[float] = None,
) -> List[Path]:
    """
    업로드 디렉토리에서 어떤 보고서도 참조하지 않는 파일을 찾습니다.
    수정 시각이 grace_seconds 보다 최근인 파일은 업로드 처리 중일 수 있으므로 제외합니다.
    """
    if not upload_dir.is_dir():
        return []
    referenced = set(referenced)
    cutoff = (now if now is not None else time.time()) - grace_seconds
    return sorted(
        path for path in upload_dir.iterdir()
        if path.is_file() and path.name not in referenced and path.stat().st_mtime < cutoff
    )


async def cleanup_orphan_report_images_task(ctx):
    """
    ARQ 워커에 의해 실행될 고아 보고서 사진 정리 태스크.
    report_images 테이블에 기록되지 않은 파일을 UPLOAD_DIR/reports 에서 삭제합니다.
    """
    logger.info("ARQ 태스크: 고아 보고서 사진 정리 시작")

    async with get_async_session_context() as session:
        referenced = await rpt_crud.report.get_referenced_filenames(session)

    orphans = find_orphan_files(
        files.get_upload_dir(REPORT_UPLOAD_SUBDIR),
        referenced,
        grace_seconds=settings.UPLOAD_CLEANUP_GRACE_HOURS * 3600,
    )
    deleted_count = 0
    for path in orphans:
        if await files.delete_stored_file(REPORT_UPLOAD_SUBDIR, path.name):
            deleted_count += 1

    logger.info("고아 보고서 사진 정리 완료: %d건 삭제", deleted_count)
    return {"status": "success", "message": "Orphan report images cleaned up.", "deleted_count": deleted_count}
