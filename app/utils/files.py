# app/utils/files.py

"""
업로드 파일을 UPLOAD_DIR 하위에 저장하고 삭제하는 유틸리티 모듈입니다.

- 파일명은 `<밀리초 타임스탬프>-<무작위 문자열><확장자>` 형식으로 새로 생성합니다.
- 저장된 파일은 `{UPLOAD_URL_PREFIX}/<sub_dir>/<파일명>` URL로 제공됩니다. (app.main의 StaticFiles)
"""

import logging
import secrets
import time
from pathlib import Path
from typing import Tuple

import aiofiles
import aiofiles.os
from fastapi import HTTPException, UploadFile, status

from app.core.config import settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def get_upload_dir(sub_dir: str) -> Path:
    """
    하위 업로드 디렉토리 경로를 반환합니다.
    settings 값을 런타임에 읽으므로 테스트에서 monkeypatch한 UPLOAD_DIR도 반영됩니다.
    """
    return Path(settings.UPLOAD_DIR) / sub_dir


def build_upload_url(sub_dir: str, filename: str) -> str:
    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{sub_dir}/{filename}"


def make_stored_filename(original_filename: str) -> str:
    """중복을 피하기 위해 타임스탬프와 무작위 문자열로 저장 파일명을 만듭니다."""
    extension = Path(original_filename or "").suffix.lower()
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}{extension}"


def check_image_extension(upload_file: UploadFile) -> None:
    """허용된 이미지 확장자가 아니면 400을 발생시킵니다."""
    extension = Path(upload_file.filename or "").suffix.lower()
    if extension not in ALLOWED_IMAGE_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported image type: {upload_file.filename}",
        )


async def save_upload_file(upload_file: UploadFile, sub_dir: str, *, max_bytes: int) -> Tuple[str, str]:
    """
    업로드된 파일을 비동기적으로 저장하고 (저장 파일명, 웹 URL)을 반환합니다.

    - 크기가 max_bytes를 넘으면 413, 내용이 비어 있으면 400을 발생시킵니다.
    """
    # 한도보다 1바이트 더 읽어 초과 여부만 판단합니다.
    file_content = await upload_file.read(max_bytes + 1)
    if len(file_content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large: {upload_file.filename}",
        )
    if not file_content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Uploaded file is empty: {upload_file.filename}",
        )

    upload_dir = get_upload_dir(sub_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = make_stored_filename(upload_file.filename)

    async with aiofiles.open(upload_dir / filename, "wb") as f:
        await f.write(file_content)

    logger.info("업로드 파일 저장: %s/%s (%d bytes)", sub_dir, filename, len(file_content))
    return filename, build_upload_url(sub_dir, filename)


async def delete_stored_file(sub_dir: str, filename: str) -> bool:
    """저장된 파일을 삭제합니다. 이미 없으면 False를 반환합니다."""
    try:
        await aiofiles.os.remove(get_upload_dir(sub_dir) / filename)
    except FileNotFoundError:
        logger.warning("삭제할 업로드 파일 없음: %s/%s", sub_dir, filename)
        return False
    logger.info("업로드 파일 삭제: %s/%s", sub_dir, filename)
    return True
