# app/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 데이터베이스 세션 관리 (get_db_session).
- 현재 인증된 사용자 정보 획득 및 역할 기반 권한 검사.
- 목록 조회 페이징 파라미터.

라우터는 이 모듈만 임포트하여 필요한 의존성을 사용합니다.
"""

from typing import AsyncGenerator
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.database import get_session as get_main_app_session

# flake8: noqa
from app.core.security import (
    create_access_token,
    create_user_token,
    get_password_hash,
    verify_password,
    oauth2_scheme,
    get_current_user_from_token,
    get_current_active_user,
    get_current_admin_user,
    require_roles,
)
from app.core.pagination import PageParams, get_page_params, build_page
from app.domains.usr.models import UserRole


# --- 라우트별 허용 역할 의존성 ---
# 여러 라우터에서 반복되는 역할 조합을 한 곳에서 정의합니다.
admin_or_engineer = require_roles(UserRole.ADMIN, UserRole.ENGINEER)
site_recorder = require_roles(UserRole.ADMIN, UserRole.ENGINEER, UserRole.CONTRACTOR)
report_author = require_roles(UserRole.ADMIN, UserRole.ENGINEER, UserRole.WORKER)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    app.core.database.get_session을 래핑하여 사용합니다.
    """
    async for session in get_main_app_session():
        yield session
