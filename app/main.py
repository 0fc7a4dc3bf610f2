import os
import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager
from arq import cron
from arq.connections import create_pool, RedisSettings

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

# 핵심 설정 및 데이터베이스 모듈 임포트
from app.core.config import settings
from app.core.database import engine, get_session
from app.core.logging_config import setup_logging

from app import API_PREFIX

# 태스크 모듈 임포트
from app.core import tasks as core_tasks
from app.domains.rpt import tasks as rpt_tasks

# 각 도메인의 라우터들을 임포트합니다.
from app.domains.usr.routers import auth_router, router as usr_router
from app.domains.prj.routers import router as prj_router
from app.domains.mat.routers import router as mat_router
from app.domains.att.routers import router as att_router
from app.domains.eqp.routers import router as eqp_router
from app.domains.rpt.routers import router as rpt_router

setup_logging()
logger = logging.getLogger(__name__)

# ARQ 워커가 실행할 태스크 함수 목록
worker_functions = [
    core_tasks.health_check_database_task,
    rpt_tasks.cleanup_orphan_report_images_task,
]


# ARQ 워커 설정 클래스
class ArqWorkerSettings:
    redis_settings = RedisSettings(host=settings.REDIS_HOST, port=settings.REDIS_PORT)
    functions = worker_functions
    cron_jobs = [
        cron(
            core_tasks.health_check_database_task,
            name="daily_db_health_check",
            hour=0, minute=0,
            timeout=300,
            keep_result=600,
        ),
        # 매일 새벽 1시(01:00)에 실행
        cron(
            rpt_tasks.cleanup_orphan_report_images_task,
            name="daily_orphan_report_image_cleanup",
            hour=1, minute=0,
            timeout=1800,
            keep_result=3600,
        ),
    ]


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI 애플리케이션의 수명 주기 이벤트(데이터베이스, ARQ Redis)를 함께 처리합니다.
    """
    logger.info("%s %s 시작 중... (env=%s)", settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV)
    app.state.redis = None
    try:
        # 1. 데이터베이스 스키마는 Alembic으로 관리합니다.
        logger.info("데이터베이스 마이그레이션은 Alembic으로 적용하세요. (alembic upgrade head)")

        # 2. ARQ Redis 커넥션 풀 생성 및 app.state에 할당
        app.state.redis = await create_pool(ArqWorkerSettings.redis_settings)
        logger.info("ARQ Redis 커넥션 풀 생성 완료.")
    except Exception:
        logger.exception("애플리케이션 시작 중 오류 발생")
        raise

    yield  # 애플리케이션 실행

    logger.info("애플리케이션 종료 중...")
    try:
        if app.state.redis:
            await app.state.redis.close()
            logger.info("ARQ Redis 연결 풀 종료 완료.")
        await engine.dispose()
        logger.info("데이터베이스 연결 풀 종료 완료.")
    except Exception:
        logger.exception("애플리케이션 종료 중 오류 발생")


# -- FastAPI 애플리케이션 인스턴스 생성 --
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# 업로드 파일(보고서 사진)은 UPLOAD_URL_PREFIX 아래로 제공합니다. (예: /uploads/reports/<파일명>)
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")

# -- CORS (Cross-Origin Resource Sharing) 미들웨어 설정 --
# 현장 단말기용 프론트엔드가 별도 출처에서 동작하므로 모든 출처를 허용합니다.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -- 도메인 라우터 포함 --
app.include_router(auth_router, prefix=f"{API_PREFIX}/auth")
app.include_router(usr_router, prefix=f"{API_PREFIX}/users")
app.include_router(prj_router, prefix=f"{API_PREFIX}/projects")
app.include_router(mat_router, prefix=f"{API_PREFIX}/materials")
app.include_router(att_router, prefix=f"{API_PREFIX}/attendance")
app.include_router(eqp_router, prefix=f"{API_PREFIX}/equipment")
app.include_router(rpt_router, prefix=f"{API_PREFIX}/reports")


# -- 루트 엔드포인트 --
@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    return {"message": f"Welcome to {settings.APP_NAME}. Visit /docs for interactive API documentation."}


# -- 헬스 체크 엔드포인트 --
@app.get(f"{API_PREFIX}/health", summary="Health Check", response_description="Status of the application and database connection.")
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    애플리케이션의 헬스 체크 엔드포인트입니다.
    데이터베이스 연결을 테스트하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        result = await session.exec(select(1))
        if result.first():
            return {"status": "ok", "message": "API is running", "database_connection": "successful"}
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database health check failed: No result from test query"
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error("헬스 체크 중 데이터베이스 연결 오류: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database connection error during health check: {e}"
        )
