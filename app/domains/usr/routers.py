# app/domains/usr/routers.py

"""
'usr' 도메인 (인증 및 사용자 조회)과 관련된 API 엔드포인트를 정의하는 모듈입니다.

- auth_router: /api/auth (가입, 관리자 등록, 로그인, 토큰, 내 정보)
- router:      /api/users (사용자 목록)
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.core.pagination import Page

from . import crud as usr_crud
from . import models as usr_models
from . import schemas as usr_schemas


auth_router = APIRouter(
    tags=["Authentication (인증)"],
    responses={401: {"description": "Not authenticated"}},
)

router = APIRouter(
    tags=["Users (사용자)"],
    responses={404: {"description": "Not found"}},
)


def _token_response(user: usr_models.User) -> dict:
    return {"access_token": deps.create_user_token(user), "token_type": "bearer", "user": user}


async def _authenticate_or_401(db: AsyncSession, email: str, password: str) -> usr_models.User:
    user = await usr_crud.user.authenticate(db, email=email, password=password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    return user


# =============================================================================
# 1. 인증 (Authentication) 엔드포인트
# =============================================================================
@auth_router.post("/signup", response_model=usr_schemas.TokenWithUser, status_code=status.HTTP_201_CREATED, summary="공개 회원가입")
async def signup(
    user_in: usr_schemas.UserSignup,
    db: AsyncSession = Depends(deps.get_db_session),
):
    """
    누구나 가입할 수 있습니다.
    - 역할은 worker, contractor, engineer 중에서만 선택 가능하며 그 외 값은 worker로 처리됩니다.
    - 가입 즉시 사용할 수 있는 Access Token을 함께 반환합니다.
    """
    db_user = await usr_crud.user.signup(db, obj_in=user_in)
    return _token_response(db_user)


@auth_router.post("/register", response_model=usr_schemas.UserRead, status_code=status.HTTP_201_CREATED, summary="사용자 등록 (관리자)")
async def register_user(
    user_in: usr_schemas.UserCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
):
    """관리자가 임의의 역할로 사용자를 등록합니다. (연락처 필수)"""
    return await usr_crud.user.create(db, obj_in=user_in)


@auth_router.post("/login", response_model=usr_schemas.TokenWithUser, summary="이메일/비밀번호 로그인")
async def login(
    credentials: usr_schemas.LoginRequest,
    db: AsyncSession = Depends(deps.get_db_session),
):
    user = await _authenticate_or_401(db, credentials.email, credentials.password)
    return _token_response(user)


@auth_router.post("/token", response_model=usr_schemas.Token, summary="Access Token 획득 (OAuth2 폼)")
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(deps.get_db_session),
):
    """Swagger UI 인증용 폼 로그인입니다. `username`에 이메일을 입력합니다."""
    user = await _authenticate_or_401(db, form_data.username, form_data.password)
    return {"access_token": deps.create_user_token(user), "token_type": "bearer"}


@auth_router.get("/me", response_model=usr_schemas.UserRead, summary="현재 사용자 정보 조회")
async def read_users_me(current_user: usr_models.User = Depends(deps.get_current_active_user)):
    return current_user


# =============================================================================
# 2. 사용자 (User) 조회 엔드포인트
# =============================================================================
@router.get("", response_model=Page[usr_schemas.UserRead], summary="사용자 목록 조회")
async def read_users(
    role: Optional[usr_models.UserRole] = Query(None, description="역할 필터"),
    search: Optional[str] = Query(None, description="이름 또는 이메일 부분 검색"),
    page_params: deps.PageParams = Depends(deps.get_page_params),
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: usr_models.User = Depends(deps.get_current_active_user),
):
    """
    사용자 목록을 최신 가입순으로 조회합니다. (인증 사용자 누구나)
    """
    users, total = await usr_crud.user.get_page_filtered(db, params=page_params, role=role, search=search)
    return deps.build_page(users, total=total, params=page_params)
