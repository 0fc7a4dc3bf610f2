# app/domains/usr/schemas.py

"""
'usr' 도메인 (사용자 및 인증)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel, EmailStr, field_validator

from . import models as usr_models


def _normalize_email(value: str) -> str:
    return value.strip().lower()


# =============================================================================
# 1. 사용자 (User) 스키마
# =============================================================================
class UserBase(SQLModel):
    """사용자 정보의 기본 필드를 정의하는 스키마"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., max_length=255)
    role: usr_models.UserRole = Field(default=usr_models.UserRole.WORKER, description="사용자 역할")
    phone: Optional[str] = Field(None, max_length=30)

    @field_validator("name", "phone", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value) if isinstance(value, str) else value


class UserSignup(UserBase):
    """
    공개 가입 요청 스키마.
    역할은 문자열로 받아 허용 목록(worker, contractor, engineer)에 없으면 worker로 대체합니다.
    """
    role: Optional[str] = Field(None, description="희망 역할 (admin은 허용되지 않음)")
    password: str = Field(..., min_length=6)

    @property
    def granted_role(self) -> usr_models.UserRole:
        allowed = {role.value: role for role in usr_models.SELF_SIGNUP_ROLES}
        return allowed.get(self.role, usr_models.UserRole.WORKER)


class UserCreate(UserBase):
    """관리자가 사용자를 등록할 때 사용하는 스키마 (연락처 필수)"""
    phone: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=6)


class UserRead(UserBase):
    """
    사용자 정보 조회 스키마.
    비밀번호 해시값 등 민감한 정보는 제외됩니다.
    """
    id: int
    is_active: bool
    created_at: datetime = Field(..., description="레코드 생성 일시")
    updated_at: datetime = Field(..., description="레코드 마지막 업데이트 일시")


class UserBrief(SQLModel):
    """다른 도메인 응답에 포함되는 사용자 요약 정보"""
    id: int
    name: str
    email: str
    role: usr_models.UserRole


# =============================================================================
# 2. 인증 (Auth) 스키마
# =============================================================================
class LoginRequest(BaseModel):
    """JSON 로그인 요청 스키마"""
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value) if isinstance(value, str) else value


class Token(BaseModel):
    """JWT 토큰 응답 스키마"""
    access_token: str
    token_type: str


class TokenWithUser(Token):
    """로그인/가입 응답: 토큰과 사용자 정보를 함께 반환합니다."""
    user: UserRead
