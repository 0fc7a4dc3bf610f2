# app/domains/usr/models.py

"""
'usr' 도메인 (PostgreSQL 'usr' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

현장 사용자(관리자, 엔지니어, 협력업체, 작업자) 계정을 저장하는 users 테이블을 포함합니다.
"""

from typing import Optional
from enum import Enum
from datetime import datetime, UTC
from sqlmodel import Field, SQLModel, Column
from sqlalchemy import String
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 사용자 역할(RBAC)
# =============================================================================
class UserRole(str, Enum):
    """
    사용자 역할을 정의하는 문자열 Enum 클래스입니다.
    권한은 계층이 아니라 라우트별 허용 역할 집합으로 판단합니다. (app.core.security.require_roles)
    """
    ADMIN = "admin"              # 시스템 관리자
    ENGINEER = "engineer"        # 현장 엔지니어
    CONTRACTOR = "contractor"    # 협력업체
    WORKER = "worker"            # 작업자


# 공개 가입으로 선택할 수 있는 역할 (관리자는 관리자만 등록 가능)
SELF_SIGNUP_ROLES = (UserRole.WORKER, UserRole.CONTRACTOR, UserRole.ENGINEER)


# =============================================================================
# usr.users 테이블 모델
# =============================================================================
class UserBase(SQLModel):
    """
    usr.users 테이블의 기본 속성을 정의하는 SQLModel Base 클래스입니다.
    """
    name: str = Field(max_length=100, description="사용자 이름")
    email: str = Field(max_length=255, sa_column_kwargs={"unique": True}, description="로그인 이메일 (소문자로 저장)")
    role: UserRole = Field(default=UserRole.WORKER, sa_column=Column(String(20), nullable=False), description="사용자 역할")
    phone: Optional[str] = Field(default=None, max_length=30, description="연락처")
    is_active: bool = Field(default=True, description="계정 활성 여부")


class User(UserBase, table=True):
    """
    PostgreSQL의 usr.users 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    """
    __tablename__ = "users"
    __table_args__ = {'schema': 'usr'}

    id: Optional[int] = Field(default=None, primary_key=True, description="사용자 고유 ID")
    password_hash: str = Field(max_length=255, description="해싱된 비밀번호")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )
