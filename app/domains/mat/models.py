# app/domains/mat/models.py

"""
'mat' 도메인 (PostgreSQL 'mat' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional, TYPE_CHECKING
from enum import Enum
from datetime import datetime, UTC
from sqlalchemy import String, Integer, Float, ForeignKey
from sqlalchemy.types import TIMESTAMP
from sqlalchemy.sql import func
from sqlmodel import Field, Relationship, SQLModel, Column


if TYPE_CHECKING:
    from app.domains.usr.models import User
    from app.domains.prj.models import Project


class MaterialStatus(str, Enum):
    PENDING = "pending"        # 요청됨 (검토 대기)
    APPROVED = "approved"
    REJECTED = "rejected"
    ORDERED = "ordered"        # 발주 완료
    DELIVERED = "delivered"    # 현장 입고 (최종 상태)


# =============================================================================
# mat.material_requests 테이블 모델
# =============================================================================
class MaterialRequestBase(SQLModel):
    name: str = Field(max_length=200, description="자재명")
    quantity: float = Field(sa_column=Column(Float, nullable=False), description="요청 수량")
    unit: Optional[str] = Field(default=None, max_length=30, description="단위 (예: 포대, m3)")
    notes: Optional[str] = Field(default=None)


class MaterialRequest(MaterialRequestBase, table=True):
    __tablename__ = "material_requests"
    __table_args__ = {'schema': 'mat'}

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(
        sa_column=Column(Integer, ForeignKey("prj.projects.id", ondelete="RESTRICT"), nullable=False, index=True)
    )
    requested_by: int = Field(
        sa_column=Column(Integer, ForeignKey("usr.users.id", ondelete="RESTRICT"), nullable=False)
    )
    status: MaterialStatus = Field(
        default=MaterialStatus.PENDING,
        sa_column=Column(String(20), nullable=False, server_default=MaterialStatus.PENDING.value, index=True),
    )
    approved_by: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("usr.users.id", ondelete="SET NULL"), nullable=True)
    )
    approved_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(TIMESTAMP(timezone=True), nullable=True),
        description="검토(승인/반려) 일시"
    )
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

    # --- 관계 정의 ---
    # 같은 테이블(usr.users)을 두 번 참조하므로 foreign_keys를 명시합니다.
    requester: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[MaterialRequest.requested_by]"}
    )
    approver: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[MaterialRequest.approved_by]"}
    )
    project: Optional["Project"] = Relationship()
