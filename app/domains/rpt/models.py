# app/domains/rpt/models.py

"""
'rpt' 도메인 (PostgreSQL 'rpt' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

- reports: 프로젝트별 일일 현장 보고서
- report_images: 보고서 첨부 사진 (파일은 UPLOAD_DIR/reports 에 저장)
"""

from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, UTC
from datetime import date as date_type
from sqlalchemy import Integer, ForeignKey
from sqlalchemy.types import TIMESTAMP
from sqlalchemy.sql import func
from sqlmodel import Field, Relationship, SQLModel, Column


if TYPE_CHECKING:
    from app.domains.usr.models import User
    from app.domains.prj.models import Project


# =============================================================================
# 1. rpt.reports 테이블 모델
# =============================================================================
class ReportBase(SQLModel):
    text: str = Field(description="작업 내용")
    progress: Optional[str] = Field(default=None, max_length=255, description="진척 상황 (자유 입력)")
    date: date_type = Field(default_factory=date_type.today, index=True, description="보고 일자")


class Report(ReportBase, table=True):
    __tablename__ = "reports"
    __table_args__ = {'schema': 'rpt'}

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(
        sa_column=Column(Integer, ForeignKey("prj.projects.id", ondelete="RESTRICT"), nullable=False, index=True)
    )
    created_by: int = Field(
        sa_column=Column(Integer, ForeignKey("usr.users.id", ondelete="RESTRICT"), nullable=False)
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
    creator: Optional["User"] = Relationship()
    project: Optional["Project"] = Relationship()
    images: List["ReportImage"] = Relationship(
        back_populates="report",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "ReportImage.id",
        },
    )


# =============================================================================
# 2. rpt.report_images 테이블 모델
# =============================================================================
class ReportImageBase(SQLModel):
    url: str = Field(max_length=500, description="웹 접근 URL")
    filename: str = Field(max_length=255, index=True, description="UPLOAD_DIR/reports 하위 저장 파일명")


class ReportImage(ReportImageBase, table=True):
    __tablename__ = "report_images"
    __table_args__ = {'schema': 'rpt'}

    id: Optional[int] = Field(default=None, primary_key=True)
    report_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("rpt.reports.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )

    report: Optional[Report] = Relationship(back_populates="images")
