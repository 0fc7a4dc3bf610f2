# app/domains/att/models.py

"""
'att' 도메인 (PostgreSQL 'att' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional, TYPE_CHECKING
from enum import Enum
from datetime import datetime, UTC
from datetime import date as date_type
from sqlalchemy import String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.types import TIMESTAMP
from sqlalchemy.sql import func
from sqlmodel import Field, Relationship, SQLModel, Column


if TYPE_CHECKING:
    from app.domains.usr.models import User
    from app.domains.prj.models import Project


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"


# =============================================================================
# att.attendance 테이블 모델
# =============================================================================
class AttendanceBase(SQLModel):
    date: date_type = Field(description="출역 일자")
    check_in: Optional[datetime] = Field(default=None, sa_column=Column(TIMESTAMP(timezone=True), nullable=True))
    check_out: Optional[datetime] = Field(default=None, sa_column=Column(TIMESTAMP(timezone=True), nullable=True))
    notes: Optional[str] = Field(default=None)


class Attendance(AttendanceBase, table=True):
    """작업자·프로젝트·일자 조합당 하나의 레코드만 존재합니다."""
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("worker_id", "project_id", "date", name="uq_attendance_worker_project_date"),
        {'schema': 'att'},
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    worker_id: int = Field(
        sa_column=Column(Integer, ForeignKey("usr.users.id", ondelete="RESTRICT"), nullable=False, index=True)
    )
    project_id: int = Field(
        sa_column=Column(Integer, ForeignKey("prj.projects.id", ondelete="RESTRICT"), nullable=False, index=True)
    )
    status: AttendanceStatus = Field(
        default=AttendanceStatus.PRESENT,
        sa_column=Column(String(20), nullable=False, server_default=AttendanceStatus.PRESENT.value),
    )
    recorded_by: int = Field(
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
    worker: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Attendance.worker_id]"}
    )
    recorder: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Attendance.recorded_by]"}
    )
    project: Optional["Project"] = Relationship()
