# app/domains/prj/models.py

"""
'prj' 도메인 (PostgreSQL 'prj' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

이 모듈은 'prj' 스키마에 속하는 모든 테이블에 대한 SQLModel 클래스를 포함합니다.
- projects: 건설 프로젝트
- project_engineers: 프로젝트-엔지니어 다대다 연결 테이블
- milestones: 프로젝트 공정 마일스톤
"""

from typing import Optional, List, TYPE_CHECKING
from enum import Enum
from datetime import datetime, date, UTC
from sqlalchemy import Numeric, String, Integer, ForeignKey
from sqlalchemy.types import TIMESTAMP
from sqlalchemy.sql import func
from sqlmodel import Field, Relationship, SQLModel, Column


#  다른 도메인의 모델을 참조해야 할 경우 (순환 임포트 방지)
if TYPE_CHECKING:
    from app.domains.usr.models import User


class ProjectStatus(str, Enum):
    PLANNED = "planned"
    ACTIVE = "active"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"


class MilestoneStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


# =============================================================================
# 1. prj.project_engineers (다대다 연결 테이블)
# =============================================================================
class ProjectEngineer(SQLModel, table=True):
    """
    Project와 User(엔지니어)의 다대다 관계를 위한 연결 테이블 모델.
    프로젝트가 삭제되면 연결도 함께 삭제됩니다.
    """
    __tablename__ = "project_engineers"
    __table_args__ = {'schema': 'prj'}

    project_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("prj.projects.id", ondelete="CASCADE"), primary_key=True)
    )
    user_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("usr.users.id", ondelete="CASCADE"), primary_key=True)
    )
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )


# =============================================================================
# 2. prj.projects 테이블 모델
# =============================================================================
class ProjectBase(SQLModel):
    name: str = Field(max_length=200, description="프로젝트 이름")
    description: Optional[str] = Field(default=None)
    start_date: Optional[date] = Field(default=None, description="착공일")
    end_date: Optional[date] = Field(default=None, description="준공 예정일")
    status: ProjectStatus = Field(
        default=ProjectStatus.PLANNED,
        sa_column=Column(String(20), nullable=False, server_default=ProjectStatus.PLANNED.value),
    )
    budget: Optional[float] = Field(default=None, sa_column=Column(Numeric(18, 2)))


class Project(ProjectBase, table=True):
    __tablename__ = "projects"
    __table_args__ = {'schema': 'prj'}

    id: Optional[int] = Field(default=None, primary_key=True)
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
    # 다대다 관계 (비동기 환경이므로 조회 시 selectinload로 미리 로딩합니다)
    engineers: List["User"] = Relationship(link_model=ProjectEngineer)
    # 일대다 관계
    milestones: List["Milestone"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "Milestone.id",
        },
    )


# =============================================================================
# 3. prj.milestones 테이블 모델
# =============================================================================
class MilestoneBase(SQLModel):
    title: str = Field(max_length=200)
    due_date: Optional[date] = Field(default=None)
    status: MilestoneStatus = Field(
        default=MilestoneStatus.PENDING,
        sa_column=Column(String(20), nullable=False, server_default=MilestoneStatus.PENDING.value),
    )
    notes: Optional[str] = Field(default=None)


class Milestone(MilestoneBase, table=True):
    __tablename__ = "milestones"
    __table_args__ = {'schema': 'prj'}

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("prj.projects.id", ondelete="CASCADE"), nullable=False, index=True)
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

    project: Optional[Project] = Relationship(back_populates="milestones")
