# app/domains/eqp/models.py

"""
'eqp' 도메인 (PostgreSQL 'eqp' 스키마)의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

- equipments: 현장 장비 (상태, 상태 등급, 배치 프로젝트)
- equipment_history: 장비 등록/배치/상태 변경/배치 해제 이력
"""

from typing import Optional, List, TYPE_CHECKING
from enum import Enum
from datetime import datetime, date, UTC
from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.types import TIMESTAMP
from sqlalchemy.sql import func
from sqlmodel import Field, Relationship, SQLModel, Column


if TYPE_CHECKING:
    from app.domains.prj.models import Project
    from app.domains.usr.models import User


class EquipmentCondition(str, Enum):
    NEW = "new"
    GOOD = "good"
    NEEDS_REPAIR = "needs-repair"
    POOR = "poor"


class EquipmentStatus(str, Enum):
    AVAILABLE = "available"
    IN_USE = "in-use"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"


class EquipmentAction(str, Enum):
    CREATED = "created"
    ASSIGNED = "assigned"
    STATUS_UPDATE = "status-update"
    RELEASED = "released"


# =============================================================================
# 1. eqp.equipments 테이블 모델
# =============================================================================
class EquipmentBase(SQLModel):
    name: str = Field(max_length=100)
    category: Optional[str] = Field(default=None, max_length=100)
    serial_number: Optional[str] = Field(default=None, max_length=100)
    condition: EquipmentCondition = Field(
        default=EquipmentCondition.GOOD,
        sa_column=Column(String(20), nullable=False, server_default=EquipmentCondition.GOOD.value),
    )
    status: EquipmentStatus = Field(
        default=EquipmentStatus.AVAILABLE,
        sa_column=Column(String(20), nullable=False, server_default=EquipmentStatus.AVAILABLE.value, index=True),
    )
    last_service_date: Optional[date] = Field(default=None, description="최근 정비 일자")
    notes: Optional[str] = Field(default=None)


class Equipment(EquipmentBase, table=True):
    __tablename__ = "equipments"
    __table_args__ = {'schema': 'eqp'}

    id: Optional[int] = Field(default=None, primary_key=True)
    assigned_project_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("prj.projects.id", ondelete="SET NULL"), nullable=True, index=True)
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
    assigned_project: Optional["Project"] = Relationship()
    history: List["EquipmentHistory"] = Relationship(
        back_populates="equipment",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "EquipmentHistory.id",
        },
    )


# =============================================================================
# 2. eqp.equipment_history 테이블 모델
# =============================================================================
class EquipmentHistoryBase(SQLModel):
    action: EquipmentAction = Field(sa_column=Column(String(30), nullable=False))
    status: Optional[str] = Field(default=None, max_length=20, description="변경 시점의 장비 상태")
    condition: Optional[str] = Field(default=None, max_length=20, description="변경 시점의 상태 등급")
    notes: Optional[str] = Field(default=None)


class EquipmentHistory(EquipmentHistoryBase, table=True):
    __tablename__ = "equipment_history"
    __table_args__ = {'schema': 'eqp'}

    id: Optional[int] = Field(default=None, primary_key=True)
    equipment_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("eqp.equipments.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    project_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("prj.projects.id", ondelete="SET NULL"), nullable=True)
    )
    changed_by: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("usr.users.id", ondelete="SET NULL"), nullable=True)
    )
    changed_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="변경 일시"
    )

    equipment: Optional[Equipment] = Relationship(back_populates="history")
