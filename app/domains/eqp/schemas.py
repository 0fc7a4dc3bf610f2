# app/domains/eqp/schemas.py

"""
'eqp' 도메인 (장비 및 이력)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import List, Optional
from datetime import date, datetime
from sqlmodel import SQLModel, Field
from pydantic import field_validator

from app.domains.prj.schemas import ProjectBrief
from . import models as eqp_models

CREATABLE_STATUSES = {eqp_models.EquipmentStatus.AVAILABLE, eqp_models.EquipmentStatus.MAINTENANCE}


class EquipmentCreate(eqp_models.EquipmentBase):
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name", "category", "serial_number", "notes", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("status")
    @classmethod
    def check_initial_status(cls, value):
        # 사용 중(in-use)은 배치로만, 폐기(retired)는 상태 변경으로만 도달합니다.
        if eqp_models.EquipmentStatus(value) not in CREATABLE_STATUSES:
            raise ValueError("New equipment must be available or in maintenance")
        return value


class EquipmentAssign(SQLModel):
    project: int = Field(..., description="배치할 프로젝트 ID")
    notes: Optional[str] = None


class EquipmentStatusUpdate(SQLModel):
    """status, condition, notes, last_service_date 중 하나 이상이 필요합니다."""
    status: Optional[eqp_models.EquipmentStatus] = None
    condition: Optional[eqp_models.EquipmentCondition] = None
    notes: Optional[str] = None
    last_service_date: Optional[date] = None

    def is_empty(self) -> bool:
        return not any((self.status, self.condition, self.notes, self.last_service_date))


class EquipmentHistoryRead(eqp_models.EquipmentHistoryBase):
    id: int
    project_id: Optional[int] = None
    changed_by: Optional[int] = None
    changed_at: datetime


class EquipmentListItem(eqp_models.EquipmentBase):
    id: int
    assigned_project_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    assigned_project: Optional[ProjectBrief] = None


class EquipmentRead(EquipmentListItem):
    history: List[EquipmentHistoryRead] = []
