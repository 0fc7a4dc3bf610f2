# app/domains/mat/schemas.py

"""
'mat' 도메인 (자재 요청)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import Literal, Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import field_validator

from app.domains.usr.schemas import UserBrief
from . import models as mat_models


class MaterialRequestCreate(SQLModel):
    project: int = Field(..., description="프로젝트 ID")
    name: str = Field(..., min_length=1, max_length=200)
    quantity: float = Field(..., gt=0)
    unit: Optional[str] = Field(None, max_length=30)
    notes: Optional[str] = None

    @field_validator("name", "unit", "notes", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class MaterialReview(SQLModel):
    """검토 요청: approve 또는 reject"""
    action: Literal["approve", "reject"]
    notes: Optional[str] = None


class MaterialStatusUpdate(SQLModel):
    status: mat_models.MaterialStatus


class MaterialRequestRead(mat_models.MaterialRequestBase):
    id: int
    project_id: int
    status: mat_models.MaterialStatus
    requested_by: int
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    requester: Optional[UserBrief] = None
    approver: Optional[UserBrief] = None
