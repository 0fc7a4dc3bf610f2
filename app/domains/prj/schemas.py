# app/domains/prj/schemas.py

"""
'prj' 도메인 (프로젝트 및 마일스톤)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import List, Optional
from datetime import date, datetime
from sqlmodel import SQLModel, Field
from pydantic import BaseModel, field_validator, model_validator
from pydantic import Field as PydanticField

from app.domains.usr.schemas import UserBrief
from . import models as prj_models


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _check_date_range(start: Optional[date], end: Optional[date]) -> None:
    if start and end and end < start:
        raise ValueError("end_date must not be before start_date")


# =============================================================================
# 1. 마일스톤 (Milestone) 스키마
# =============================================================================
class MilestoneCreate(SQLModel):
    title: str = Field(..., min_length=1, max_length=200)
    due_date: Optional[date] = None
    status: prj_models.MilestoneStatus = prj_models.MilestoneStatus.PENDING
    notes: Optional[str] = None

    @field_validator("title", "notes", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class MilestoneUpdate(SQLModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    due_date: Optional[date] = None
    status: Optional[prj_models.MilestoneStatus] = None
    notes: Optional[str] = None

    @field_validator("title", "notes", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class MilestoneRead(prj_models.MilestoneBase):
    id: int
    project_id: int
    created_at: datetime
    updated_at: datetime


# =============================================================================
# 2. 프로젝트 (Project) 스키마
# =============================================================================
class ProjectCreate(prj_models.ProjectBase):
    name: str = Field(..., min_length=1, max_length=200)
    engineers: List[int] = Field(default_factory=list, description="담당 엔지니어 사용자 ID 목록")

    @field_validator("name", "description", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)

    @model_validator(mode="after")
    def check_dates(self):
        _check_date_range(self.start_date, self.end_date)
        return self


class ProjectUpdate(SQLModel):
    """프로젝트 부분 수정 스키마. 요청에 포함된 필드만 반영합니다."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[prj_models.ProjectStatus] = None
    budget: Optional[float] = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def strip_text(cls, value):
        return _strip(value)

    @model_validator(mode="after")
    def check_dates(self):
        _check_date_range(self.start_date, self.end_date)
        return self


class EngineerAssign(BaseModel):
    engineers: List[int] = PydanticField(..., min_length=1, description="배정할 엔지니어 사용자 ID 목록")


class ProjectBrief(SQLModel):
    """다른 도메인 응답에 포함되는 프로젝트 요약 정보"""
    id: int
    name: str


class ProjectListItem(prj_models.ProjectBase):
    id: int
    created_at: datetime
    updated_at: datetime
    engineers: List[UserBrief] = []


class ProjectRead(ProjectListItem):
    milestones: List[MilestoneRead] = []
