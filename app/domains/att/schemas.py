# app/domains/att/schemas.py

"""
'att' 도메인 (출역 기록)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import Optional
from datetime import datetime
from datetime import date as date_type
from sqlmodel import SQLModel, Field
from pydantic import field_validator, model_validator

from app.domains.usr.schemas import UserBrief
from app.domains.prj.schemas import ProjectBrief
from app.utils.dates import as_utc, to_calendar_day
from . import models as att_models


class AttendanceMark(SQLModel):
    worker: int = Field(..., description="작업자 사용자 ID")
    project: int = Field(..., description="프로젝트 ID")
    date: date_type
    status: att_models.AttendanceStatus = att_models.AttendanceStatus.PRESENT
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, value):
        return to_calendar_day(value)

    @field_validator("check_in", "check_out")
    @classmethod
    def assume_utc(cls, value):
        return as_utc(value)

    @model_validator(mode="after")
    def check_times(self):
        if self.check_in and self.check_out and self.check_out < self.check_in:
            raise ValueError("check_out must not be before check_in")
        return self


class AttendanceRead(att_models.AttendanceBase):
    id: int
    worker_id: int
    project_id: int
    status: att_models.AttendanceStatus
    recorded_by: int
    created_at: datetime
    updated_at: datetime


class AttendanceWithProject(AttendanceRead):
    project: Optional[ProjectBrief] = None


class AttendanceWithWorker(AttendanceRead):
    worker: Optional[UserBrief] = None


class AttendanceDetail(AttendanceRead):
    worker: Optional[UserBrief] = None
    project: Optional[ProjectBrief] = None


class AttendanceSummaryItem(SQLModel):
    status: att_models.AttendanceStatus
    count: int
