# app/domains/rpt/schemas.py

"""
'rpt' 도메인 (현장 보고서)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
보고서 생성은 multipart 폼으로 받으므로 요청 스키마는 라우터의 Form 필드로 정의됩니다.
"""

from typing import List, Optional
from datetime import datetime
from sqlmodel import SQLModel

from app.domains.usr.schemas import UserBrief
from app.domains.prj.schemas import ProjectBrief
from . import models as rpt_models


class ReportCreate(rpt_models.ReportBase):
    """서비스 계층에서 사용하는 검증된 보고서 입력값"""
    project_id: int


class ReportImageRead(rpt_models.ReportImageBase):
    pass


class ReportRead(rpt_models.ReportBase):
    id: int
    project_id: int
    created_by: int
    created_at: datetime
    updated_at: datetime
    images: List[ReportImageRead] = []
    creator: Optional[UserBrief] = None
    project: Optional[ProjectBrief] = None
