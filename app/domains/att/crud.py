# app/domains/att/crud.py

"""
'att' 도메인 (출역 기록)의 CRUD 작업을 담당하는 모듈입니다.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.core.pagination import PageParams
from app.domains.prj import crud as prj_crud
from app.domains.usr import crud as usr_crud
from app.domains.usr import models as usr_models

from . import models as att_models
from . import schemas as att_schemas

logger = logging.getLogger(__name__)


class CRUDAttendance(CRUDBase[att_models.Attendance, att_schemas.AttendanceMark, att_schemas.AttendanceMark]):
    def __init__(self):
        super().__init__(model=att_models.Attendance)

    async def get_detail(self, db: AsyncSession, *, id: int) -> Optional[att_models.Attendance]:
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .options(selectinload(self.model.worker), selectinload(self.model.project))
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def mark(
        self,
        db: AsyncSession,
        *,
        obj_in: att_schemas.AttendanceMark,
        recorder: usr_models.User,
    ) -> att_models.Attendance:
        """
        출역을 기록합니다. 같은 작업자·프로젝트·일자의 기록이 있으면
        상태, 출퇴근 시각, 비고, 기록자를 갱신합니다.
        """
        if await usr_crud.user.get(db, obj_in.worker) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Worker not found")
        if not await prj_crud.project.exists(db, id=obj_in.project):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

        values = {
            "status": obj_in.status.value,
            "check_in": obj_in.check_in,
            "check_out": obj_in.check_out,
            "notes": obj_in.notes,
            "recorded_by": recorder.id,
        }
        # 동시에 같은 날짜로 기록해도 유니크 제약 위반 없이 한 건으로 합쳐집니다.
        statement = (
            pg_insert(self.model)
            .values(worker_id=obj_in.worker, project_id=obj_in.project, date=obj_in.date, **values)
            .on_conflict_do_update(
                constraint="uq_attendance_worker_project_date",
                set_={**values, "updated_at": func.now()},
            )
            .returning(self.model.id)
        )
        attendance_id = (await db.execute(statement)).scalar_one()
        await db.commit()
        logger.info(
            "출역 기록: id=%s worker_id=%s project_id=%s date=%s status=%s",
            attendance_id, obj_in.worker, obj_in.project, obj_in.date, values["status"],
        )
        return await self.get_detail(db, id=attendance_id)

    async def get_worker_page(
        self,
        db: AsyncSession,
        *,
        worker_id: int,
        params: PageParams,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Tuple[List[att_models.Attendance], int]:
        conditions = [self.model.worker_id == worker_id]
        if date_from is not None:
            conditions.append(self.model.date >= date_from)
        if date_to is not None:
            conditions.append(self.model.date <= date_to)
        return await self.get_page(
            db,
            params=params,
            conditions=conditions,
            options=[selectinload(self.model.project)],
            order_by=[self.model.date.desc(), self.model.id.desc()],
        )

    async def get_project_page(
        self,
        db: AsyncSession,
        *,
        project_id: int,
        params: PageParams,
        day: Optional[date] = None,
    ) -> Tuple[List[att_models.Attendance], int]:
        conditions = [self.model.project_id == project_id]
        if day is not None:
            conditions.append(self.model.date == day)
        return await self.get_page(
            db,
            params=params,
            conditions=conditions,
            options=[selectinload(self.model.worker)],
            order_by=[self.model.date.desc(), self.model.id.desc()],
        )

    async def summarize(
        self, db: AsyncSession, *, project_id: int, day: Optional[date] = None
    ) -> List[dict]:
        """프로젝트의 출역 기록을 상태별로 집계합니다."""
        statement = (
            select(self.model.status, func.count(self.model.id))
            .where(self.model.project_id == project_id)
            .group_by(self.model.status)
            .order_by(self.model.status)
        )
        if day is not None:
            statement = statement.where(self.model.date == day)
        result = await db.execute(statement)
        return [{"status": row[0], "count": row[1]} for row in result.all()]


attendance = CRUDAttendance()
