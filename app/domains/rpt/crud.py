# app/domains/rpt/crud.py

"""
'rpt' 도메인 (현장 보고서)의 CRUD 작업을 담당하는 모듈입니다.
"""

from datetime import date
from typing import List, Optional, Set, Tuple

from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.core.pagination import PageParams

from . import models as rpt_models
from . import schemas as rpt_schemas


class CRUDReport(CRUDBase[rpt_models.Report, rpt_schemas.ReportCreate, rpt_schemas.ReportCreate]):
    def __init__(self):
        super().__init__(model=rpt_models.Report)

    def _load_options(self):
        return [
            selectinload(self.model.images),
            selectinload(self.model.creator),
            selectinload(self.model.project),
        ]

    async def get_detail(self, db: AsyncSession, *, id: int) -> Optional[rpt_models.Report]:
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .options(*self._load_options())
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def create_with_images(
        self,
        db: AsyncSession,
        *,
        obj_in: rpt_schemas.ReportCreate,
        created_by: int,
        images: List[Tuple[str, str]],
    ) -> rpt_models.Report:
        """보고서와 첨부 사진 레코드를 한 트랜잭션으로 저장합니다. images는 (파일명, URL) 목록입니다."""
        db_obj = rpt_models.Report.model_validate(obj_in, update={"created_by": created_by})
        db_obj.images = [rpt_models.ReportImage(filename=filename, url=url) for filename, url in images]
        db.add(db_obj)
        await db.commit()
        return await self.get_detail(db, id=db_obj.id)

    async def get_page_filtered(
        self,
        db: AsyncSession,
        *,
        params: PageParams,
        project_id: Optional[int] = None,
        day: Optional[date] = None,
    ) -> Tuple[List[rpt_models.Report], int]:
        conditions = []
        if project_id is not None:
            conditions.append(self.model.project_id == project_id)
        if day is not None:
            conditions.append(self.model.date == day)
        return await self.get_page(db, params=params, conditions=conditions, options=self._load_options())

    async def get_referenced_filenames(self, db: AsyncSession) -> Set[str]:
        """DB에 기록된 모든 첨부 사진 파일명을 반환합니다. (고아 파일 정리용)"""
        result = await db.execute(select(rpt_models.ReportImage.filename))
        return set(result.scalars().all())


report = CRUDReport()
