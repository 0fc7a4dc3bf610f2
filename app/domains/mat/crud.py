# app/domains/mat/crud.py

"""
'mat' 도메인 (자재 요청)의 CRUD 작업과 상태 전이 규칙을 담당하는 모듈입니다.

상태 흐름:
    pending → approved | rejected
    approved → ordered | rejected
    ordered → delivered
    rejected → pending (재요청)
    delivered (최종)
"""

import logging
from datetime import datetime, UTC
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.core.pagination import PageParams
from app.domains.prj import crud as prj_crud
from app.domains.usr import models as usr_models

from . import models as mat_models
from . import schemas as mat_schemas

logger = logging.getLogger(__name__)

MaterialStatus = mat_models.MaterialStatus

MATERIAL_TRANSITIONS = {
    MaterialStatus.PENDING: {MaterialStatus.APPROVED, MaterialStatus.REJECTED},
    MaterialStatus.APPROVED: {MaterialStatus.ORDERED, MaterialStatus.REJECTED},
    MaterialStatus.ORDERED: {MaterialStatus.DELIVERED},
    MaterialStatus.REJECTED: {MaterialStatus.PENDING},
    MaterialStatus.DELIVERED: set(),
}

# 이 상태로 변경할 때 검토자(approved_by, approved_at)를 기록합니다.
REVIEW_STATUSES = {MaterialStatus.APPROVED, MaterialStatus.REJECTED}


def check_material_transition(current: MaterialStatus, target: MaterialStatus) -> bool:
    """
    상태 변경 가능 여부를 검사합니다.
    같은 상태면 False(변화 없음), 허용되는 변경이면 True, 그 외에는 400을 발생시킵니다.
    """
    current, target = MaterialStatus(current), MaterialStatus(target)
    if current == target:
        return False
    if target not in MATERIAL_TRANSITIONS[current]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid material status transition: {current.value} -> {target.value}",
        )
    return True


class CRUDMaterialRequest(CRUDBase[mat_models.MaterialRequest, mat_schemas.MaterialRequestCreate, mat_schemas.MaterialStatusUpdate]):
    def __init__(self):
        super().__init__(model=mat_models.MaterialRequest)

    def _load_options(self):
        return [selectinload(self.model.requester), selectinload(self.model.approver)]

    async def get_with_users(self, db: AsyncSession, *, id: int) -> Optional[mat_models.MaterialRequest]:
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .options(*self._load_options())
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def get_or_404(self, db: AsyncSession, *, id: int) -> mat_models.MaterialRequest:
        db_obj = await db.get(self.model, id)
        if db_obj is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Material request not found")
        return db_obj

    async def get_page_filtered(
        self,
        db: AsyncSession,
        *,
        params: PageParams,
        project_id: Optional[int] = None,
        status_filter: Optional[MaterialStatus] = None,
    ) -> Tuple[List[mat_models.MaterialRequest], int]:
        conditions = []
        if project_id is not None:
            conditions.append(self.model.project_id == project_id)
        if status_filter is not None:
            conditions.append(self.model.status == status_filter.value)
        return await self.get_page(db, params=params, conditions=conditions, options=self._load_options())

    async def create_request(
        self,
        db: AsyncSession,
        *,
        obj_in: mat_schemas.MaterialRequestCreate,
        requester: usr_models.User,
    ) -> mat_models.MaterialRequest:
        """자재를 요청합니다. 프로젝트가 없으면 404, 요청자는 호출한 사용자입니다."""
        if not await prj_crud.project.exists(db, id=obj_in.project):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

        db_obj = mat_models.MaterialRequest(
            **obj_in.model_dump(exclude={"project"}),
            project_id=obj_in.project,
            requested_by=requester.id,
            status=MaterialStatus.PENDING.value,
        )
        db.add(db_obj)
        await db.commit()
        logger.info("자재 요청: id=%s project_id=%s name=%s qty=%s", db_obj.id, db_obj.project_id, db_obj.name, db_obj.quantity)
        return await self.get_with_users(db, id=db_obj.id)

    async def review(
        self,
        db: AsyncSession,
        *,
        db_obj: mat_models.MaterialRequest,
        review_in: mat_schemas.MaterialReview,
        reviewer: usr_models.User,
    ) -> mat_models.MaterialRequest:
        """대기(pending) 중인 요청만 승인 또는 반려할 수 있습니다."""
        if MaterialStatus(db_obj.status) != MaterialStatus.PENDING:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Only pending material requests can be reviewed",
            )
        target = MaterialStatus.APPROVED if review_in.action == "approve" else MaterialStatus.REJECTED
        self._apply_status(db_obj, target, reviewer)
        if review_in.notes is not None:
            db_obj.notes = review_in.notes
        return await self._save(db, db_obj)

    async def update_status(
        self,
        db: AsyncSession,
        *,
        db_obj: mat_models.MaterialRequest,
        target: MaterialStatus,
        changed_by: usr_models.User,
    ) -> mat_models.MaterialRequest:
        if check_material_transition(db_obj.status, target):
            self._apply_status(db_obj, target, changed_by)
            return await self._save(db, db_obj)
        return await self.get_with_users(db, id=db_obj.id)

    def _apply_status(
        self, db_obj: mat_models.MaterialRequest, target: MaterialStatus, user: usr_models.User
    ) -> None:
        previous = db_obj.status
        db_obj.status = target.value
        if target in REVIEW_STATUSES:
            db_obj.approved_by = user.id
            db_obj.approved_at = datetime.now(UTC)
        logger.info("자재 요청 상태 변경: id=%s %s -> %s by user_id=%s", db_obj.id, previous, target.value, user.id)

    async def _save(self, db: AsyncSession, db_obj: mat_models.MaterialRequest) -> mat_models.MaterialRequest:
        db.add(db_obj)
        await db.commit()
        return await self.get_with_users(db, id=db_obj.id)


material_request = CRUDMaterialRequest()
