# app/domains/eqp/crud.py

"""
'eqp' 도메인 (장비 및 이력)의 CRUD 작업과 상태 규칙을 담당하는 모듈입니다.

모든 변경(등록, 배치, 상태 변경)은 equipment_history에 한 건의 이력을 남깁니다.
- 폐기(retired) 또는 정비 중(maintenance)인 장비는 배치할 수 없습니다.
- 가용(available) 또는 폐기(retired)로 변경하면 프로젝트 배치가 해제됩니다.
- 폐기는 최종 상태입니다.
"""

import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.core.pagination import PageParams
from app.domains.prj import crud as prj_crud
from app.domains.usr import models as usr_models

from . import models as eqp_models
from . import schemas as eqp_schemas

logger = logging.getLogger(__name__)

EquipmentStatus = eqp_models.EquipmentStatus
EquipmentAction = eqp_models.EquipmentAction

UNASSIGNABLE_STATUSES = {EquipmentStatus.RETIRED, EquipmentStatus.MAINTENANCE}
RELEASING_STATUSES = {EquipmentStatus.AVAILABLE, EquipmentStatus.RETIRED}


class CRUDEquipment(CRUDBase[eqp_models.Equipment, eqp_schemas.EquipmentCreate, eqp_schemas.EquipmentStatusUpdate]):
    def __init__(self):
        super().__init__(model=eqp_models.Equipment)

    async def get_with_history(self, db: AsyncSession, *, id: int) -> Optional[eqp_models.Equipment]:
        """배치 프로젝트와 이력(오래된 순)을 함께 로딩합니다."""
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .options(selectinload(self.model.assigned_project), selectinload(self.model.history))
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def get_or_404(self, db: AsyncSession, *, id: int) -> eqp_models.Equipment:
        db_obj = await self.get_with_history(db, id=id)
        if db_obj is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Equipment not found")
        return db_obj

    async def get_page_filtered(
        self,
        db: AsyncSession,
        *,
        params: PageParams,
        status_filter: Optional[EquipmentStatus] = None,
        project_id: Optional[int] = None,
    ) -> Tuple[List[eqp_models.Equipment], int]:
        conditions = []
        if status_filter is not None:
            conditions.append(self.model.status == status_filter.value)
        if project_id is not None:
            conditions.append(self.model.assigned_project_id == project_id)
        return await self.get_page(
            db, params=params, conditions=conditions, options=[selectinload(self.model.assigned_project)]
        )

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: eqp_schemas.EquipmentCreate,
        created_by: Optional[usr_models.User] = None,
    ) -> eqp_models.Equipment:
        db_obj = eqp_models.Equipment.model_validate(obj_in)
        db_obj.status = EquipmentStatus(db_obj.status).value
        db_obj.condition = eqp_models.EquipmentCondition(db_obj.condition).value
        db_obj.history = [
            self._history_entry(EquipmentAction.CREATED, db_obj, notes=obj_in.notes, user=created_by)
        ]
        db.add(db_obj)
        await db.commit()
        logger.info("장비 등록: id=%s name=%s status=%s", db_obj.id, db_obj.name, db_obj.status)
        return await self.get_with_history(db, id=db_obj.id)

    async def assign(
        self,
        db: AsyncSession,
        *,
        db_obj: eqp_models.Equipment,
        assign_in: eqp_schemas.EquipmentAssign,
        assigned_by: usr_models.User,
    ) -> eqp_models.Equipment:
        """장비를 프로젝트에 배치하고 사용 중(in-use) 상태로 변경합니다."""
        current = EquipmentStatus(db_obj.status)
        if current in UNASSIGNABLE_STATUSES:
            logger.warning("장비 배치 거부: id=%s status=%s", db_obj.id, current.value)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Equipment in status '{current.value}' cannot be assigned",
            )
        if not await prj_crud.project.exists(db, id=assign_in.project):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

        db_obj.assigned_project_id = assign_in.project
        db_obj.status = EquipmentStatus.IN_USE.value
        db_obj.history.append(
            self._history_entry(
                EquipmentAction.ASSIGNED, db_obj, notes=assign_in.notes, user=assigned_by, project_id=assign_in.project
            )
        )
        db.add(db_obj)
        await db.commit()
        logger.info("장비 배치: id=%s project_id=%s", db_obj.id, assign_in.project)
        return await self.get_with_history(db, id=db_obj.id)

    async def update_status(
        self,
        db: AsyncSession,
        *,
        db_obj: eqp_models.Equipment,
        obj_in: eqp_schemas.EquipmentStatusUpdate,
        changed_by: usr_models.User,
    ) -> eqp_models.Equipment:
        """
        장비의 상태, 상태 등급, 정비 일자를 변경하고 이력을 남깁니다.
        변경할 항목이 하나도 없으면 400을 반환합니다.
        """
        if obj_in.is_empty():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Provide status, condition, notes or last_service_date to update",
            )

        current = EquipmentStatus(db_obj.status)
        if obj_in.status is not None and obj_in.status != current:
            if current == EquipmentStatus.RETIRED:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Retired equipment cannot change status",
                )
            db_obj.status = obj_in.status.value
            if obj_in.status in RELEASING_STATUSES and db_obj.assigned_project_id is not None:
                logger.info("장비 배치 해제: id=%s project_id=%s", db_obj.id, db_obj.assigned_project_id)
                db_obj.assigned_project_id = None
        if obj_in.condition is not None:
            db_obj.condition = obj_in.condition.value
        if obj_in.last_service_date is not None:
            db_obj.last_service_date = obj_in.last_service_date

        db_obj.history.append(
            self._history_entry(
                EquipmentAction.STATUS_UPDATE, db_obj, notes=obj_in.notes, user=changed_by,
                project_id=db_obj.assigned_project_id,
            )
        )
        db.add(db_obj)
        await db.commit()
        logger.info("장비 상태 변경: id=%s status=%s condition=%s", db_obj.id, db_obj.status, db_obj.condition)
        return await self.get_with_history(db, id=db_obj.id)

    @staticmethod
    def _history_entry(
        action: EquipmentAction,
        db_obj: eqp_models.Equipment,
        *,
        notes: Optional[str] = None,
        user: Optional[usr_models.User] = None,
        project_id: Optional[int] = None,
    ) -> eqp_models.EquipmentHistory:
        return eqp_models.EquipmentHistory(
            action=action.value,
            status=db_obj.status,
            condition=db_obj.condition,
            project_id=project_id,
            notes=notes,
            changed_by=user.id if user else None,
        )


equipment = CRUDEquipment()
