# app/domains/prj/crud.py

"""
'prj' 도메인 (프로젝트, 엔지니어 배정, 마일스톤)의 CRUD 작업을 담당하는 모듈입니다.
비동기 문법을 사용하여 데이터베이스 쿼리를 실행합니다.
"""

import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.core.pagination import PageParams
from app.domains.usr import crud as usr_crud
from app.domains.usr import models as usr_models
from app.domains.mat import models as mat_models
from app.domains.att import models as att_models
from app.domains.eqp import models as eqp_models
from app.domains.rpt import models as rpt_models

from . import models as prj_models
from . import schemas as prj_schemas

logger = logging.getLogger(__name__)

MilestoneStatus = prj_models.MilestoneStatus

# 허용되는 마일스톤 상태 변경 (같은 상태로의 변경은 항상 허용되며 변화 없음)
MILESTONE_TRANSITIONS = {
    MilestoneStatus.PENDING: {MilestoneStatus.IN_PROGRESS, MilestoneStatus.COMPLETED},
    MilestoneStatus.IN_PROGRESS: {MilestoneStatus.COMPLETED},
    MilestoneStatus.COMPLETED: {MilestoneStatus.IN_PROGRESS},
}


def check_milestone_transition(current: MilestoneStatus, target: MilestoneStatus) -> None:
    """허용되지 않는 마일스톤 상태 변경이면 400을 발생시킵니다."""
    current, target = MilestoneStatus(current), MilestoneStatus(target)
    if current == target:
        return
    if target not in MILESTONE_TRANSITIONS[current]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid milestone status transition: {current.value} -> {target.value}",
        )


# =============================================================================
# 1. 프로젝트 (Project) CRUD
# =============================================================================
class CRUDProject(CRUDBase[prj_models.Project, prj_schemas.ProjectCreate, prj_schemas.ProjectUpdate]):
    def __init__(self):
        super().__init__(model=prj_models.Project)

    async def get_with_details(self, db: AsyncSession, *, id: int) -> Optional[prj_models.Project]:
        """엔지니어와 마일스톤을 함께 로딩하여 프로젝트를 조회합니다."""
        statement = (
            select(self.model)
            .where(self.model.id == id)
            .options(selectinload(self.model.engineers), selectinload(self.model.milestones))
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalars().first()

    async def get_or_404(self, db: AsyncSession, *, id: int) -> prj_models.Project:
        db_project = await self.get_with_details(db, id=id)
        if db_project is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
        return db_project

    async def exists(self, db: AsyncSession, *, id: int) -> bool:
        return await db.get(self.model, id) is not None

    async def get_page_filtered(
        self,
        db: AsyncSession,
        *,
        params: PageParams,
        status_filter: Optional[prj_models.ProjectStatus] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[prj_models.Project], int]:
        conditions = []
        if status_filter is not None:
            conditions.append(self.model.status == status_filter.value)
        if search:
            conditions.append(self.model.name.ilike(f"%{search}%"))
        return await self.get_page(
            db, params=params, conditions=conditions, options=[selectinload(self.model.engineers)]
        )

    async def create(self, db: AsyncSession, *, obj_in: prj_schemas.ProjectCreate) -> prj_models.Project:
        """
        프로젝트를 생성합니다.
        요청한 엔지니어 ID 중 존재하지 않는 사용자가 있으면 400을 반환합니다.
        """
        engineer_ids = list(dict.fromkeys(obj_in.engineers))
        engineers = await self._load_users(db, engineer_ids)
        if len(engineers) != len(engineer_ids):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown engineer id")

        db_project = prj_models.Project.model_validate(obj_in.model_dump(exclude={"engineers"}))
        db_project.engineers = engineers
        db.add(db_project)
        await db.commit()
        logger.info("프로젝트 생성: id=%s name=%s", db_project.id, db_project.name)
        return await self.get_with_details(db, id=db_project.id)

    async def update(
        self, db: AsyncSession, *, db_obj: prj_models.Project, obj_in: prj_schemas.ProjectUpdate
    ) -> prj_models.Project:
        update_data = obj_in.model_dump(exclude_unset=True)
        if update_data.get("status") is not None:
            update_data["status"] = prj_models.ProjectStatus(update_data["status"]).value
        elif "status" in update_data:
            del update_data["status"]
        if "name" in update_data and not update_data["name"]:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Project name is required")

        start = update_data.get("start_date", db_obj.start_date)
        end = update_data.get("end_date", db_obj.end_date)
        if start and end and end < start:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="end_date must not be before start_date",
            )

        for key, value in update_data.items():
            setattr(db_obj, key, value)
        db.add(db_obj)
        await db.commit()
        return await self.get_with_details(db, id=db_obj.id)

    async def assign_engineers(
        self, db: AsyncSession, *, db_obj: prj_models.Project, engineer_ids: List[int]
    ) -> prj_models.Project:
        """
        엔지니어를 기존 배정 목록에 추가합니다. (합집합)
        중복 ID와 존재하지 않는 사용자 ID는 무시됩니다.
        """
        assigned = {engineer.id for engineer in db_obj.engineers}
        new_ids = [user_id for user_id in dict.fromkeys(engineer_ids) if user_id not in assigned]
        for engineer in await self._load_users(db, new_ids):
            db_obj.engineers.append(engineer)
        db.add(db_obj)
        await db.commit()
        logger.info("프로젝트 엔지니어 배정: project_id=%s added=%s", db_obj.id, new_ids)
        return await self.get_with_details(db, id=db_obj.id)

    async def delete(self, db: AsyncSession, *, id: int) -> Optional[prj_models.Project]:
        """
        프로젝트를 삭제합니다.

        - 자재 요청, 출역 기록, 보고서가 남아 있으면 400을 반환합니다.
        - 배치된 장비는 배치를 해제(가용 상태)하고 이력을 남깁니다.
        - 마일스톤과 엔지니어 연결은 함께 삭제됩니다.
        """
        db_project = await self.get_with_details(db, id=id)
        if db_project is None:
            return None

        for label, model in (
            ("material requests", mat_models.MaterialRequest),
            ("attendance records", att_models.Attendance),
            ("reports", rpt_models.Report),
        ):
            count = (await db.execute(
                select(func.count()).select_from(model).where(model.project_id == id)
            )).scalar_one()
            if count:
                logger.warning("프로젝트 삭제 거부: project_id=%s %s=%s", id, label, count)
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Project still has {label}",
                )

        result = await db.execute(
            select(eqp_models.Equipment).where(eqp_models.Equipment.assigned_project_id == id)
        )
        for equipment in result.scalars().all():
            equipment.assigned_project_id = None
            equipment.status = eqp_models.EquipmentStatus.AVAILABLE.value
            db.add(equipment)
            db.add(eqp_models.EquipmentHistory(
                equipment_id=equipment.id,
                action=eqp_models.EquipmentAction.RELEASED.value,
                status=equipment.status,
                condition=equipment.condition,
                notes=f"Released: project '{db_project.name}' deleted",
            ))

        await db.delete(db_project)
        await db.commit()
        logger.info("프로젝트 삭제: id=%s", id)
        return db_project

    async def _load_users(self, db: AsyncSession, ids: List[int]) -> List[usr_models.User]:
        existing_ids = await usr_crud.user.get_existing_ids(db, ids=ids)
        if not existing_ids:
            return []
        result = await db.execute(select(usr_models.User).where(usr_models.User.id.in_(existing_ids)))
        by_id = {user.id: user for user in result.scalars().all()}
        return [by_id[user_id] for user_id in existing_ids]


# =============================================================================
# 2. 마일스톤 (Milestone) CRUD
# =============================================================================
class CRUDMilestone(CRUDBase[prj_models.Milestone, prj_schemas.MilestoneCreate, prj_schemas.MilestoneUpdate]):
    def __init__(self):
        super().__init__(model=prj_models.Milestone)

    async def get_for_project(
        self, db: AsyncSession, *, project_id: int, milestone_id: int
    ) -> prj_models.Milestone:
        """프로젝트에 속한 마일스톤을 조회합니다. 다른 프로젝트의 마일스톤은 404로 처리합니다."""
        db_milestone = await db.get(self.model, milestone_id)
        if db_milestone is None or db_milestone.project_id != project_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Milestone not found")
        return db_milestone

    async def create_for_project(
        self, db: AsyncSession, *, project_id: int, obj_in: prj_schemas.MilestoneCreate
    ) -> prj_models.Milestone:
        return await self.create(db, obj_in=obj_in, project_id=project_id)

    async def update(
        self, db: AsyncSession, *, db_obj: prj_models.Milestone, obj_in: prj_schemas.MilestoneUpdate
    ) -> prj_models.Milestone:
        update_data = obj_in.model_dump(exclude_unset=True)
        if update_data.get("status") is not None:
            check_milestone_transition(db_obj.status, update_data["status"])
            update_data["status"] = update_data["status"].value
        elif "status" in update_data:
            del update_data["status"]
        if "title" in update_data and not update_data["title"]:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Milestone title is required")

        for key, value in update_data.items():
            setattr(db_obj, key, value)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj


project = CRUDProject()
milestone = CRUDMilestone()
