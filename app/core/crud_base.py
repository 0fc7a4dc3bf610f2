# app/core/crud_base.py

"""
공통 CRUD(Create, Read, Update, Delete) 작업을 위한 기본 클래스 모듈입니다.
모든 메서드는 비동기(async) 환경에 맞게 작성되었습니다.
"""

from typing import Generic, List, Optional, Sequence, Tuple, Type, TypeVar, Any

from sqlalchemy import func
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from pydantic import BaseModel

from app.core.pagination import PageParams

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    모든 CRUD 작업에 대한 기본 클래스를 정의합니다.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        ID를 기준으로 단일 레코드를 조회합니다.
        """
        return await db.get(self.model, id)

    async def get_by_attribute(
        self, db: AsyncSession, *, attribute: str, value: Any
    ) -> Optional[ModelType]:
        statement = select(self.model).where(getattr(self.model, attribute) == value)
        response = await db.execute(statement)
        return response.scalars().first()

    async def get_page(
        self,
        db: AsyncSession,
        *,
        params: PageParams,
        conditions: Sequence[Any] = (),
        options: Sequence[Any] = (),
        order_by: Sequence[Any] = (),
    ) -> Tuple[List[ModelType], int]:
        """
        조건(where 절 목록)에 맞는 레코드의 한 페이지와 전체 건수를 함께 반환합니다.

        - `options`: selectinload 등 관계 로딩 옵션
        - `order_by`: 정렬 기준 (없으면 created_at 내림차순, 즉 최신순)
        """
        count_query = select(func.count()).select_from(self.model)
        if conditions:
            count_query = count_query.where(*conditions)
        total = (await db.execute(count_query)).scalar_one()

        query = select(self.model)
        if conditions:
            query = query.where(*conditions)
        if options:
            query = query.options(*options)
        if order_by:
            query = query.order_by(*order_by)
        else:
            query = query.order_by(self.model.created_at.desc(), self.model.id.desc())
        query = query.offset(params.skip).limit(params.limit).execution_options(populate_existing=True)

        result = await db.execute(query)
        return list(result.scalars().all()), total

    async def create(self, db: AsyncSession, *, obj_in: CreateSchemaType, **extra: Any) -> ModelType:
        """
        새로운 레코드를 생성합니다. `extra`로 요청 본문에 없는 값(작성자 등)을 함께 저장합니다.
        """
        db_obj = self.model.model_validate(obj_in, update=extra)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self, db: AsyncSession, *, db_obj: ModelType, obj_in: UpdateSchemaType
    ) -> ModelType:
        """
        기존 레코드를 업데이트합니다. 요청에 포함된 필드만 반영합니다.
        """
        update_data = obj_in.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(db_obj, key, value)

        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, id: Any) -> Optional[ModelType]:
        """
        ID를 기준으로 레코드를 삭제합니다.
        """
        db_obj = await db.get(self.model, id)
        if db_obj:
            await db.delete(db_obj)
            await db.commit()
        return db_obj
