# app/domains/usr/crud.py

"""
'usr' 도메인의 CRUD 작업을 담당하는 모듈입니다.
비동기 문법을 사용하여 데이터베이스 쿼리를 실행합니다.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import HTTPException, status

from app.core.crud_base import CRUDBase
from app.core.pagination import PageParams
from app.core.security import get_password_hash, verify_password
from . import models as usr_models
from . import schemas as usr_schemas

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[usr_models.User, usr_schemas.UserCreate, usr_schemas.UserCreate]):
    def __init__(self):
        super().__init__(model=usr_models.User)

    async def get_by_email(self, db: AsyncSession, *, email: str) -> Optional[usr_models.User]:
        """이메일로 사용자를 조회합니다. (대소문자 무시)"""
        return await self.get_by_attribute(db, attribute="email", value=email.strip().lower())

    async def get_existing_ids(self, db: AsyncSession, *, ids: List[int]) -> List[int]:
        """주어진 ID 중 실제로 존재하는 사용자 ID만 입력 순서대로 반환합니다."""
        if not ids:
            return []
        result = await db.execute(select(self.model.id).where(self.model.id.in_(ids)))
        existing = set(result.scalars().all())
        return [user_id for user_id in ids if user_id in existing]

    async def create_with_password(
        self,
        db: AsyncSession,
        *,
        obj_in: usr_schemas.UserBase,
        password: str,
        role: usr_models.UserRole,
    ) -> usr_models.User:
        """비밀번호를 해싱하여 새로운 사용자를 생성합니다. 이메일이 이미 있으면 409를 반환합니다."""
        if await self.get_by_email(db, email=obj_in.email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")

        user_data = obj_in.model_dump(exclude={"password", "role"})
        db_user = usr_models.User(**user_data, role=role, password_hash=get_password_hash(password))

        db.add(db_user)
        await db.commit()
        await db.refresh(db_user)
        logger.info("사용자 생성: id=%s email=%s role=%s", db_user.id, db_user.email, role.value)
        return db_user

    async def signup(self, db: AsyncSession, *, obj_in: usr_schemas.UserSignup) -> usr_models.User:
        """공개 가입. 허용되지 않는 역할 요청은 worker로 대체됩니다."""
        return await self.create_with_password(db, obj_in=obj_in, password=obj_in.password, role=obj_in.granted_role)

    async def create(self, db: AsyncSession, *, obj_in: usr_schemas.UserCreate) -> usr_models.User:
        """관리자 등록. 요청한 역할을 그대로 부여합니다."""
        return await self.create_with_password(db, obj_in=obj_in, password=obj_in.password, role=obj_in.role)

    async def authenticate(self, db: AsyncSession, *, email: str, password: str) -> Optional[usr_models.User]:
        """이메일과 비밀번호를 사용하여 사용자를 인증합니다."""
        user = await self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    async def get_page_filtered(
        self,
        db: AsyncSession,
        *,
        params: PageParams,
        role: Optional[usr_models.UserRole] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[usr_models.User], int]:
        """역할 및 이름/이메일 부분 검색(대소문자 무시) 조건으로 사용자 목록을 조회합니다."""
        conditions = []
        if role is not None:
            conditions.append(self.model.role == role.value)
        if search:
            pattern = f"%{search}%"
            conditions.append(or_(self.model.name.ilike(pattern), self.model.email.ilike(pattern)))
        return await self.get_page(db, params=params, conditions=conditions)


user = CRUDUser()
