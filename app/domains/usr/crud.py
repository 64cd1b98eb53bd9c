# app/domains/usr/crud.py

"""
'usr' 도메인의 CRUD 작업을 담당하는 모듈입니다.
"""

from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

# 공통 CRUDBase 및 usr 도메인의 구성요소 임포트
from app.core.crud_base import CRUDBase
from app.core.exceptions import ValidationError
from app.core.security import get_password_hash, verify_password
from . import models as usr_models
from . import schemas as usr_schemas


class CRUDUser(CRUDBase[usr_models.User, usr_schemas.UserCreate]):
    def __init__(self):
        super().__init__(model=usr_models.User)

    async def get_by_username(self, db: AsyncSession, *, username: str) -> Optional[usr_models.User]:
        """사용자명으로 사용자를 조회합니다."""
        return await self.get_by_attribute(db, attribute="username", value=username)

    async def get_by_email(self, db: AsyncSession, *, email: str) -> Optional[usr_models.User]:
        """이메일로 사용자를 조회합니다."""
        return await self.get_by_attribute(db, attribute="email", value=email)

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: usr_schemas.UserCreate,
        role: usr_models.UserRole = usr_models.UserRole.USER,
    ) -> usr_models.User:
        """새로운 사용자를 생성하며 비밀번호를 해싱하고 중복을 검사합니다."""
        if await self.get_by_username(db, username=obj_in.username):
            raise ValidationError({"username": ["Username already registered"]})
        if await self.get_by_email(db, email=obj_in.email):
            raise ValidationError({"email": ["Email already registered"]})

        hashed_password = get_password_hash(obj_in.password)
        user_data = obj_in.model_dump(exclude={"password"})
        db_user = usr_models.User(**user_data, password_hash=hashed_password, role=role)
        return await self.save(db, db_user)

    async def authenticate(self, db: AsyncSession, *, login: str, password: str) -> Optional[usr_models.User]:
        """
        사용자명 또는 이메일과 비밀번호로 사용자를 인증합니다.
        login 값에 '@'가 있으면 이메일로 먼저 찾습니다.
        """
        user = None
        if "@" in login:
            user = await self.get_by_email(db, email=login)
        if user is None:
            user = await self.get_by_username(db, username=login)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user


user = CRUDUser()
