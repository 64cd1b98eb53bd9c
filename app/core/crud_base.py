# app/core/crud_base.py

"""
공통 CRUD(Create, Read, Delete) 작업을 위한 기본 클래스 모듈입니다.
모든 메서드는 비동기(async) 환경에 맞게 작성되었습니다.

쓰기 메서드는 저장소 오류(SQLAlchemyError) 발생 시 세션을 롤백한 뒤
TransientStoreError로 변환하여 발생시킵니다.
"""

import logging
from typing import Generic, List, Optional, Type, TypeVar, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from pydantic import BaseModel

from app.core.exceptions import TransientStoreError

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType]):
    """
    모든 CRUD 작업에 대한 기본 클래스를 정의합니다.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        기본 키를 기준으로 단일 레코드를 조회합니다.
        """
        return await db.get(self.model, id)

    async def get_multi(
        self,
        db: AsyncSession,
        *,
        skip: int = 0,
        limit: Optional[int] = None,
        order_by: Optional[str] = None,
    ) -> List[ModelType]:
        """
        여러 레코드를 조회합니다. limit이 None이면 전체를 조회합니다.
        """
        query = select(self.model)
        if order_by and hasattr(self.model, order_by):
            query = query.order_by(getattr(self.model, order_by))
        query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_attribute(
        self, db: AsyncSession, *, attribute: str, value: Any
    ) -> Optional[ModelType]:
        statement = select(self.model).where(getattr(self.model, attribute) == value)
        response = await db.execute(statement)
        return response.scalar_one_or_none()

    async def create(self, db: AsyncSession, *, obj_in: CreateSchemaType) -> ModelType:
        """
        새로운 레코드를 생성합니다.
        """
        db_obj = self.model.model_validate(obj_in)
        return await self.save(db, db_obj)

    async def save(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """
        객체를 추가하고 커밋합니다. 실패 시 롤백 후 TransientStoreError를 발생시킵니다.
        """
        try:
            db.add(db_obj)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("%s 저장 실패, 롤백했습니다: %s", self.model.__name__, e)
            raise TransientStoreError(str(e)) from e
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, id: Any) -> Optional[ModelType]:
        """
        ID를 기준으로 레코드를 삭제합니다. 대상이 없으면 None을 반환합니다.
        """
        db_obj = await db.get(self.model, id)
        if db_obj:
            await self.delete_obj(db, db_obj)
        return db_obj

    async def delete_obj(self, db: AsyncSession, db_obj: ModelType) -> None:
        try:
            await db.delete(db_obj)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("%s 삭제 실패, 롤백했습니다: %s", self.model.__name__, e)
            raise TransientStoreError(str(e)) from e
