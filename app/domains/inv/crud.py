# app/domains/inv/crud.py

"""
'inv' 도메인의 CRUD 작업을 위한 클래스를 정의하는 모듈입니다.
"""

import logging
from typing import Dict, Iterable, List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.domains.inv import models as inv_models
from app.domains.inv import schemas as inv_schemas

logger = logging.getLogger(__name__)


class CRUDInventoryItem(CRUDBase[inv_models.InventoryItem, inv_schemas.InventoryItemCreate]):
    def __init__(self):
        super().__init__(model=inv_models.InventoryItem)

    async def get_by_ids(self, db: AsyncSession, ids: Iterable[int]) -> Dict[int, inv_models.InventoryItem]:
        """
        주어진 ID 집합에 해당하는 품목을 한 번의 IN 쿼리로 조회하여 {id: 품목} 딕셔너리로 반환합니다.
        """
        unique_ids = sorted(set(ids))
        if not unique_ids:
            return {}
        statement = select(self.model).where(self.model.item_id.in_(unique_ids))
        result = await db.execute(statement)
        return {item.item_id: item for item in result.scalars().all()}

    async def get_all(self, db: AsyncSession) -> List[inv_models.InventoryItem]:
        return await self.get_multi(db, order_by="item_id")


inventory_item = CRUDInventoryItem()
