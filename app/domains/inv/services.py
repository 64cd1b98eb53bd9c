# app/domains/inv/services.py

"""
재고 품목 조회/생성/삭제 서비스입니다.
목록 조회는 버전 캐시를 거치고, 쓰기 작업은 커밋 후 캐시를 무효화합니다.
"""

import logging
from typing import Any, Dict, List

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.cache import CacheLayer, INVENTORY
from app.core.exceptions import NotFoundError
from app.core.invalidation import CacheInvalidator
from app.domains.inv import crud as inv_crud
from app.domains.inv import schemas as inv_schemas

logger = logging.getLogger(__name__)


def to_dto(item) -> inv_schemas.InventoryItemRead:
    return inv_schemas.InventoryItemRead.model_validate(item)


async def get_inventory_list(db: AsyncSession, cache: CacheLayer) -> List[Dict[str, Any]]:
    version = await cache.get_or_init_version(INVENTORY)
    cached = await cache.try_get_list(INVENTORY, version)
    if cached is not None:
        return cached

    items = await inv_crud.inventory_item.get_all(db)
    projection = [to_dto(item).model_dump(mode="json") for item in items]
    await cache.put_list(INVENTORY, version, projection)
    return projection


async def create_inventory_item(
    db: AsyncSession, cache: CacheLayer, item_in: inv_schemas.InventoryItemCreate
) -> inv_schemas.InventoryItemRead:
    db_item = await inv_crud.inventory_item.create(db, obj_in=item_in)
    dto = to_dto(db_item)
    await CacheInvalidator(cache).inventory_item_created()
    logger.info("재고 품목 %s 생성", dto.item_id)
    return dto


async def delete_inventory_item(db: AsyncSession, cache: CacheLayer, item_id: int) -> None:
    db_item = await inv_crud.inventory_item.get(db, item_id)
    if db_item is None:
        raise NotFoundError(f"Inventory item {item_id} not found", title="Inventory item not found")
    order_id = db_item.order_id
    await inv_crud.inventory_item.delete_obj(db, db_item)
    await CacheInvalidator(cache).inventory_item_deleted(order_id=order_id)
    logger.info("재고 품목 %s 삭제", item_id)
