# app/domains/ord/services.py

"""
주문 조회/생성/삭제 서비스입니다.

- 목록 조회: "Orders" 버전 캐시 사용, 최신 주문 순.
- 단건 조회: "Orders:Id:{id}" 캐시 사용, 미스 시 DB 조회 후 저장.
- 생성/삭제: 커밋이 끝난 뒤 CacheInvalidator로 캐시를 무효화하고 응답합니다.
"""

import logging
from datetime import UTC
from typing import Any, Dict, Iterable, List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.cache import CacheLayer, ORDERS
from app.core.exceptions import NotFoundError
from app.core.invalidation import CacheInvalidator
from app.domains.inv import schemas as inv_schemas
from app.domains.ord import crud as ord_crud
from app.domains.ord import schemas as ord_schemas

logger = logging.getLogger(__name__)


def to_dto(order, items: Optional[Iterable[Any]] = None) -> ord_schemas.OrderRead:
    date_placed = order.date_placed
    # SQLite는 시간대를 저장하지 않으므로 naive 값은 UTC로 간주합니다.
    if date_placed.tzinfo is None:
        date_placed = date_placed.replace(tzinfo=UTC)
    return ord_schemas.OrderRead(
        order_id=order.order_id,
        customer_name=order.customer_name,
        date_placed=date_placed,
        items=[
            inv_schemas.InventoryItemRead.model_validate(item)
            for item in (order.items if items is None else items)
        ],
    )


async def get_order_list(db: AsyncSession, cache: CacheLayer) -> List[Dict[str, Any]]:
    version = await cache.get_or_init_version(ORDERS)
    cached = await cache.try_get_list(ORDERS, version)
    if cached is not None:
        return cached

    orders = await ord_crud.order.get_multi_with_items(db)
    projection = [to_dto(order).model_dump(mode="json") for order in orders]
    await cache.put_list(ORDERS, version, projection)
    return projection


async def get_order_by_id(db: AsyncSession, cache: CacheLayer, order_id: int) -> Dict[str, Any]:
    cached = await cache.get_by_id(ORDERS, order_id)
    if cached is not None:
        return cached

    db_order = await ord_crud.order.get_with_items(db, order_id)
    if db_order is None:
        raise NotFoundError(f"Order {order_id} not found", title="Order not found")
    dto = to_dto(db_order).model_dump(mode="json")
    await CacheInvalidator(cache).order_loaded(order_id, dto)
    return dto


async def create_order(
    db: AsyncSession, cache: CacheLayer, order_in: ord_schemas.OrderCreate
) -> ord_schemas.OrderRead:
    db_order, items, previous_order_ids = await ord_crud.order.create(db, obj_in=order_in)
    dto = to_dto(db_order, items)
    await CacheInvalidator(cache).order_created(
        dto.order_id, dto.model_dump(mode="json"), previous_order_ids
    )
    return dto


async def delete_order(db: AsyncSession, cache: CacheLayer, order_id: int) -> bool:
    """
    주문을 삭제합니다. 없는 주문이면 DB와 캐시를 건드리지 않고 False를 반환합니다.
    """
    removed = await ord_crud.order.remove(db, order_id=order_id)
    if not removed:
        logger.debug("삭제할 주문 %s가 없습니다.", order_id)
        return False
    await CacheInvalidator(cache).order_deleted(order_id)
    logger.info("주문 %s 삭제", order_id)
    return True
