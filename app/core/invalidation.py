# app/core/invalidation.py

"""
쓰기 작업과 캐시 무효화를 연결하는 모듈입니다.
모든 메서드는 트랜잭션 커밋이 끝난 뒤에만 호출되어야 합니다.
"""

import logging
from typing import Any, Iterable, Optional

from app.core.cache import CacheLayer, INVENTORY, ORDERS

logger = logging.getLogger(__name__)


class CacheInvalidator:
    def __init__(self, cache: CacheLayer):
        self.cache = cache

    async def inventory_item_created(self) -> None:
        await self.cache.bump_version(INVENTORY)

    async def inventory_item_deleted(self, order_id: Optional[int] = None) -> None:
        await self.cache.bump_version(INVENTORY)
        # 주문에 속한 품목이었다면 해당 주문의 캐시도 무효화합니다.
        if order_id is not None:
            await self.cache.bump_version(ORDERS)
            await self.cache.remove_by_id(ORDERS, order_id)

    async def order_created(self, order_id: int, dto: Any, previous_order_ids: Iterable[int] = ()) -> None:
        await self.cache.bump_version(ORDERS)
        await self.cache.bump_version(INVENTORY)
        # 품목을 새 주문에 넘겨준 기존 주문들의 단건 캐시
        for previous_id in previous_order_ids:
            await self.cache.remove_by_id(ORDERS, previous_id)
        await self.cache.put_by_id(ORDERS, order_id, dto)
        logger.debug("주문 %s 생성 후 캐시 무효화 완료", order_id)

    async def order_deleted(self, order_id: int) -> None:
        await self.cache.bump_version(ORDERS)
        await self.cache.bump_version(INVENTORY)
        await self.cache.remove_by_id(ORDERS, order_id)
        logger.debug("주문 %s 삭제 후 캐시 무효화 완료", order_id)

    async def order_loaded(self, order_id: int, dto: Any) -> None:
        await self.cache.put_by_id(ORDERS, order_id, dto)
