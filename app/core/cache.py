# app/core/cache.py

"""
버전 토큰 기반 읽기 캐시 모듈입니다.

목록 캐시는 컬렉션별 버전 토큰 키("{Collection}:List:Version")가 가리키는
"{Collection}:List:v={token}" 항목에 저장됩니다. 쓰기 작업은 기존 항목을 수정하지 않고
버전 토큰만 새로 발급(bump)하며, 이전 버전의 항목은 TTL이 지나면 저절로 사라집니다.

단건 캐시(주문 조회)는 "{Collection}:Id:{id}" 키를 사용하며 버전과 무관하게
명시적으로 삭제됩니다.

백엔드 장애(CacheUnavailable)는 이 계층에서 로그만 남기고 캐시 미스로 처리합니다.
"""

import asyncio
import json
import logging
import time
import uuid
from typing import Any, Dict, Optional, Protocol, Tuple

from redis.exceptions import RedisError

from app.core.exceptions import CacheUnavailable

logger = logging.getLogger(__name__)

INVENTORY = "Inventory"
ORDERS = "Orders"


def version_key(collection: str) -> str:
    return f"{collection}:List:Version"


def list_key(collection: str, version: str) -> str:
    return f"{collection}:List:v={version}"


def id_key(collection: str, id: Any) -> str:
    return f"{collection}:Id:{id}"


def new_version_token() -> str:
    return uuid.uuid4().hex


# =============================================================================
# 1. 캐시 백엔드
# =============================================================================
class CacheBackend(Protocol):
    """CacheLayer가 사용하는 키/값 저장소 인터페이스입니다. TTL은 초 단위입니다."""

    async def get(self, key: str) -> Optional[Any]: ...

    async def set(self, key: str, value: Any, ttl: int) -> None: ...

    async def set_if_absent(self, key: str, value: Any, ttl: int) -> bool: ...

    async def delete(self, key: str) -> None: ...


class MemoryCacheBackend:
    """
    프로세스 내부 메모리 캐시입니다.
    각 항목은 (값, 만료 시각) 쌍으로 저장되며, 만료 시각은 time.monotonic() 기준입니다.
    """

    # set 호출이 이 횟수만큼 쌓이면 만료된 항목을 정리합니다.
    PURGE_EVERY = 256

    def __init__(self, clock=time.monotonic):
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = asyncio.Lock()
        self._clock = clock
        self._writes = 0

    def _alive(self, key: str, now: float) -> Optional[Tuple[Any, float]]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry[1] <= now:
            del self._entries[key]
            return None
        return entry

    def _purge(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            entry = self._alive(key, self._clock())
            return entry[0] if entry else None

    async def set(self, key: str, value: Any, ttl: int) -> None:
        async with self._lock:
            now = self._clock()
            self._entries[key] = (value, now + ttl)
            self._writes += 1
            if self._writes % self.PURGE_EVERY == 0:
                self._purge(now)

    async def set_if_absent(self, key: str, value: Any, ttl: int) -> bool:
        async with self._lock:
            now = self._clock()
            if self._alive(key, now) is not None:
                return False
            self._entries[key] = (value, now + ttl)
            return True

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)


class RedisCacheBackend:
    """
    ARQ Redis 풀(redis.asyncio 클라이언트)을 사용하는 캐시 백엔드입니다.
    값은 JSON으로 직렬화하여 저장합니다.
    """

    def __init__(self, redis, namespace: str = "logitrack"):
        self.redis = redis
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}" if self.namespace else key

    async def get(self, key: str) -> Optional[Any]:
        try:
            raw = await self.redis.get(self._key(key))
        except (RedisError, OSError, asyncio.TimeoutError) as e:
            raise CacheUnavailable(str(e)) from e
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            # 손상된 값은 미스로 처리합니다.
            logger.warning("캐시 값 디코딩 실패, 미스로 처리합니다: %s", key)
            return None

    async def set(self, key: str, value: Any, ttl: int) -> None:
        try:
            await self.redis.set(self._key(key), json.dumps(value), ex=ttl)
        except (RedisError, OSError, asyncio.TimeoutError) as e:
            raise CacheUnavailable(str(e)) from e

    async def set_if_absent(self, key: str, value: Any, ttl: int) -> bool:
        try:
            created = await self.redis.set(self._key(key), json.dumps(value), ex=ttl, nx=True)
        except (RedisError, OSError, asyncio.TimeoutError) as e:
            raise CacheUnavailable(str(e)) from e
        return bool(created)

    async def delete(self, key: str) -> None:
        try:
            await self.redis.delete(self._key(key))
        except (RedisError, OSError, asyncio.TimeoutError) as e:
            raise CacheUnavailable(str(e)) from e


# =============================================================================
# 2. 버전 캐시 계층
# =============================================================================
class CacheLayer:
    """
    목록 캐시(버전 토큰)와 단건 캐시를 제공합니다.
    모든 메서드는 백엔드 장애 시 예외를 던지지 않습니다.
    """

    def __init__(
        self,
        backend: CacheBackend,
        *,
        list_ttl: int = 60,
        by_id_ttl: int = 60,
        version_ttl: int = 86400,
    ):
        self.backend = backend
        self.list_ttl = list_ttl
        self.by_id_ttl = by_id_ttl
        self.version_ttl = version_ttl

    async def get_or_init_version(self, collection: str) -> str:
        """
        현재 버전 토큰을 반환합니다. 없으면 set-if-absent로 새로 만듭니다.
        동시에 여러 요청이 초기화를 시도해도 저장되는 토큰은 하나입니다.
        """
        key = version_key(collection)
        candidate = new_version_token()
        try:
            current = await self.backend.get(key)
            if current:
                return current
            if await self.backend.set_if_absent(key, candidate, self.version_ttl):
                logger.debug("%s 버전 토큰 초기화: %s", collection, candidate)
                return candidate
            current = await self.backend.get(key)
        except CacheUnavailable as e:
            logger.warning("캐시 사용 불가, 임시 버전 토큰을 사용합니다 (%s): %s", collection, e)
            return candidate
        return current or candidate

    async def try_get_list(self, collection: str, version: str) -> Optional[list]:
        try:
            value = await self.backend.get(list_key(collection, version))
        except CacheUnavailable as e:
            logger.warning("목록 캐시 조회 실패 (%s): %s", collection, e)
            return None
        logger.debug("%s 목록 캐시 %s (v=%s)", collection, "HIT" if value is not None else "MISS", version)
        return value

    async def put_list(self, collection: str, version: str, items: list, ttl: Optional[int] = None) -> None:
        ttl = self.list_ttl if ttl is None else ttl
        # TTL이 0 이하면 저장하지 않습니다.
        if ttl <= 0:
            return
        try:
            await self.backend.set(list_key(collection, version), items, ttl)
        except CacheUnavailable as e:
            logger.warning("목록 캐시 저장 실패 (%s): %s", collection, e)

    async def bump_version(self, collection: str) -> str:
        """
        새 버전 토큰을 발급하여 무조건 덮어씁니다.
        이전 버전의 목록 항목은 더 이상 참조되지 않습니다.
        """
        token = new_version_token()
        try:
            await self.backend.set(version_key(collection), token, self.version_ttl)
        except CacheUnavailable as e:
            logger.warning("버전 토큰 갱신 실패 (%s): %s", collection, e)
            return token
        logger.debug("%s 버전 토큰 갱신: %s", collection, token)
        return token

    async def get_by_id(self, collection: str, id: Any) -> Optional[Any]:
        try:
            value = await self.backend.get(id_key(collection, id))
        except CacheUnavailable as e:
            logger.warning("단건 캐시 조회 실패 (%s:%s): %s", collection, id, e)
            return None
        logger.debug("%s:%s 단건 캐시 %s", collection, id, "HIT" if value is not None else "MISS")
        return value

    async def put_by_id(self, collection: str, id: Any, value: Any, ttl: Optional[int] = None) -> None:
        ttl = self.by_id_ttl if ttl is None else ttl
        if ttl <= 0:
            return
        try:
            await self.backend.set(id_key(collection, id), value, ttl)
        except CacheUnavailable as e:
            logger.warning("단건 캐시 저장 실패 (%s:%s): %s", collection, id, e)

    async def remove_by_id(self, collection: str, id: Any) -> None:
        try:
            await self.backend.delete(id_key(collection, id))
        except CacheUnavailable as e:
            logger.warning("단건 캐시 삭제 실패 (%s:%s): %s", collection, id, e)
