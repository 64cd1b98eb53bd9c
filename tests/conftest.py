# tests/conftest.py

import os

# app 모듈이 임포트되기 전에 테스트용 설정을 환경 변수로 지정합니다.
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-logitrack-tests")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "testing")

from typing import AsyncGenerator, Awaitable, Callable  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

# app.main을 임포트하여 FastAPI 앱 인스턴스에 접근합니다.
from app.main import app as main_app  # noqa: E402
from app.core import dependencies as deps  # noqa: E402
from app.core.cache import CacheLayer, MemoryCacheBackend  # noqa: E402
from app.core.database import get_session  # noqa: E402
from app.core.security import get_password_hash  # noqa: E402

# SQLModel.metadata.create_all()이 모든 테이블을 인식하도록 모든 모델을 임포트합니다.
from app.domains.models import *  # noqa: F401, F403, E402
from app.domains.usr import models as usr_models  # noqa: E402


# --- 테스트용 데이터베이스 설정 ---
# 테스트마다 새 인메모리 SQLite 데이터베이스를 사용합니다.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,   # 인메모리 DB가 하나의 연결을 공유하도록 함
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    각 테스트 함수마다 독립된 데이터베이스를 사용하는 비동기 세션을 제공합니다.
    """
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture(scope="function")
def cache() -> CacheLayer:
    """테스트마다 비어 있는 메모리 캐시를 제공합니다."""
    return CacheLayer(MemoryCacheBackend(), list_ttl=60, by_id_ttl=60, version_ttl=86400)


# --- 역할별 사용자 픽스처 ---
@pytest_asyncio.fixture(scope="function")
def user_factory(db_session: AsyncSession) -> Callable[..., Awaitable[usr_models.User]]:
    """
    역할과 속성을 지정하여 테스트 사용자를 생성하는 팩토리 함수를 반환합니다.
    """
    async def _create_user(
        username: str,
        password: str,
        role: usr_models.UserRole = usr_models.UserRole.USER,
        is_active: bool = True,
        **kwargs,
    ) -> usr_models.User:
        user_data = {
            "username": username,
            "password_hash": get_password_hash(password),
            "email": f"{username}@example.com",
            "role": role,
            "is_active": is_active,
            **kwargs,
        }
        user = usr_models.User(**user_data)
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user
    return _create_user


@pytest_asyncio.fixture(scope="function")
async def test_manager(user_factory: Callable) -> usr_models.User:
    """매니저(MANAGER) 사용자를 생성합니다."""
    return await user_factory("manager", "managerpass123", role=usr_models.UserRole.MANAGER,
                              first_name="Site", last_name="Manager")


@pytest_asyncio.fixture(scope="function")
async def test_user(user_factory: Callable) -> usr_models.User:
    """일반 사용자(USER)를 생성합니다."""
    return await user_factory("testuser", "testpass123", first_name="Test", last_name="User")


@pytest_asyncio.fixture(scope="function")
async def test_inactive_user(user_factory: Callable) -> usr_models.User:
    return await user_factory("sleeper", "sleeperpass123", is_active=False)


# --- 의존성 오버라이드 ---
@asynccontextmanager
async def _overridden_app(db_session: AsyncSession, cache: CacheLayer) -> AsyncGenerator[AsyncClient, None]:
    def override_get_session():
        yield db_session

    def override_get_cache():
        return cache

    original_overrides = main_app.dependency_overrides.copy()
    try:
        main_app.dependency_overrides.update({
            get_session: override_get_session,
            deps.get_db_session: override_get_session,
            deps.get_cache: override_get_cache,
        })
        transport = ASGITransport(app=main_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        # 테스트가 끝난 후 원래 의존성 상태로 되돌립니다.
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


# --- 비동기 테스트 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession, cache: CacheLayer) -> AsyncGenerator[AsyncClient, None]:
    """
    인증되지 않은 AsyncClient를 반환합니다.
    """
    async with _overridden_app(db_session, cache) as client:
        yield client


@pytest_asyncio.fixture(scope="function")
def authorized_client_factory(db_session: AsyncSession, cache: CacheLayer):
    """
    특정 사용자로 로그인된 AsyncClient를 생성하는 팩토리 함수를 반환합니다.
    현재 사용자 의존성은 오버라이드하지 않으므로 실제 토큰 검증과 역할 검사를 거칩니다.
    """
    @asynccontextmanager
    async def _create_client_context(user: usr_models.User, password: str) -> AsyncGenerator[AsyncClient, None]:
        async with _overridden_app(db_session, cache) as client:
            res = await client.post("/api/v1/auth/login", json={"username": user.username, "password": password})
            if res.status_code != 200:
                pytest.fail(f"Login failed for {user.username}: {res.text}")
            token = res.json()["access_token"]
            client.headers["Authorization"] = f"Bearer {token}"
            yield client

    return _create_client_context


@pytest_asyncio.fixture(scope="function")
async def manager_client(authorized_client_factory, test_manager: usr_models.User) -> AsyncGenerator[AsyncClient, None]:
    """매니저로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(test_manager, "managerpass123") as client:
        yield client


@pytest_asyncio.fixture(scope="function")
async def authorized_client(authorized_client_factory, test_user: usr_models.User) -> AsyncGenerator[AsyncClient, None]:
    """일반 사용자로 인증된 클라이언트를 반환합니다."""
    async with authorized_client_factory(test_user, "testpass123") as client:
        yield client
