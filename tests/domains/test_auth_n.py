# tests/domains/test_auth_n.py

"""
'usr' 도메인 내의 인증 관련 API 엔드포인트에 대한 통합 테스트를 정의하는 모듈입니다.
"""

import pytest
from httpx import AsyncClient
from jose import jwt
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import Settings, settings
from app.domains.usr import crud as usr_crud
from app.domains.usr import services as usr_services
from app.domains.usr.models import User as UsrUser, UserRole


# =============================================================================
# 1. 회원 가입
# =============================================================================
@pytest.mark.asyncio
async def test_register_creates_plain_user(client: AsyncClient, db_session: AsyncSession):
    payload = {
        "username": "newbie",
        "email": "newbie@example.com",
        "password": "newbiepass123",
        "first_name": "New",
        "last_name": "Bie",
    }
    response = await client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "newbie"
    assert data["role"] == UserRole.USER
    assert "password" not in data and "password_hash" not in data

    stored = await usr_crud.user.get_by_email(db_session, email="newbie@example.com")
    assert stored is not None
    assert stored.password_hash != "newbiepass123"


@pytest.mark.asyncio
async def test_register_duplicate_username_returns_400(client: AsyncClient, test_user: UsrUser):
    payload = {
        "username": test_user.username,
        "email": "someone-else@example.com",
        "password": "anotherpass123",
    }
    response = await client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 400
    assert "username" in response.json()["errors"]


# =============================================================================
# 2. 로그인
# =============================================================================
@pytest.mark.asyncio
async def test_login_returns_token_and_profile(client: AsyncClient, test_user: UsrUser):
    response = await client.post("/api/v1/auth/login", json={"username": "testuser", "password": "testpass123"})

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user_id"] == test_user.id
    assert data["username"] == "testuser"
    assert data["email"] == "testuser@example.com"
    assert data["expires_in_seconds"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    claims = jwt.decode(
        data["access_token"],
        settings.SECRET_KEY.get_secret_value(),
        algorithms=[settings.ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
    )
    assert claims["sub"] == str(test_user.id)
    assert claims["unique_name"] == "testuser"
    assert claims["role"] == "USER"
    assert claims["jti"]


@pytest.mark.asyncio
async def test_login_accepts_email_as_username(client: AsyncClient, test_user: UsrUser):
    response = await client.post(
        "/api/v1/auth/login", json={"username": "testuser@example.com", "password": "testpass123"}
    )
    assert response.status_code == 200
    assert response.json()["user_id"] == test_user.id


@pytest.mark.asyncio
async def test_login_wrong_password_returns_401(client: AsyncClient, test_user: UsrUser):
    response = await client.post("/api/v1/auth/login", json={"username": "testuser", "password": "wrong_password"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect username or password"


@pytest.mark.asyncio
async def test_login_nonexistent_user_returns_401(client: AsyncClient):
    response = await client.post("/api/v1/auth/login", json={"username": "ghost", "password": "any_password"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_inactive_user_returns_403(client: AsyncClient, test_inactive_user: UsrUser):
    response = await client.post("/api/v1/auth/login", json={"username": "sleeper", "password": "sleeperpass123"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_oauth2_token_form_login(client: AsyncClient, test_user: UsrUser):
    response = await client.post("/api/v1/auth/token", data={"username": "testuser", "password": "testpass123"})
    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"


# =============================================================================
# 3. 토큰 검증
# =============================================================================
@pytest.mark.asyncio
async def test_me_returns_current_user(authorized_client: AsyncClient, test_user: UsrUser):
    response = await authorized_client.get("/api/v1/auth/me")
    assert response.status_code == 200
    assert response.json()["id"] == test_user.id


@pytest.mark.asyncio
async def test_me_without_token_returns_401(client: AsyncClient):
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_with_garbage_token_returns_401(client: AsyncClient):
    response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


# =============================================================================
# 4. 매니저 계정 시드
# =============================================================================
@pytest.mark.asyncio
async def test_seed_manager_creates_manager_in_development(db_session: AsyncSession):
    seed_settings = Settings(
        APP_ENV="development",
        SEED_MANAGER_EMAIL="boss@example.com",
        SEED_MANAGER_PASSWORD="bosspass1234",
    )
    manager = await usr_services.seed_manager(db_session, seed_settings)

    assert manager is not None
    assert manager.role == UserRole.MANAGER
    assert await usr_crud.user.authenticate(db_session, login="boss@example.com", password="bosspass1234")


@pytest.mark.asyncio
async def test_seed_manager_is_idempotent_and_promotes_existing_user(db_session: AsyncSession, test_user: UsrUser):
    seed_settings = Settings(
        APP_ENV="development",
        SEED_MANAGER_EMAIL=test_user.email,
        SEED_MANAGER_PASSWORD="whatever12345",
    )
    first = await usr_services.seed_manager(db_session, seed_settings)
    second = await usr_services.seed_manager(db_session, seed_settings)

    assert first.id == second.id == test_user.id
    assert second.role == UserRole.MANAGER


@pytest.mark.asyncio
async def test_seed_manager_skipped_in_production(db_session: AsyncSession):
    seed_settings = Settings(
        APP_ENV="production",
        SEED_MANAGER_EMAIL="boss@example.com",
        SEED_MANAGER_PASSWORD="bosspass1234",
    )
    assert await usr_services.seed_manager(db_session, seed_settings) is None
    assert await usr_crud.user.get_by_email(db_session, email="boss@example.com") is None


@pytest.mark.asyncio
async def test_seed_manager_allowed_in_production_when_enabled(db_session: AsyncSession):
    seed_settings = Settings(
        APP_ENV="production",
        SEED_ALLOW_IN_PRODUCTION=True,
        SEED_MANAGER_EMAIL="boss@example.com",
        SEED_MANAGER_PASSWORD="bosspass1234",
    )
    manager = await usr_services.seed_manager(db_session, seed_settings)
    assert manager is not None and manager.role == UserRole.MANAGER
