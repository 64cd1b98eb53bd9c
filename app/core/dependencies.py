# app/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 데이터베이스 세션 관리 (get_db_session).
- 캐시 계층 획득 (get_cache). 캐시는 lifespan에서 생성되어 app.state에 보관됩니다.
- 현재 인증된 사용자 정보 획득 (security.py에서 재노출).
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlmodel.ext.asyncio.session import AsyncSession  # AsyncSession 임포트

# 실제 데이터베이스 세션 제너레이터 임포트
from app.core.database import get_session as get_main_app_session
from app.core.cache import CacheLayer

# 보안 관련 유틸리티 함수 임포트
# flake8: noqa
from app.core.security import (
    create_access_token,
    create_user_token,
    get_password_hash,
    verify_password,
    oauth2_scheme,  # OAuth2PasswordBearer 인스턴스
    get_current_user_from_token,  # 토큰에서 사용자 정보를 가져오는 함수
    get_current_active_user,  # 활성 사용자 확인 함수
    get_current_manager_user,  # 매니저 사용자 확인 함수
)


# --- 데이터베이스 세션 의존성 주입 ---
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:  # 타입을 AsyncSession으로 명시
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    app.core.database.get_session을 래핑하여 사용합니다.
    """
    async for session in get_main_app_session():
        yield session


# --- 캐시 의존성 주입 ---
def get_cache(request: Request) -> CacheLayer:
    return request.app.state.cache
