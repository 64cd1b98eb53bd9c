# app/core/config.py

from typing import Any, Literal
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    애플리케이션의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드합니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일을 명시적으로 지정
        env_file_encoding='utf-8',           # .env 파일 인코딩
        extra='ignore',                      # .env 파일에 정의되었지만 모델에 없는 변수는 무시
        case_sensitive=True                  # 환경 변수 이름 대소문자 구분
    )

    # --- 애플리케이션 기본 설정 ---
    APP_NAME: str = "LogiTrack API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Warehouse inventory and order tracking API"
    # 애플리케이션 환경 (예: "development", "production", "testing")
    APP_ENV: str = Field("development", description="Application environment (e.g., development, production, testing)")
    # 디버그 모드 활성화 여부
    DEBUG_MODE: bool = Field(False, description="Enable debug mode for detailed logging and error messages")
    LOG_LEVEL: str = Field("INFO", description="Root log level (DEBUG, INFO, WARNING, ...)")

    # --- 데이터베이스 설정 ---
    DATABASE_URL: SecretStr = Field(
        SecretStr("sqlite+aiosqlite:///" + os.path.join(BASE_DIR, "logitrack.db")),
        description="Async database connection URL (postgresql+asyncpg://... or sqlite+aiosqlite://...)"
    )

    # --- JWT (JSON Web Token) 설정 ---
    SECRET_KEY: SecretStr = Field(..., description="Secret key for JWT token signing. Keep this highly secure!")
    ALGORITHM: str = Field("HS256", description="Algorithm used for JWT signing (e.g., HS256)")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60, description="Access token expiration time in minutes")
    JWT_ISSUER: str = Field("LogiTrack", description="'iss' claim of issued tokens")
    JWT_AUDIENCE: str = Field("LogiTrackClients", description="'aud' claim of issued tokens")

    # --- 캐시 설정 ---
    # memory: 프로세스 내 캐시, redis: ARQ Redis 풀을 캐시 저장소로 사용
    CACHE_BACKEND: Literal["memory", "redis"] = Field("memory", description="Backing store of the read cache")
    REDIS_HOST: str = Field("localhost", description="Redis host (ARQ worker and redis cache backend)")
    REDIS_PORT: int = Field(6379, description="Redis port")
    REDIS_DATABASE: int = Field(0, description="Redis logical database number")
    CACHE_LIST_TTL_SECONDS: int = Field(60, description="TTL of cached list projections")
    CACHE_ORDER_TTL_SECONDS: int = Field(60, description="TTL of cached single orders")
    CACHE_VERSION_TTL_SECONDS: int = Field(86400, description="TTL of list version tokens")

    # --- 초기 관리자(Manager) 계정 시드 설정 ---
    SEED_MANAGER_EMAIL: str | None = Field(None, description="Email of the manager account seeded at startup")
    SEED_MANAGER_PASSWORD: SecretStr | None = Field(None, description="Password of the seeded manager account")
    SEED_MANAGER_FIRST_NAME: str = Field("Site", description="First name of the seeded manager")
    SEED_MANAGER_LAST_NAME: str = Field("Manager", description="Last name of the seeded manager")
    SEED_ALLOW_IN_PRODUCTION: bool = Field(False, description="Allow manager seeding outside development")

    # Post-initialization validation (Pydantic v2 BaseSettings)
    def model_post_init(self, __context: Any) -> None:  # noqa: ANN001
        # 디버그 모드에서는 로그 레벨을 DEBUG로 낮춥니다.
        if self.DEBUG_MODE and self.LOG_LEVEL.upper() == "INFO":
            self.LOG_LEVEL = "DEBUG"

    @property
    def is_development(self) -> bool:
        return self.APP_ENV == "development"


settings = Settings()
