# app/main.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from arq import cron
from arq.connections import create_pool, RedisSettings
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# 핵심 설정 및 데이터베이스 모듈 임포트
from app.core.config import settings
from app.core.database import AsyncSessionLocal, create_db_and_tables, engine
from app.core.cache import CacheLayer, MemoryCacheBackend, RedisCacheBackend
from app.core.exceptions import DomainError, TransientStoreError, ValidationError
from app.core.logging_config import configure_logging
from app.core import dependencies as deps
from app import API_PREFIX

# 태스크 모듈 임포트
from app.core import tasks as core_tasks

# 도메인 라우터 임포트
from app.domains.usr.routers import router as usr_router
from app.domains.inv.routers import router as inv_router
from app.domains.ord.routers import router as ord_router
from app.domains.usr import services as usr_services

logger = logging.getLogger(__name__)

# ARQ 워커가 실행할 태스크 함수 목록
worker_functions = [
    core_tasks.health_check_database_task,
]


# ARQ 워커 설정 클래스
class ArqWorkerSettings:
    redis_settings = RedisSettings(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        database=settings.REDIS_DATABASE,
    )
    functions = worker_functions
    # 매일 자정(00:00)에 데이터베이스 헬스 체크를 실행합니다.
    cron_jobs = [
        cron(
            core_tasks.health_check_database_task,
            name="daily_db_health_check",
            hour=0,
            minute=0,
            timeout=300,
            keep_result=600,
        ),
    ]


def build_cache(redis=None) -> CacheLayer:
    """
    설정에 따라 캐시 계층을 만듭니다. redis 클라이언트가 주어지면 Redis 백엔드를 사용합니다.
    """
    backend = RedisCacheBackend(redis) if redis is not None else MemoryCacheBackend()
    return CacheLayer(
        backend,
        list_ttl=settings.CACHE_LIST_TTL_SECONDS,
        by_id_ttl=settings.CACHE_ORDER_TTL_SECONDS,
        version_ttl=settings.CACHE_VERSION_TTL_SECONDS,
    )


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI 애플리케이션의 수명 주기 이벤트(데이터베이스, 캐시, ARQ Redis)를 함께 처리합니다.
    """
    configure_logging(settings.LOG_LEVEL)
    logger.info("FastAPI 애플리케이션 시작 중... (env=%s)", settings.APP_ENV)
    app.state.redis = None
    try:
        # --- 시작 시 실행할 로직 ---
        # 1. 데이터베이스 테이블 생성 및 매니저 계정 시드
        await create_db_and_tables()
        async with AsyncSessionLocal() as session:
            await usr_services.seed_manager(session, settings)

        # 2. 캐시 생성. redis 백엔드일 때는 ARQ Redis 커넥션 풀을 함께 사용합니다.
        if settings.CACHE_BACKEND == "redis":
            logger.info("ARQ Redis 커넥션 풀을 생성합니다...")
            app.state.redis = await create_pool(ArqWorkerSettings.redis_settings)
            logger.info("ARQ Redis 커넥션 풀 생성 완료.")
        app.state.cache = build_cache(app.state.redis)
        logger.info("읽기 캐시 백엔드: %s", settings.CACHE_BACKEND)

    except Exception:
        logger.exception("애플리케이션 시작 중 오류 발생")
        raise

    yield  # 애플리케이션 실행

    logger.info("FastAPI 애플리케이션 종료 중...")
    # 1. ARQ Redis 연결 풀 종료
    if app.state.redis is not None:
        await app.state.redis.aclose()
        logger.info("ARQ Redis 연결 풀 종료 완료.")

    # 2. 데이터베이스 연결 풀 종료
    await engine.dispose()
    logger.info("데이터베이스 연결 풀 종료 완료.")


# -- FastAPI 애플리케이션 인스턴스 생성 --
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",       # Swagger UI (Interactive API documentation)
    redoc_url="/redoc",     # ReDoc (Alternative API documentation)
    lifespan=lifespan       # 위에서 정의한 수명 주기 이벤트 핸들러를 등록합니다.
)


# -- CORS (Cross-Origin Resource Sharing) 미들웨어 설정 --
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 개발용: 모든 출처 허용. 운영 환경에서는 실제 프론트엔드 도메인으로 제한
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -- 도메인 예외 핸들러 --
@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    body = {"title": exc.title, "status": exc.status_code, "detail": exc.detail}
    if isinstance(exc, ValidationError):
        body["errors"] = exc.errors
    if isinstance(exc, TransientStoreError):
        body["retryable"] = exc.retryable
        logger.error("%s %s 처리 중 저장소 오류: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body)


# -- 도메인 라우터 포함 --
app.include_router(usr_router, prefix=f"{API_PREFIX}/auth", tags=["Authentication (인증)"])
app.include_router(inv_router, prefix=f"{API_PREFIX}/inventory", tags=["Inventory Management (재고 관리)"])
app.include_router(ord_router, prefix=f"{API_PREFIX}/orders", tags=["Order Management (주문 관리)"])


# -- 루트 엔드포인트 --
@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    """
    LogiTrack API의 루트 엔드포인트입니다.
    API의 시작점을 알리고 문서 링크를 제공합니다.
    """
    return {"message": "Welcome to LogiTrack API. Visit /docs for interactive API documentation."}


# -- 헬스 체크 엔드포인트 --
@app.get("/health-check", summary="Health Check", response_description="Status of the application and database connection.")
async def health_check(session: AsyncSession = Depends(deps.get_db_session)):
    """
    애플리케이션의 헬스 체크 엔드포인트입니다.
    데이터베이스 연결을 테스트하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        result = await session.execute(text("SELECT 1"))
        if result.scalar_one_or_none() == 1:
            return {"status": "ok", "database_connection": "successful"}
    except SQLAlchemyError as e:
        # 데이터베이스 연결 중 예외가 발생하면 500 에러를 반환합니다.
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database connection error during health check: {e}"
        )
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Database health check failed: No result from test query"
    )


# -- Uvicorn 서버 직접 실행 (개발용) --
# if __name__ == "__main__":
#     import uvicorn
#     uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
