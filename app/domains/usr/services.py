# app/domains/usr/services.py

"""
애플리케이션 시작 시 초기 매니저 계정을 준비하는 서비스 모듈입니다.
"""

import logging
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import Settings
from . import crud as usr_crud
from . import models as usr_models
from . import schemas as usr_schemas

logger = logging.getLogger(__name__)


async def seed_manager(db: AsyncSession, settings: Settings) -> Optional[usr_models.User]:
    """
    SEED_MANAGER_* 설정으로 매니저 계정을 생성합니다.

    - 개발 환경이 아니면 SEED_ALLOW_IN_PRODUCTION이 켜져 있을 때만 실행합니다.
    - 이메일이나 비밀번호가 설정되지 않았으면 건너뜁니다.
    - 같은 이메일의 사용자가 이미 있으면 MANAGER 역할로 승격만 합니다.
    """
    if not settings.is_development and not settings.SEED_ALLOW_IN_PRODUCTION:
        logger.info("운영 환경이므로 매니저 계정 시드를 건너뜁니다.")
        return None
    if not settings.SEED_MANAGER_EMAIL or settings.SEED_MANAGER_PASSWORD is None:
        logger.info("SEED_MANAGER_EMAIL/SEED_MANAGER_PASSWORD가 없어 매니저 계정 시드를 건너뜁니다.")
        return None

    existing = await usr_crud.user.get_by_email(db, email=settings.SEED_MANAGER_EMAIL)
    if existing:
        if existing.role != usr_models.UserRole.MANAGER:
            existing.role = usr_models.UserRole.MANAGER
            existing = await usr_crud.user.save(db, existing)
            logger.info("기존 사용자 %s를 MANAGER로 승격했습니다.", existing.email)
        return existing

    manager = await usr_crud.user.create(
        db,
        obj_in=usr_schemas.UserCreate(
            username=settings.SEED_MANAGER_EMAIL,
            email=settings.SEED_MANAGER_EMAIL,
            first_name=settings.SEED_MANAGER_FIRST_NAME,
            last_name=settings.SEED_MANAGER_LAST_NAME,
            password=settings.SEED_MANAGER_PASSWORD.get_secret_value(),
        ),
        role=usr_models.UserRole.MANAGER,
    )
    logger.info("매니저 계정 %s를 생성했습니다.", manager.email)
    return manager
