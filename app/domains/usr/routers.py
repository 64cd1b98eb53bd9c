# app/domains/usr/routers.py

"""
'usr' 도메인 (회원 가입 및 인증)과 관련된 API 엔드포인트를 정의하는 모듈입니다.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.database import get_session
from app.core import dependencies as deps

# usr 도메인의 CRUD, 모델, 스키마
from . import crud as usr_crud
from . import models as usr_models
from . import schemas as usr_schemas


router = APIRouter(
    tags=["Authentication (인증)"],
    responses={401: {"description": "Unauthorized"}},
)


async def _authenticate_or_raise(db: AsyncSession, login: str, password: str) -> usr_models.User:
    user = await usr_crud.user.authenticate(db, login=login, password=password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return user


@router.post("/register", response_model=usr_schemas.UserRead, status_code=status.HTTP_201_CREATED, summary="회원 가입")
async def register(
    user_in: usr_schemas.UserCreate,
    db: AsyncSession = Depends(get_session),
):
    return await usr_crud.user.create(db, obj_in=user_in)


@router.post("/login", response_model=usr_schemas.LoginResponse, summary="로그인 (JSON)")
async def login(
    credentials: usr_schemas.LoginRequest,
    db: AsyncSession = Depends(get_session),
):
    user = await _authenticate_or_raise(db, credentials.username, credentials.password)
    access_token, expires_in = deps.create_user_token(user)
    return usr_schemas.LoginResponse(
        access_token=access_token,
        expires_in_seconds=expires_in,
        user_id=user.id,
        username=user.username,
        email=user.email,
    )


@router.post("/token", response_model=usr_schemas.Token, summary="Access Token 획득")
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_session),
):
    user = await _authenticate_or_raise(db, form_data.username, form_data.password)
    access_token, _ = deps.create_user_token(user)
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=usr_schemas.UserRead, summary="현재 사용자 정보 조회")
async def read_users_me(current_user: usr_models.User = Depends(deps.get_current_active_user)):
    return current_user
