# app/domains/usr/schemas.py

"""
'usr' 도메인 (사용자 및 인증)의 API 데이터 전송 객체(DTO)를 정의하는 모듈입니다.
"""

from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field
from pydantic import EmailStr

from . import models as usr_models


# =============================================================================
# 1. 사용자 (User) 스키마
# =============================================================================
class UserBase(SQLModel):
    """사용자 정보의 기본 필드를 정의하는 스키마"""
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr = Field(..., max_length=100)
    first_name: str = Field("", max_length=50)
    last_name: str = Field("", max_length=50)


class UserCreate(UserBase):
    """회원 가입을 위한 스키마. 역할은 항상 USER로 생성됩니다."""
    password: str = Field(..., min_length=8)


class UserRead(UserBase):
    """
    사용자 정보 조회를 위한 스키마.
    비밀번호 해시값 등 민감한 정보는 제외됩니다.
    """
    id: int
    role: usr_models.UserRole
    is_active: bool
    created_at: Optional[datetime] = None


# =============================================================================
# 2. 인증 (Authentication) 스키마
# =============================================================================
class LoginRequest(SQLModel):
    """username 자리에 이메일을 넣어도 됩니다."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class Token(SQLModel):
    access_token: str
    token_type: str = "bearer"


class LoginResponse(Token):
    expires_in_seconds: int
    user_id: int
    username: str
    email: str
