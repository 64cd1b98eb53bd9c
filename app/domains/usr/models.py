# app/domains/usr/models.py

"""
'usr' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

API 사용자 계정(users) 테이블에 대한 SQLModel 클래스를 포함합니다.
"""

from typing import Optional
from datetime import datetime, UTC
from enum import IntEnum

from sqlmodel import Field, SQLModel, Column
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# =============================================================================
# 사용자 역할(RBAC)
# =============================================================================
class UserRole(IntEnum):
    """
    사용자 역할을 정의하는 정수형 Enum 클래스입니다.
    값이 작을수록 권한이 높습니다.
    """
    MANAGER = 10    # 주문 생성/삭제 가능
    USER = 100      # 일반 사용자


# =============================================================================
# users 테이블 모델
# =============================================================================
class UserBase(SQLModel):
    """
    users 테이블의 기본 속성을 정의하는 SQLModel Base 클래스입니다.
    """
    id: Optional[int] = Field(default=None, primary_key=True, description="사용자 고유 ID")
    username: str = Field(max_length=50, sa_column_kwargs={"unique": True}, description="로그인 사용자명")
    email: str = Field(max_length=100, sa_column_kwargs={"unique": True}, description="사용자 이메일")
    first_name: str = Field(default="", max_length=50, description="이름")
    last_name: str = Field(default="", max_length=50, description="성")
    password_hash: str = Field(max_length=255, description="해싱된 비밀번호")
    role: UserRole = Field(default=UserRole.USER, description="사용자 역할 (권한)")
    is_active: bool = Field(default=True, description="계정 활성 여부")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )


class User(UserBase, table=True):
    __tablename__ = "users"
