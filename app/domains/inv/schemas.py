# app/domains/inv/schemas.py

"""
'inv' 도메인의 Pydantic 스키마를 정의하는 모듈입니다.
"""

from typing import Optional
from pydantic import ConfigDict, Field
from sqlmodel import SQLModel


class InventoryItemCreate(SQLModel):
    """
    재고 품목 생성 요청. 요청 본문에 item_id가 있어도 무시되며 ID는 서버에서 부여합니다.
    """
    name: str = Field(..., min_length=1, max_length=200, description="품목명")
    quantity: int = Field(0, description="수량")
    location: str = Field("", max_length=100, description="보관 위치")


class InventoryItemRead(SQLModel):
    model_config = ConfigDict(from_attributes=True)

    item_id: int = Field(..., description="품목 고유 ID")
    name: str
    quantity: int
    location: str
    order_id: Optional[int] = Field(None, description="소속 주문 ID")
