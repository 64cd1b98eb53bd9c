# app/domains/ord/schemas.py

"""
'ord' 도메인의 Pydantic 스키마를 정의하는 모듈입니다.

주문 생성 요청 스키마는 의도적으로 느슨하게 정의되어 있습니다.
고객명/품목 누락은 주문 조합 단계에서 검사하여 400 응답과 필드별 오류로 돌려줍니다.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import Field
from sqlmodel import SQLModel

from app.domains.inv.schemas import InventoryItemRead


class OrderItemIn(SQLModel):
    """
    주문에 포함될 품목 한 줄.
    item_id가 양수이면 기존 품목을 연결하고, 0 이하이거나 없으면 새 품목을 생성합니다.
    """
    item_id: Optional[int] = Field(None, description="기존 품목 ID (0 또는 생략 시 새 품목)")
    name: Optional[str] = Field(None, max_length=200)
    quantity: Optional[int] = None
    location: Optional[str] = Field(None, max_length=100)


class OrderCreate(SQLModel):
    customer_name: Optional[str] = Field(None, max_length=200, description="고객명")
    date_placed: Optional[datetime] = Field(None, description="주문 일시, 생략 시 현재 시각(UTC)")
    items: Optional[List[OrderItemIn]] = Field(None, description="주문 품목 목록 (1개 이상)")


class OrderRead(SQLModel):
    order_id: int
    customer_name: str
    date_placed: datetime
    items: List[InventoryItemRead] = []
