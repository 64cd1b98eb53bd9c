# app/domains/inv/models.py

"""
'inv' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

재고 품목(inventory_items)은 단독으로 생성되거나 주문 생성 시 함께 생성되며,
최대 하나의 주문(orders)에 소속됩니다.
"""

from typing import Optional, TYPE_CHECKING
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import ForeignKey, Integer

# 순환 임포트 방지를 위한 TYPE_CHECKING
if TYPE_CHECKING:
    from app.domains.ord.models import Order


# =============================================================================
# inventory_items 테이블 모델
# =============================================================================
class InventoryItemBase(SQLModel):
    name: str = Field(max_length=200, description="품목명")
    quantity: int = Field(default=0, description="수량")
    location: str = Field(default="", max_length=100, description="보관 위치")


class InventoryItem(InventoryItemBase, table=True):
    __tablename__ = "inventory_items"

    item_id: Optional[int] = Field(default=None, primary_key=True, description="품목 고유 ID")
    # 저장소 계층에서만 채워지며, 주문 조합 과정에서는 참조하지 않습니다.
    order_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("orders.order_id", ondelete="CASCADE"), nullable=True, index=True),
        description="소속 주문 ID (FK)"
    )

    order: Optional["Order"] = Relationship(back_populates="items")
