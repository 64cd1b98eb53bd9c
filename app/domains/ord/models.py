# app/domains/ord/models.py

"""
'ord' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

주문(orders)은 하나 이상의 재고 품목을 소유하며, 주문이 삭제되면 소유한 품목도 함께 삭제됩니다.
"""

from typing import List, Optional, TYPE_CHECKING
from datetime import datetime, UTC
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy.types import TIMESTAMP

if TYPE_CHECKING:
    from app.domains.inv.models import InventoryItem


# =============================================================================
# orders 테이블 모델
# =============================================================================
class OrderBase(SQLModel):
    customer_name: str = Field(max_length=200, description="고객명")
    date_placed: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
        description="주문 일시 (UTC)"
    )


class Order(OrderBase, table=True):
    __tablename__ = "orders"

    order_id: Optional[int] = Field(default=None, primary_key=True, description="주문 고유 ID")

    items: List["InventoryItem"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "InventoryItem.item_id",
        },
    )
