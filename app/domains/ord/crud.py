# app/domains/ord/crud.py

"""
'ord' 도메인의 CRUD 작업과 주문 조합(기존 품목 연결 + 새 품목 생성) 로직을 정의하는 모듈입니다.
"""

import logging
from datetime import datetime, UTC
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.core.exceptions import TransientStoreError, ValidationError
from app.domains.inv import crud as inv_crud
from app.domains.inv import models as inv_models
from app.domains.ord import models as ord_models
from app.domains.ord import schemas as ord_schemas

logger = logging.getLogger(__name__)


def is_existing_reference(line: ord_schemas.OrderItemIn) -> bool:
    return line.item_id is not None and line.item_id > 0


def validate_order(obj_in: ord_schemas.OrderCreate) -> Dict[str, List[str]]:
    """
    저장소에 접근하기 전에 할 수 있는 검사만 수행합니다.
    """
    errors: Dict[str, List[str]] = {}
    if not obj_in.customer_name or not obj_in.customer_name.strip():
        errors["customer_name"] = ["Customer name is required."]
    if not obj_in.items:
        errors["items"] = ["At least one item is required."]
        return errors
    for index, line in enumerate(obj_in.items):
        if not is_existing_reference(line) and not (line.name and line.name.strip()):
            errors[f"items[{index}].name"] = ["Name is required for a new item."]
    return errors


def new_item(line: ord_schemas.OrderItemIn) -> inv_models.InventoryItem:
    # ID와 소속 주문은 비워 둔 새 객체로 만듭니다.
    return inv_models.InventoryItem(
        name=line.name.strip(),
        quantity=line.quantity or 0,
        location=line.location or "",
    )


class CRUDOrder(CRUDBase[ord_models.Order, ord_schemas.OrderCreate]):
    def __init__(self):
        super().__init__(model=ord_models.Order)

    async def get_with_items(self, db: AsyncSession, order_id: int) -> Optional[ord_models.Order]:
        statement = (
            select(self.model)
            .where(self.model.order_id == order_id)
            .options(selectinload(self.model.items))
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return result.scalar_one_or_none()

    async def get_multi_with_items(self, db: AsyncSession) -> List[ord_models.Order]:
        """최신 주문부터 품목과 함께 조회합니다."""
        statement = (
            select(self.model)
            .options(selectinload(self.model.items))
            .order_by(self.model.date_placed.desc(), self.model.order_id.desc())
            .execution_options(populate_existing=True)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def create(
        self, db: AsyncSession, *, obj_in: ord_schemas.OrderCreate
    ) -> Tuple[ord_models.Order, List[inv_models.InventoryItem], List[int]]:
        """
        주문을 생성합니다.

        1. 고객명/품목 검사 (실패 시 트랜잭션을 열지 않고 ValidationError)
        2. 양수 item_id들을 중복 제거 후 한 번의 IN 쿼리로 조회
        3. 입력 순서대로 기존 품목은 그대로 연결하고, 나머지는 새 품목으로 생성
           (존재하지 않는 item_id는 새 품목으로 취급)
        4. 주문과 새 품목을 함께 저장하고 커밋

        커밋 전 어느 단계에서 실패하든 트랜잭션 전체를 롤백합니다.
        반환값의 품목 목록은 입력 순서와 중복을 그대로 유지합니다.
        마지막 값은 연결된 기존 품목이 이전에 속해 있던 주문 ID 목록입니다.
        """
        errors = validate_order(obj_in)
        if errors:
            raise ValidationError(errors)

        supplied_ids = [line.item_id for line in obj_in.items if is_existing_reference(line)]
        try:
            existing = await inv_crud.inventory_item.get_by_ids(db, supplied_ids)
            # 연결로 품목을 잃게 되는 주문들 (order_id가 바뀌기 전에 기록)
            previous_order_ids = sorted(
                {item.order_id for item in existing.values() if item.order_id is not None}
            )

            final_items: List[inv_models.InventoryItem] = []
            unknown_errors: Dict[str, List[str]] = {}
            for index, line in enumerate(obj_in.items):
                if is_existing_reference(line) and line.item_id in existing:
                    final_items.append(existing[line.item_id])
                    continue
                if not (line.name and line.name.strip()):
                    unknown_errors[f"items[{index}].item_id"] = [
                        f"Item {line.item_id} does not exist and no name was given to create it."
                    ]
                    continue
                final_items.append(new_item(line))
            if unknown_errors:
                raise ValidationError(unknown_errors)

            # 같은 품목이 여러 번 참조되어도 DB에는 한 번만 연결합니다.
            unique_items = list({id(item): item for item in final_items}.values())
            order = ord_models.Order(
                customer_name=obj_in.customer_name.strip(),
                date_placed=obj_in.date_placed or datetime.now(UTC),
                items=unique_items,
            )
            db.add(order)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("주문 생성 실패, 트랜잭션을 롤백했습니다: %s", e)
            raise TransientStoreError(str(e)) from e
        except BaseException:
            await db.rollback()
            raise

        logger.info(
            "주문 %s 생성: 기존 품목 %d개 연결, 새 품목 %d개 생성",
            order.order_id,
            len(existing),
            sum(1 for item in unique_items if item.item_id not in existing),
        )
        return order, final_items, previous_order_ids

    async def remove(self, db: AsyncSession, *, order_id: int) -> bool:
        """
        주문과 소유한 품목을 삭제합니다. 주문이 없으면 아무것도 하지 않고 False를 반환합니다.
        """
        order = await self.get_with_items(db, order_id)
        if order is None:
            return False
        await self.delete_obj(db, order)
        return True


order = CRUDOrder()
