# app/domains/ord/routers.py

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.core.cache import CacheLayer
from app.domains.ord import schemas as ord_schemas
from app.domains.ord import services as ord_services
from app.domains.usr.models import User as UsrUser

router = APIRouter(
    tags=["Order Management (주문 관리)"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[ord_schemas.OrderRead], summary="주문 목록 조회")
async def read_orders(
    db: AsyncSession = Depends(deps.get_db_session),
    cache: CacheLayer = Depends(deps.get_cache),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    """최신 주문부터 품목과 함께 조회합니다."""
    return await ord_services.get_order_list(db, cache)


@router.get("/{order_id}", response_model=ord_schemas.OrderRead, summary="주문 단건 조회")
async def read_order(
    order_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    cache: CacheLayer = Depends(deps.get_cache),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    return await ord_services.get_order_by_id(db, cache, order_id)


@router.post(
    "",
    response_model=ord_schemas.OrderRead,
    status_code=status.HTTP_201_CREATED,
    summary="주문 생성",
)
async def create_order(
    order_in: ord_schemas.OrderCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(deps.get_db_session),
    cache: CacheLayer = Depends(deps.get_cache),
    current_user: UsrUser = Depends(deps.get_current_manager_user),
):
    """
    주문을 생성합니다. 매니저 권한이 필요합니다.
    items의 item_id가 기존 품목을 가리키면 그 품목을 주문에 연결하고, 아니면 새 품목을 만듭니다.
    """
    order = await ord_services.create_order(db, cache, order_in)
    response.headers["Location"] = str(request.url_for("read_order", order_id=order.order_id))
    return order


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, summary="주문 삭제")
async def delete_order(
    order_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    cache: CacheLayer = Depends(deps.get_cache),
    current_user: UsrUser = Depends(deps.get_current_manager_user),
):
    """주문과 소유 품목을 삭제합니다. 없는 주문이어도 204를 반환합니다."""
    await ord_services.delete_order(db, cache, order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
