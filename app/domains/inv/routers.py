# app/domains/inv/routers.py

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core import dependencies as deps
from app.core.cache import CacheLayer
from app.domains.inv import schemas as inv_schemas
from app.domains.inv import services as inv_services
from app.domains.usr.models import User as UsrUser

router = APIRouter(
    tags=["Inventory Management (재고 관리)"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[inv_schemas.InventoryItemRead], summary="재고 품목 목록 조회")
async def read_inventory(
    db: AsyncSession = Depends(deps.get_db_session),
    cache: CacheLayer = Depends(deps.get_cache),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    """전체 재고 품목 목록을 조회합니다. 결과는 버전 캐시에 저장됩니다."""
    return await inv_services.get_inventory_list(db, cache)


@router.post(
    "",
    response_model=inv_schemas.InventoryItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="재고 품목 생성",
)
async def create_inventory_item(
    item_in: inv_schemas.InventoryItemCreate,
    db: AsyncSession = Depends(deps.get_db_session),
    cache: CacheLayer = Depends(deps.get_cache),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    return await inv_services.create_inventory_item(db, cache, item_in)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT, summary="재고 품목 삭제")
async def delete_inventory_item(
    item_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    cache: CacheLayer = Depends(deps.get_cache),
    current_user: UsrUser = Depends(deps.get_current_active_user),
):
    await inv_services.delete_inventory_item(db, cache, item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
