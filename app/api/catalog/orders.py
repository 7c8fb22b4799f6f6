"""주문 라우터 — 주문 CRUD 엔드포인트.

Order Router — CRUD endpoints for orders.
Bodies are accepted as raw JSON objects and validated by the order
service, so a schema violation surfaces as OrderValidationError.
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.order import OrderResponse
from app.services.order_service import order_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[OrderResponse]:
    """모든 주문을 조회합니다."""
    return await order_service.list_orders(db)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse:
    """ID로 주문을 조회합니다."""
    return await order_service.get_order(db, order_id)


@router.post("", response_model=OrderResponse, status_code=201)
async def create_order(
    data: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse:
    """새 주문을 생성합니다."""
    result: OrderResponse = await order_service.create_order(db, data)
    await db.commit()
    return result


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: UUID,
    data: Annotated[dict[str, Any], Body()],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderResponse:
    """주문 전체를 교체합니다."""
    result: OrderResponse = await order_service.update_order(db, order_id, data)
    await db.commit()
    return result


@router.delete("/{order_id}", status_code=204)
async def delete_order(
    order_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """주문을 삭제합니다."""
    await order_service.delete_order(db, order_id)
    await db.commit()
