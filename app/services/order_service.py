"""주문 서비스 — 주문 CRUD 비즈니스 로직.

Order Service — Business logic for order CRUD operations.
Every write is preceded by validate_order; an invalid payload raises
OrderValidationError before the database is touched.
"""

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.order import Order
from app.repositories.order_repository import order_repository
from app.schemas.order import OrderCreate, OrderLine, OrderResponse
from app.utils.exceptions import NotFoundError, OrderValidationError


@dataclass(frozen=True)
class OrderValidationResult:
    """주문 검증 결과 — 성공 시 order, 실패 시 errors.

    Typed outcome of validating an order payload.
    """

    ok: bool
    order: OrderCreate | None = None
    errors: list[dict[str, Any]] = field(default_factory=list)


def validate_order(payload: dict[str, Any]) -> OrderValidationResult:
    """주문 페이로드를 주문 스키마로 검증합니다 (DB 접근 없음).

    Validate an order payload against the order schema without touching
    the database.

    Args:
        payload: 요청 본문 (Raw request payload)

    Returns:
        OrderValidationResult: 검증 결과 (Validation outcome)
    """
    try:
        order: OrderCreate = OrderCreate.model_validate(payload)
    except ValidationError as exc:
        return OrderValidationResult(
            ok=False,
            errors=exc.errors(include_url=False, include_context=False),
        )
    return OrderValidationResult(ok=True, order=order)


class OrderService:
    """주문 관련 비즈니스 로직을 처리하는 서비스.

    Service handling order business logic.
    """

    def _to_response(self, order: Order) -> OrderResponse:
        return OrderResponse(
            id=str(order.id),
            buyer=order.buyer,
            products=[OrderLine.model_validate(line) for line in order.products],
            payment=order.payment,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    def _validated(self, payload: dict[str, Any]) -> OrderCreate:
        result: OrderValidationResult = validate_order(payload)
        if not result.ok or result.order is None:
            raise OrderValidationError(result.errors)
        return result.order

    async def list_orders(self, db: AsyncSession) -> list[OrderResponse]:
        """모든 주문을 조회합니다 (필터/페이지네이션 없음)."""
        orders: list[Order] = await order_repository.get_all_orders(db)
        return [self._to_response(o) for o in orders]

    async def get_order(self, db: AsyncSession, order_id: UUID) -> OrderResponse:
        """ID로 주문을 조회합니다.

        Raises:
            NotFoundError: 주문을 찾을 수 없을 때 (Order not found)
        """
        order: Order | None = await order_repository.get_by_id(db, order_id)
        if order is None:
            raise NotFoundError(f"Order not found with id {order_id}")
        return self._to_response(order)

    async def create_order(self, db: AsyncSession, payload: dict[str, Any]) -> OrderResponse:
        """주문을 검증한 뒤 생성합니다.

        Validate the payload, then persist a new order.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            payload: 주문 데이터 (Raw order payload)

        Returns:
            OrderResponse: 생성된 주문 응답 (Created order response)

        Raises:
            OrderValidationError: 주문 스키마 검증 실패 (Schema validation failed)
        """
        data: OrderCreate = self._validated(payload)
        order: Order = await order_repository.create(db, data.model_dump(mode="json"))
        return self._to_response(order)

    async def update_order(
        self,
        db: AsyncSession,
        order_id: UUID,
        payload: dict[str, Any],
    ) -> OrderResponse:
        """주문 전체를 새 페이로드로 교체합니다.

        Replace an order with a freshly validated payload. Validation runs
        before any write.

        Raises:
            OrderValidationError: 주문 스키마 검증 실패 (Schema validation failed)
            NotFoundError: 주문을 찾을 수 없을 때 (Order not found)
        """
        data: OrderCreate = self._validated(payload)
        order: Order | None = await order_repository.update(db, order_id, data.model_dump(mode="json"))
        if order is None:
            raise NotFoundError(f"Order not found with id {order_id}")
        return self._to_response(order)

    async def delete_order(self, db: AsyncSession, order_id: UUID) -> None:
        """주문을 삭제합니다.

        Raises:
            NotFoundError: 주문을 찾을 수 없을 때 (Order not found)
        """
        deleted: bool = await order_repository.delete(db, order_id)
        if not deleted:
            raise NotFoundError(f"Order not found with id {order_id}")


# 싱글턴 인스턴스 — Singleton instance
order_service: OrderService = OrderService()
