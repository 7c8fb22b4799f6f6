"""주문 레포지토리 — 주문 CRUD 쿼리.

Order Repository — CRUD queries for orders.
Generic operations come from BaseRepository; listing is ordered by
creation time.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.order import Order
from app.repositories.base import BaseRepository


class OrderRepository(BaseRepository[Order]):
    """주문 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Order)

    async def get_all_orders(self, db: AsyncSession) -> list[Order]:
        """모든 주문을 생성순으로 조회합니다 (필터/페이지 없음)."""
        return list(await self.get_all(db, order_by=Order.created_at))


# 싱글턴 인스턴스 — Singleton instance
order_repository: OrderRepository = OrderRepository()
