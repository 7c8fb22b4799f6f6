"""주문 관련 Pydantic 요청/응답 스키마 정의.

Order Pydantic request/response schema definitions.
OrderCreate is the order schema: every create and update payload is
validated against it before anything is written.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

# 주문 상태 — Allowed order statuses
OrderStatus = Literal["Not Processed", "Processing", "Shipped", "Delivered", "Canceled"]


class OrderLine(BaseModel):
    """주문 항목 — 상품 참조와 수량 (Order line: product reference and quantity)."""

    product: str = Field(min_length=1)  # 상품 ID (Product identifier)
    quantity: int = Field(ge=1)


class OrderCreate(BaseModel):
    """주문 스키마 — 생성과 수정 모두 이 스키마로 검증합니다.

    Order schema used to validate both creation and full-replace updates.

    Attributes:
        buyer: 구매자 식별자 (Buyer identifier)
        products: 주문 항목 목록, 최소 1개 (Order lines, at least one)
        payment: 결제 정보 (Payment details, optional)
        status: 주문 상태 (Order status, default "Not Processed")
    """

    buyer: str = Field(min_length=1)
    products: list[OrderLine] = Field(min_length=1)
    payment: dict[str, Any] | None = None
    status: OrderStatus = "Not Processed"


class OrderResponse(BaseModel):
    """주문 응답 스키마 (Order response schema)."""

    id: str  # 주문 UUID 문자열 (Order UUID as string)
    buyer: str
    products: list[OrderLine]
    payment: dict[str, Any] | None = None
    status: str
    created_at: datetime
    updated_at: datetime
