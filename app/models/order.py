"""주문 SQLAlchemy ORM 모델 정의.

Order SQLAlchemy ORM model definition.
Order lines and payment details are stored as JSON documents; their shape
is enforced by the order schema before anything is written.

Tables:
    - orders: 주문 (Customer orders)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import JSON, String, DateTime, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# PostgreSQL에서는 JSONB, 그 외 드라이버에서는 일반 JSON
# JSONB on PostgreSQL, generic JSON elsewhere
JsonDocument = JSON().with_variant(JSONB(), "postgresql")


class Order(Base):
    """주문 모델.

    Order model.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        buyer: 구매자 식별자 (Buyer identifier)
        products: 주문 항목 목록 (Order lines: [{"product": ..., "quantity": ...}])
        payment: 결제 정보 (Payment details, optional)
        status: 주문 상태 (Order status)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    buyer: Mapped[str] = mapped_column(String(255), nullable=False)
    products: Mapped[list] = mapped_column(JsonDocument, nullable=False)
    payment: Mapped[dict | None] = mapped_column(JsonDocument, nullable=True)
    # 주문 상태 — Not Processed / Processing / Shipped / Delivered / Canceled
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="Not Processed")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
