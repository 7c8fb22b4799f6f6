"""상품 SQLAlchemy ORM 모델 정의.

Product SQLAlchemy ORM model definition.
Stock fields are reconciled by the product service on every write:
quantity = count_in_stock + sold.

Tables:
    - products: 상품 카탈로그 (Product catalog)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Float, Integer, Text, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Product(Base):
    """상품 모델 — 카탈로그의 판매 단위.

    Product model — A sellable catalog item.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        title: 상품명 (Product title, unique)
        slug: 상품명에서 파생된 URL 식별자 (URL-safe identifier derived from title)
        description: 상품 설명 (Product description)
        price: 가격 (Non-negative price)
        category_id: 카테고리 FK (Category foreign key, optional)
        image: 이미지 URL 또는 로컬 경로 (Canonical image URL, or local path before upload)
        quantity: 전체 수량 (Total quantity)
        count_in_stock: 재고 수량 (Units still in stock)
        sold: 판매 수량 (Units sold)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        category: 소속 카테고리 (Parent category, title is surfaced in responses)
    """

    __tablename__ = "products"

    # 상품 고유 식별자 — Product unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 상품명 — 중복 불가 (Unique title)
    title: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 슬러그 — URL lookups use this instead of id
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, index=True, nullable=False, default=0)
    # 카테고리 FK — SET NULL on category delete
    category_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("categories.id", ondelete="SET NULL"), index=True, nullable=True)
    image: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    count_in_stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sold: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    category = relationship("Category", back_populates="products")
