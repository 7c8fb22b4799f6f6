"""카테고리 SQLAlchemy ORM 모델 정의.

Category SQLAlchemy ORM model definition.
Categories are managed elsewhere; the catalog only reads their title back
through products.

Tables:
    - categories: 상품 카테고리 (Product categories)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Category(Base):
    """상품 카테고리 모델.

    Product category model.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        title: 카테고리 이름 (Category title, unique)
        slug: URL용 식별자 (URL-safe identifier)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 관계 — 카테고리 삭제 시 상품의 category_id는 NULL (SET NULL on delete)
    products = relationship("Product", back_populates="category", passive_deletes=True)
