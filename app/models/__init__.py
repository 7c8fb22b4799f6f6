"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    category: 상품 카테고리 (Product categories)
    product: 상품 (Products)
    order: 주문 (Orders)
"""

from app.models.category import Category
from app.models.product import Product
from app.models.order import Order

__all__ = [
    "Category",
    "Product",
    "Order",
]
