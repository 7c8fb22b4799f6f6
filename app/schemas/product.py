"""상품 관련 Pydantic 요청/응답 스키마 정의.

Product Pydantic request/response schema definitions.
Covers catalog listing, creation, partial update, and the immutable
ProductFields snapshot used when merging an update into a stored product.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.utils.pagination import Pagination


class ProductCreate(BaseModel):
    """상품 생성 요청 스키마.

    Product creation request schema.
    ``count_in_stock`` is only used to derive ``sold``; the stored stock
    always starts at ``quantity``.

    Attributes:
        title: 상품명 (Product title, unique)
        description: 상품 설명 (Description)
        price: 가격 (Non-negative price)
        category: 카테고리 UUID (Category identifier, optional)
        quantity: 전체 수량 (Total quantity)
        count_in_stock: 입력 재고 수량 (Caller-supplied stock count)
        sold: 판매 수량 (Units sold)
    """

    title: str = Field(min_length=1)
    description: str
    price: float = Field(ge=0)
    category: UUID | None = None
    quantity: int = Field(ge=0)
    count_in_stock: int = Field(default=0, ge=0)
    sold: int = Field(default=0, ge=0)


class ProductUpdate(BaseModel):
    """상품 수정 요청 스키마 (부분 업데이트).

    Product update request schema (partial update).
    Absent or empty values keep the stored value; an empty title keeps
    the current title and slug.
    """

    title: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    category: UUID | None = None
    quantity: int | None = Field(default=None, ge=0)


class ProductFields(BaseModel):
    """저장될 상품 필드의 불변 스냅샷.

    Immutable snapshot of the writable product fields, produced by the
    update merge and applied to the stored row as a whole.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    slug: str
    description: str
    price: float
    category_id: UUID | None
    image: str | None
    quantity: int
    count_in_stock: int
    sold: int


class CategoryRef(BaseModel):
    """상품 응답에 포함되는 카테고리 요약 (Category summary)."""

    id: str
    title: str


class ProductResponse(BaseModel):
    """상품 응답 스키마.

    Product response schema with the category title resolved.
    """

    id: str  # 상품 UUID 문자열 (Product UUID as string)
    title: str
    slug: str
    description: str
    price: float
    category: CategoryRef | None = None  # 카테고리 없으면 None
    image: str | None = None  # 이미지 URL (Canonical image URL)
    quantity: int
    count_in_stock: int
    sold: int
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    """상품 목록 응답 — 상품, 페이지네이션 메타데이터, 검색어.

    Product listing response: one page of products, pagination metadata
    and the echoed search term.
    """

    products: list[ProductResponse]
    pagination: Pagination
    search_by: str = ""
