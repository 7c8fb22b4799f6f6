"""상품 레포지토리 — 상품 CRUD 및 목록 필터링 쿼리.

Product Repository — CRUD and catalog listing queries for products.
Extends BaseRepository with slug lookups, price/search/category
filtering and category eager loading.
"""

from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.product import Product
from app.repositories.base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """상품 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the products table.
    """

    def __init__(self) -> None:
        super().__init__(Product)

    async def get_by_slug(
        self,
        db: AsyncSession,
        slug: str,
    ) -> Product | None:
        """슬러그로 상품을 카테고리와 함께 조회합니다.

        Retrieve a product by exact slug with its category loaded.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            slug: 상품 슬러그 (Product slug)

        Returns:
            Product | None: 조회된 상품 또는 None (Found product or None)
        """
        query: Select = (
            select(Product)
            .options(selectinload(Product.category))
            .where(Product.slug == slug)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_filtered(
        self,
        db: AsyncSession,
        min_price: float,
        max_price: float,
        search_by: str = "",
        category_id: UUID | None = None,
        skip: int = 0,
        limit: int = 4,
        ascending: bool = False,
    ) -> list[Product]:
        """가격/검색어/카테고리 조건으로 상품 목록을 조회합니다.

        Retrieve products within a price range, optionally matching a
        case-insensitive search term on title or description and a
        category, ordered by price.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            min_price: 최소 가격, 포함 (Inclusive lower price bound)
            max_price: 최대 가격, 포함 (Inclusive upper price bound)
            search_by: 검색어, 비어있으면 미적용 (Search term, ignored when empty)
            category_id: 카테고리 필터 (Category filter, optional)
            skip: 건너뛸 행 수 (Rows to skip)
            limit: 최대 행 수 (Maximum rows to return)
            ascending: 가격 오름차순 여부 (Sort by price ascending when True)

        Returns:
            list[Product]: 카테고리가 로드된 상품 목록 (Products with category loaded)
        """
        query: Select = (
            select(Product)
            .options(selectinload(Product.category))
            .where(Product.price >= min_price, Product.price <= max_price)
        )

        if search_by:
            query = query.where(
                or_(
                    Product.title.icontains(search_by, autoescape=True),
                    Product.description.icontains(search_by, autoescape=True),
                )
            )

        if category_id is not None:
            query = query.where(Product.category_id == category_id)

        order = Product.price.asc() if ascending else Product.price.desc()
        query = query.order_by(order).offset(skip).limit(limit)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def load_category(self, db: AsyncSession, product: Product) -> Product:
        """상품의 카테고리 관계를 로드합니다 (비동기 lazy load 방지).

        Load the category relationship after a write so the response can
        read its title without an implicit lazy load.
        """
        await db.refresh(product, attribute_names=["category"])
        return product


# 싱글턴 인스턴스 — Singleton instance
product_repository: ProductRepository = ProductRepository()
