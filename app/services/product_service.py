"""상품 서비스 — 상품 카탈로그 비즈니스 로직.

Product Service — Business logic for the product catalog.
Handles paginated/filtered listing, slug lookup, creation with image
upload, partial update with stock reconciliation, and deletion with
image cleanup.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.product import Product
from app.repositories.category_repository import category_repository
from app.repositories.product_repository import product_repository
from app.schemas.product import (
    CategoryRef,
    ProductCreate,
    ProductFields,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from app.services.storage_service import storage_service
from app.utils.exceptions import DuplicateError, NotFoundError
from app.utils.pagination import Pagination, page_window, single_page
from app.utils.slug import slugify

logger = logging.getLogger(__name__)


def merge_product_update(
    existing: ProductFields,
    patch: ProductUpdate,
    image: str | None = None,
) -> ProductFields:
    """기존 상품 필드에 부분 업데이트를 병합한 새 스냅샷을 반환합니다.

    Merge a partial update into the stored fields, field by field.

    - A present, non-empty value replaces the stored one; otherwise the
      stored value is kept. An empty title keeps the title and the slug.
    - A new quantity resets stock to ``quantity - sold``; without one the
      stock is kept.
    - ``sold`` is recomputed only when both quantity and stock are non-zero.

    Args:
        existing: 현재 저장된 필드 (Stored fields)
        patch: 수정 요청 (Partial update)
        image: 새 이미지 참조, None이면 기존 유지 (New image reference)

    Returns:
        ProductFields: 병합된 새 스냅샷 (New merged snapshot)
    """
    quantity: int | None = patch.quantity
    count_in_stock: int = quantity - existing.sold if quantity else existing.count_in_stock
    sold: int = quantity - count_in_stock if quantity and count_in_stock else existing.sold

    return ProductFields(
        title=patch.title if patch.title else existing.title,
        slug=slugify(patch.title) if patch.title else existing.slug,
        description=patch.description if patch.description else existing.description,
        price=patch.price if patch.price is not None else existing.price,
        category_id=patch.category if patch.category is not None else existing.category_id,
        image=image if image else existing.image,
        quantity=quantity if quantity else existing.quantity,
        count_in_stock=count_in_stock,
        sold=sold,
    )


class ProductService:
    """상품 관련 비즈니스 로직을 처리하는 서비스.

    Service handling product business logic.
    """

    def _to_response(self, product: Product) -> ProductResponse:
        """상품 모델을 응답 스키마로 변환합니다 (카테고리가 로드되어 있어야 함)."""
        category: CategoryRef | None = None
        if product.category is not None:
            category = CategoryRef(id=str(product.category.id), title=product.category.title)

        return ProductResponse(
            id=str(product.id),
            title=product.title,
            slug=product.slug,
            description=product.description,
            price=product.price,
            category=category,
            image=product.image,
            quantity=product.quantity,
            count_in_stock=product.count_in_stock,
            sold=product.sold,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    def _snapshot(self, product: Product) -> ProductFields:
        return ProductFields(
            title=product.title,
            slug=product.slug,
            description=product.description,
            price=product.price,
            category_id=product.category_id,
            image=product.image,
            quantity=product.quantity,
            count_in_stock=product.count_in_stock,
            sold=product.sold,
        )

    async def _check_category(self, db: AsyncSession, category_id: UUID | None) -> None:
        if category_id is not None and not await category_repository.exists(db, {"id": category_id}):
            raise NotFoundError(f"Category with id {category_id} does not exist")

    async def _delete_image(self, image: str) -> None:
        public_id: str = storage_service.public_id_from_url(image)
        await storage_service.delete(f"{settings.IMAGE_FOLDER}/{public_id}")

    async def list_products(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 4,
        max_price: float = 1_000_000,
        min_price: float = 0,
        search_by: str = "",
        category_id: UUID | None = None,
        sort: str = "desc",
    ) -> ProductListResponse:
        """상품 목록을 가격 범위/검색어/카테고리로 필터링해 조회합니다.

        List products filtered by price range, search term, and category,
        sorted by price.

        The page window is computed from the unfiltered product count.
        Searching or filtering by category turns paging off: every match is
        returned on page 1. When both are given the filters combine.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            page: 요청 페이지, 1부터 시작 (Requested page)
            limit: 페이지당 상품 수 (Products per page)
            max_price: 최대 가격 (Upper price bound, inclusive)
            min_price: 최소 가격 (Lower price bound, inclusive)
            search_by: 제목/설명 검색어 (Title/description search term)
            category_id: 카테고리 필터 (Category filter)
            sort: "asc"면 가격 오름차순, 그 외 내림차순 (Price sort direction)

        Returns:
            ProductListResponse: 상품 목록, 페이지네이션, 검색어
        """
        total: int = await product_repository.count(db)
        window = page_window(total, page, limit)

        # 검색/카테고리 필터는 페이지네이션 없이 전체 반환
        # Search and category results are returned on a single page
        if search_by:
            window = single_page(total, window.total_pages)
        if category_id is not None:
            window = single_page(total, window.total_pages)

        products: list[Product] = await product_repository.get_filtered(
            db,
            min_price=min_price,
            max_price=max_price,
            search_by=search_by,
            category_id=category_id,
            skip=window.skip,
            limit=window.limit,
            ascending=sort == "asc",
        )

        return ProductListResponse(
            products=[self._to_response(p) for p in products],
            pagination=Pagination(
                total_pages=window.total_pages,
                current_page=window.page,
                total_products=total,
            ),
            search_by=search_by,
        )

    async def get_product(self, db: AsyncSession, slug: str) -> ProductResponse:
        """슬러그로 상품을 조회합니다.

        Raises:
            NotFoundError: 상품을 찾을 수 없을 때 (Product not found)
        """
        product: Product | None = await product_repository.get_by_slug(db, slug)
        if product is None:
            raise NotFoundError(f"Product with slug {slug} does not exist")
        return self._to_response(product)

    async def create_product(
        self,
        db: AsyncSession,
        data: ProductCreate,
        image: str | None = None,
    ) -> ProductResponse:
        """새 상품을 생성하고 이미지를 저장소에 업로드합니다.

        Create a new product, then upload its image and store the
        canonical URL.

        Stock starts at ``quantity``; ``sold`` becomes
        ``quantity - count_in_stock`` when that is positive, otherwise the
        supplied ``sold`` is kept.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 상품 생성 데이터 (Product creation data)
            image: 로컬 이미지 경로 또는 URL (Local image path or URL, optional)

        Returns:
            ProductResponse: 생성된 상품 응답 (Created product response)

        Raises:
            DuplicateError: 같은 제목 또는 슬러그의 상품이 이미 존재할 때
            NotFoundError: 카테고리를 찾을 수 없을 때
        """
        slug: str = slugify(data.title)
        if await product_repository.exists(db, {"title": data.title}):
            raise DuplicateError(f"Product with title {data.title} already exists")
        if await product_repository.exists(db, {"slug": slug}):
            raise DuplicateError(f"Product with slug {slug} already exists")
        await self._check_category(db, data.category)

        difference: int = data.quantity - data.count_in_stock
        product: Product = await product_repository.create(
            db,
            {
                "title": data.title,
                "slug": slug,
                "description": data.description,
                "price": data.price,
                "category_id": data.category,
                "image": image,
                "quantity": data.quantity,
                "count_in_stock": data.quantity,
                "sold": difference if difference > 0 else data.sold,
            },
        )

        if product.image:
            product.image = await storage_service.upload(product.image, settings.IMAGE_FOLDER)
            await db.flush()

        logger.info("Created product %s", product.slug)
        await product_repository.load_category(db, product)
        return self._to_response(product)

    async def update_product(
        self,
        db: AsyncSession,
        slug: str,
        data: ProductUpdate,
        image: str | None = None,
    ) -> ProductResponse:
        """상품을 부분 수정하고 이미지를 교체합니다.

        Apply a partial update to the product identified by ``slug``.

        A new image reference is uploaded and the previous image is removed
        from the store. Passing the current image URL (or no image) leaves
        the stored image untouched.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            slug: 대상 상품 슬러그 (Target product slug)
            data: 수정 데이터 (Partial update data)
            image: 새 이미지 경로/URL, None이면 기존 유지 (New image reference)

        Returns:
            ProductResponse: 수정된 상품 응답 (Updated product response)

        Raises:
            NotFoundError: 상품을 찾을 수 없을 때 (Product not found)
            DuplicateError: 다른 상품이 같은 제목/슬러그를 사용할 때 (Title or slug taken)
        """
        existing: Product | None = await product_repository.get_by_slug(db, slug)
        if existing is None:
            raise NotFoundError(f"Product with slug {slug} does not exist")

        # 제목이 바뀔 때만 중복 확인 (Duplicate check on title change only)
        if data.title and data.title != existing.title:
            if await product_repository.exists(db, {"title": data.title}):
                raise DuplicateError(f"Product with title {data.title} already exists")
            if not await product_repository.exists(db, {"slug": slug}):
                raise NotFoundError(f"Product with slug {slug} does not exist")
            new_slug: str = slugify(data.title)
            if new_slug != existing.slug and await product_repository.exists(db, {"slug": new_slug}):
                raise DuplicateError(f"Product with slug {new_slug} already exists")
        await self._check_category(db, data.category)

        old_image: str | None = existing.image
        merged: ProductFields = merge_product_update(self._snapshot(existing), data, image)

        product: Product | None = await product_repository.update(db, existing.id, merged.model_dump())
        if product is None:
            raise NotFoundError(f"Product with slug {slug} does not exist")

        if product.image and product.image != old_image:
            product.image = await storage_service.upload(product.image, settings.IMAGE_FOLDER)
            await db.flush()

        # 이미지가 바뀐 경우에만 이전 이미지 삭제 (Only remove a replaced image)
        if old_image and product.image != old_image:
            await self._delete_image(old_image)

        logger.info("Updated product %s -> %s", slug, product.slug)
        await product_repository.load_category(db, product)
        return self._to_response(product)

    async def delete_product(self, db: AsyncSession, slug: str) -> None:
        """상품과 저장된 이미지를 삭제합니다.

        Raises:
            NotFoundError: 상품을 찾을 수 없을 때 (Product not found)
        """
        product: Product | None = await product_repository.get_by_slug(db, slug)
        if product is None:
            raise NotFoundError(f"Product with slug {slug} does not exist")

        if product.image:
            await self._delete_image(product.image)

        await product_repository.delete(db, product.id)
        logger.info("Deleted product %s", slug)


# 싱글턴 인스턴스 — Singleton instance
product_service: ProductService = ProductService()
