"""상품 목록 테스트 — 페이지네이션, 가격/검색/카테고리 필터, 정렬.

Product listing tests — Pagination arithmetic, price/search/category
filters, and price sorting.
"""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.product_service import product_service
from app.utils.pagination import page_window

URL = "/api/v1/products"


class TestPageWindow:
    """페이지 구간 계산 테스트."""

    def test_first_page(self):
        w = page_window(10, page=1, limit=4)
        assert (w.page, w.skip, w.limit, w.total_pages) == (1, 0, 4, 3)

    def test_page_past_end_clamped(self):
        w = page_window(10, page=7, limit=4)
        assert w.page == 3
        assert w.skip == 8

    def test_empty_table(self):
        w = page_window(0, page=1, limit=4)
        assert (w.page, w.skip, w.total_pages) == (0, 0, 0)

    def test_non_positive_page_never_negative_skip(self):
        assert page_window(10, page=0, limit=4).skip == 0
        assert page_window(10, page=-3, limit=4).skip == 0
        assert page_window(10, page=0, limit=4).page == 1

    def test_non_positive_limit_is_single_page(self):
        w = page_window(10, page=2, limit=0)
        assert (w.page, w.skip, w.limit, w.total_pages) == (1, 0, 10, 1)


class TestListProducts:
    """상품 목록 서비스 테스트."""

    async def _seed(self, make_product, count: int = 10, **kwargs):
        for i in range(1, count + 1):
            await make_product(f"Item {i}", price=i, **kwargs)

    async def test_default_sort_is_price_desc(self, db: AsyncSession, make_product):
        """기본 정렬은 가격 내림차순."""
        await self._seed(make_product)
        result = await product_service.list_products(db)
        assert [p.price for p in result.products] == [10, 9, 8, 7]
        assert result.pagination.total_pages == 3
        assert result.pagination.current_page == 1
        assert result.pagination.total_products == 10

    async def test_sort_asc(self, db: AsyncSession, make_product):
        await self._seed(make_product)
        result = await product_service.list_products(db, sort="asc")
        assert [p.price for p in result.products] == [1, 2, 3, 4]

    async def test_unknown_sort_falls_back_to_desc(self, db: AsyncSession, make_product):
        await self._seed(make_product)
        result = await product_service.list_products(db, sort="sideways")
        assert result.products[0].price == 10

    async def test_second_page(self, db: AsyncSession, make_product):
        await self._seed(make_product)
        result = await product_service.list_products(db, page=2)
        assert [p.price for p in result.products] == [6, 5, 4, 3]

    async def test_page_past_end_returns_last_page(self, db: AsyncSession, make_product):
        """전체 페이지보다 큰 페이지 요청 시 마지막 페이지."""
        await self._seed(make_product)
        result = await product_service.list_products(db, page=99)
        assert result.pagination.current_page == 3
        assert [p.price for p in result.products] == [2, 1]

    async def test_empty_catalog(self, db: AsyncSession):
        """상품이 없으면 빈 목록, 전체 페이지 0."""
        result = await product_service.list_products(db, page=3)
        assert result.products == []
        assert result.pagination.total_pages == 0
        assert result.pagination.current_page == 0
        assert result.pagination.total_products == 0

    async def test_price_range_inclusive(self, db: AsyncSession, make_product):
        await self._seed(make_product)
        result = await product_service.list_products(db, limit=10, min_price=3, max_price=5)
        assert sorted(p.price for p in result.products) == [3, 4, 5]

    async def test_search_ignores_paging(self, db: AsyncSession, make_product):
        """검색 시 limit/page와 무관하게 모든 일치 항목 반환."""
        await make_product("Red Shirt", price=5)
        await make_product("Blue Shirt", price=6)
        await make_product("Green Hat", price=7, description="Goes well with a shirt")
        await make_product("Black Shoes", price=8)

        result = await product_service.list_products(db, page=3, limit=1, search_by="SHIRT")
        assert len(result.products) == 3
        assert result.pagination.current_page == 1
        assert result.search_by == "SHIRT"

    async def test_search_treats_wildcards_literally(self, db: AsyncSession, make_product):
        await make_product("100% Cotton", price=5)
        await make_product("Wool", price=6)
        result = await product_service.list_products(db, search_by="%")
        assert [p.title for p in result.products] == ["100% Cotton"]

    async def test_category_ignores_paging(self, db: AsyncSession, make_product, category, other_category):
        """카테고리 필터 시 페이지네이션 없이 해당 카테고리 전체 반환."""
        await self._seed(make_product, count=6, category_id=category.id)
        await make_product("Novel", price=3, category_id=other_category.id)

        result = await product_service.list_products(db, page=2, limit=2, category_id=category.id)
        assert len(result.products) == 6
        assert all(p.category.title == "Clothing" for p in result.products)
        assert result.pagination.current_page == 1

    async def test_search_and_category_combine(self, db: AsyncSession, make_product, category, other_category):
        await make_product("Red Shirt", category_id=category.id)
        await make_product("Shirt Folding Guide", category_id=other_category.id)
        await make_product("Red Scarf", category_id=category.id)

        result = await product_service.list_products(db, search_by="shirt", category_id=category.id)
        assert [p.title for p in result.products] == ["Red Shirt"]


class TestListProductsApi:
    """상품 목록 API 테스트."""

    async def test_list_products(self, client: AsyncClient, make_product, category):
        await make_product("Red Shirt", price=20, category_id=category.id)
        res = await client.get(URL)
        assert res.status_code == 200
        data = res.json()
        assert data["pagination"] == {"total_pages": 1, "current_page": 1, "total_products": 1}
        assert data["products"][0]["category"]["title"] == "Clothing"
        assert data["search_by"] == ""

    async def test_list_with_query_params(self, client: AsyncClient, make_product):
        for i in range(1, 6):
            await make_product(f"Item {i}", price=i)
        res = await client.get(URL, params={"limit": 2, "page": 2, "sort": "asc"})
        assert res.status_code == 200
        assert [p["price"] for p in res.json()["products"]] == [3, 4]
