"""카탈로그 API 라우터 패키지 — 상품/주문 엔드포인트 통합.

Catalog API Router package — Aggregates the product and order endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - products: 상품 카탈로그 (Product catalog with image upload)
    - orders: 주문 관리 (Order management)
"""

from fastapi import APIRouter

from app.api.catalog.products import router as products_router
from app.api.catalog.orders import router as orders_router

catalog_router: APIRouter = APIRouter()

catalog_router.include_router(products_router, prefix="/products", tags=["Products"])
catalog_router.include_router(orders_router, prefix="/orders", tags=["Orders"])
