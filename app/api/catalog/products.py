"""상품 라우터 — 상품 카탈로그 CRUD 엔드포인트.

Product Router — CRUD endpoints for the product catalog.
Create and update accept multipart forms so an image file can travel
with the product fields; the file is staged on disk and handed to the
product service, which mirrors it to the image store.
"""

from pathlib import Path
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.schemas.product import (
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from app.services.product_service import product_service
from app.services.storage_service import storage_service

router: APIRouter = APIRouter()


async def _stage_image(image: UploadFile | None) -> str | None:
    """업로드된 이미지를 임시 파일로 저장하고 경로를 반환합니다."""
    if image is None or not image.filename:
        return None
    data: bytes = await image.read()
    return storage_service.save_temp(image.filename, data)


def _discard_staged(image_path: str | None) -> None:
    """요청 실패 시 임시 이미지 파일을 삭제합니다."""
    if image_path:
        Path(image_path).unlink(missing_ok=True)


@router.get("", response_model=ProductListResponse)
async def list_products(
    db: Annotated[AsyncSession, Depends(get_db)],
    page: Annotated[int, Query()] = 1,
    limit: Annotated[int, Query()] = settings.PRODUCTS_PER_PAGE,
    max_price: Annotated[float, Query()] = settings.MAX_PRICE,
    min_price: Annotated[float, Query()] = 0,
    search_by: Annotated[str, Query()] = "",
    category_id: Annotated[UUID | None, Query()] = None,
    sort: Annotated[str, Query()] = "desc",
) -> ProductListResponse:
    """상품 목록을 조회합니다. 검색/카테고리 필터 시 전체 결과를 한 페이지로 반환.

    List products by price range, search term, and category, sorted by price.
    """
    return await product_service.list_products(
        db,
        page=page,
        limit=limit,
        max_price=max_price,
        min_price=min_price,
        search_by=search_by,
        category_id=category_id,
        sort=sort,
    )


@router.get("/{slug}", response_model=ProductResponse)
async def get_product(
    slug: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProductResponse:
    """슬러그로 상품을 조회합니다."""
    return await product_service.get_product(db, slug)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    db: Annotated[AsyncSession, Depends(get_db)],
    title: Annotated[str, Form(min_length=1)],
    description: Annotated[str, Form()],
    price: Annotated[float, Form(ge=0)],
    quantity: Annotated[int, Form(ge=0)],
    count_in_stock: Annotated[int, Form(ge=0)] = 0,
    sold: Annotated[int, Form(ge=0)] = 0,
    category: Annotated[UUID | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> ProductResponse:
    """새 상품을 생성합니다 (multipart form + 선택 이미지 파일).

    Create a new product with an optional image file.
    """
    data = ProductCreate(
        title=title,
        description=description,
        price=price,
        category=category,
        quantity=quantity,
        count_in_stock=count_in_stock,
        sold=sold,
    )
    image_path: str | None = await _stage_image(image)
    try:
        result: ProductResponse = await product_service.create_product(db, data, image_path)
        await db.commit()
    except Exception:
        _discard_staged(image_path)
        raise
    return result


@router.put("/{slug}", response_model=ProductResponse)
async def update_product(
    slug: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    price: Annotated[float | None, Form(ge=0)] = None,
    quantity: Annotated[int | None, Form(ge=0)] = None,
    category: Annotated[UUID | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> ProductResponse:
    """상품을 부분 수정합니다. 빈 값은 기존 값을 유지합니다.

    Partially update a product; absent or empty fields keep their value.
    """
    data = ProductUpdate(
        title=title,
        description=description,
        price=price,
        category=category,
        quantity=quantity,
    )
    image_path: str | None = await _stage_image(image)
    try:
        result: ProductResponse = await product_service.update_product(db, slug, data, image_path)
        await db.commit()
    except Exception:
        _discard_staged(image_path)
        raise
    return result


@router.delete("/{slug}", status_code=204)
async def delete_product(
    slug: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """상품과 저장된 이미지를 삭제합니다."""
    await product_service.delete_product(db, slug)
    await db.commit()
