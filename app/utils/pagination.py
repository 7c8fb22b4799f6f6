"""페이지네이션 유틸리티 모듈.

Pagination utility module for catalog list queries.
Computes the page window (page, offset, limit) from the total row count
and provides the Pagination metadata model returned to clients.
"""

import math
from dataclasses import dataclass

from pydantic import BaseModel


class Pagination(BaseModel):
    """페이지네이션 메타데이터 모델.

    Pagination metadata returned alongside a page of results.

    Attributes:
        total_pages: 전체 페이지 수 (Total number of pages, ceil(total/limit))
        current_page: 실제로 반환된 페이지 번호 (Page actually served after clamping)
        total_products: 전체 상품 수 (Total product count, unfiltered)
    """

    total_pages: int  # 전체 페이지 수 (Total pages)
    current_page: int  # 현재 페이지 — 0이면 결과 없음 (0 when there is nothing to page)
    total_products: int  # 전체 상품 수 (Total products)


@dataclass(frozen=True)
class PageWindow:
    """조회 구간 — Offset/limit window for a single query."""

    page: int
    skip: int
    limit: int
    total_pages: int


def page_window(total: int, page: int = 1, limit: int = 20) -> PageWindow:
    """전체 개수로부터 조회 구간을 계산합니다.

    Compute the offset/limit window for ``page`` over ``total`` rows.

    A page past the end is clamped to the last page, so an empty table
    yields page 0. ``limit`` of zero or less means a single page holding
    everything. The offset is never negative.

    Args:
        total: 전체 행 수 (Total row count)
        page: 요청 페이지, 1부터 시작 (Requested page, 1-indexed)
        limit: 페이지당 항목 수 (Items per page)

    Returns:
        PageWindow: 실제 페이지, 오프셋, 리밋, 전체 페이지 수
    """
    if limit <= 0:
        limit = max(total, 1)
    total_pages: int = math.ceil(total / limit)

    page = max(page, 1)
    # 마지막 페이지를 넘으면 마지막 페이지로 (Clamp to the last page)
    if page > total_pages:
        page = total_pages

    skip: int = max(0, (page - 1) * limit)
    return PageWindow(page=page, skip=skip, limit=limit, total_pages=total_pages)


def single_page(total: int, total_pages: int) -> PageWindow:
    """모든 결과를 한 페이지로 반환하는 구간 (검색/카테고리 필터용).

    Window that returns every match on page 1, used by search and
    category filtering which are not paginated.
    """
    return PageWindow(page=1, skip=0, limit=total, total_pages=total_pages)
