"""커스텀 예외 클래스 모듈.

Custom exception classes module.
Provides pre-configured HTTPException subclasses for the domain rules the
catalog checks explicitly (existence, uniqueness), plus the order
validation error which is kept outside the HTTP taxonomy.

Usage:
    from app.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Product with slug foo does not exist")
    raise DuplicateError("Product with title Foo already exists")
"""

from typing import Any

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested product (by slug) or order (by id) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    409 Conflict exception.
    Raised when a product title is already taken on create or rename.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class OrderValidationError(Exception):
    """주문 스키마 검증 실패 — HTTP 예외가 아닌 도메인 예외.

    Raised when an order payload fails schema validation.
    Not an HTTPException: main.py renders it as a 422 response.

    Args:
        errors: Pydantic 오류 목록 (List of Pydantic error dicts)
    """

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__("Order validation failed")
        self.errors: list[dict[str, Any]] = errors
