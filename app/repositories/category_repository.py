"""카테고리 레포지토리.

Category Repository — Categories are owned by another service; the
catalog only needs to create them for seeding and look them up.
"""

from app.models.category import Category
from app.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """카테고리 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Category)


# 싱글턴 인스턴스 — Singleton instance
category_repository: CategoryRepository = CategoryRepository()
