"""초기 데이터 시드 스크립트 — 기본 상품 카테고리 생성.

Seed script — Creates the default product categories.
Run this script once to bootstrap the database so products can be
attached to a category.

Usage:
    python -m app.seed
"""

import asyncio

from app.database import async_session, engine, Base
from app.repositories.category_repository import category_repository
from app.utils.slug import slugify

DEFAULT_CATEGORIES: list[str] = ["Electronics", "Clothing", "Books", "Home & Kitchen"]


async def seed() -> None:
    """데이터베이스를 초기 카테고리로 시드합니다.

    Create tables if they don't exist, then insert the default categories.

    Idempotent: 이미 존재하는 카테고리는 건너뜁니다 (Skips existing titles).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        created: int = 0
        for title in DEFAULT_CATEGORIES:
            if await category_repository.exists(db, {"title": title}):
                continue
            await category_repository.create(db, {"title": title, "slug": slugify(title)})
            created += 1

        await db.commit()
        print(f"Seeded {created} categories.")


if __name__ == "__main__":
    asyncio.run(seed())
