"""테스트 인프라 — 임시 DB, 세션, httpx 클라이언트, 가짜 이미지 저장소 픽스처.

Test infrastructure — Temporary database, session, httpx client, and a
fake image store.
Each test gets a fresh SQLite file (aiosqlite) unless TEST_DATABASE_URL
points at another database, in which case the schema is dropped after
every test.
"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.services.storage_service import storage_service


# ---------------------------------------------------------------------------
# 가짜 이미지 저장소 — 호출 기록 (Fake image store recording calls)
# ---------------------------------------------------------------------------
class FakeImageStore:
    """업로드/삭제 호출을 기록하는 가짜 저장소."""

    BASE = "https://images.test/"

    def __init__(self) -> None:
        self.uploads: list[tuple[str, str]] = []
        self.deletes: list[str] = []
        self.staged: list[str] = []

    async def upload(self, source: str, folder: str) -> str:
        self.uploads.append((source, folder))
        return f"{self.BASE}{folder}/img{len(self.uploads)}.png"

    async def delete(self, public_id: str) -> None:
        self.deletes.append(public_id)

    def save_temp(self, filename: str, data: bytes) -> str:
        self.staged.append(filename)
        return f"/tmp/staged/{filename}"


@pytest.fixture(autouse=True)
def image_store(monkeypatch) -> FakeImageStore:
    """모든 테스트에서 싱글턴 저장소를 가짜로 교체합니다."""
    fake = FakeImageStore()
    monkeypatch.setattr(storage_service, "upload", fake.upload)
    monkeypatch.setattr(storage_service, "delete", fake.delete)
    monkeypatch.setattr(storage_service, "save_temp", fake.save_temp)
    return fake


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 생성합니다."""
    url = os.environ.get("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"
    eng = create_async_engine(url, echo=False)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def category(db: AsyncSession):
    """테스트 카테고리를 생성합니다."""
    from app.models.category import Category
    c = Category(title="Clothing", slug="clothing")
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


@pytest_asyncio.fixture
async def other_category(db: AsyncSession):
    """두 번째 테스트 카테고리를 생성합니다."""
    from app.models.category import Category
    c = Category(title="Books", slug="books")
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


@pytest.fixture
def make_product(db: AsyncSession):
    """상품 행을 직접 생성하는 팩토리 (서비스 규칙을 거치지 않음)."""
    from app.models.product import Product
    from app.utils.slug import slugify

    async def _make(
        title: str,
        price: float = 10,
        description: str = "A product",
        category_id=None,
        image: str | None = None,
        quantity: int = 10,
        count_in_stock: int = 10,
        sold: int = 0,
    ) -> Product:
        p = Product(
            title=title,
            slug=slugify(title),
            description=description,
            price=price,
            category_id=category_id,
            image=image,
            quantity=quantity,
            count_in_stock=count_in_stock,
            sold=sold,
        )
        db.add(p)
        await db.flush()
        await db.refresh(p)
        return p

    return _make
