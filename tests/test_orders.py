"""주문 CRUD 테스트 — 검증, 생성, 조회, 수정, 삭제.

Order CRUD tests — Validation, create, read, full-replace update, delete.
"""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.order_repository import order_repository
from app.services.order_service import order_service, validate_order
from app.utils.exceptions import NotFoundError, OrderValidationError

URL = "/api/v1/orders"


def _payload(**overrides) -> dict:
    data = {
        "buyer": "buyer-1",
        "products": [{"product": str(uuid.uuid4()), "quantity": 2}],
        "payment": {"method": "cash", "amount": 40},
    }
    data.update(overrides)
    return data


class TestValidateOrder:
    """주문 검증 함수 테스트."""

    def test_valid(self):
        result = validate_order(_payload())
        assert result.ok
        assert result.order.status == "Not Processed"
        assert result.errors == []

    def test_missing_buyer(self):
        payload = _payload()
        del payload["buyer"]
        result = validate_order(payload)
        assert not result.ok
        assert result.order is None
        assert result.errors[0]["loc"] == ("buyer",)

    def test_empty_products(self):
        assert not validate_order(_payload(products=[])).ok

    def test_bad_quantity(self):
        result = validate_order(_payload(products=[{"product": "p1", "quantity": 0}]))
        assert not result.ok

    def test_unknown_status(self):
        assert not validate_order(_payload(status="Lost")).ok


class TestOrderService:
    """주문 서비스 테스트."""

    async def test_create_and_get(self, db: AsyncSession):
        created = await order_service.create_order(db, _payload())
        fetched = await order_service.get_order(db, uuid.UUID(created.id))
        assert fetched.buyer == "buyer-1"
        assert fetched.products[0].quantity == 2
        assert fetched.payment == {"method": "cash", "amount": 40}

    async def test_create_invalid(self, db: AsyncSession):
        with pytest.raises(OrderValidationError) as exc_info:
            await order_service.create_order(db, {"buyer": "x"})
        assert exc_info.value.errors
        assert await order_service.list_orders(db) == []

    async def test_list_orders(self, db: AsyncSession):
        await order_service.create_order(db, _payload(buyer="a"))
        await order_service.create_order(db, _payload(buyer="b"))
        orders = await order_service.list_orders(db)
        assert {o.buyer for o in orders} == {"a", "b"}

    async def test_get_missing(self, db: AsyncSession):
        with pytest.raises(NotFoundError) as exc_info:
            await order_service.get_order(db, uuid.uuid4())
        assert exc_info.value.status_code == 404

    async def test_update_replaces_order(self, db: AsyncSession):
        created = await order_service.create_order(db, _payload())
        updated = await order_service.update_order(
            db, uuid.UUID(created.id), _payload(buyer="buyer-2", status="Shipped", payment=None)
        )
        assert updated.buyer == "buyer-2"
        assert updated.status == "Shipped"
        assert updated.payment is None

    async def test_update_invalid_writes_nothing(self, db: AsyncSession, monkeypatch):
        """필수 필드 누락 시 DB 쓰기 전에 검증 오류."""
        created = await order_service.create_order(db, _payload())

        async def _fail(*args, **kwargs):
            raise AssertionError("update must not be called")

        monkeypatch.setattr(order_repository, "update", _fail)
        with pytest.raises(OrderValidationError):
            await order_service.update_order(db, uuid.UUID(created.id), {"buyer": "only-buyer"})

    async def test_update_missing(self, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await order_service.update_order(db, uuid.uuid4(), _payload())

    async def test_delete(self, db: AsyncSession):
        created = await order_service.create_order(db, _payload())
        await order_service.delete_order(db, uuid.UUID(created.id))
        with pytest.raises(NotFoundError):
            await order_service.get_order(db, uuid.UUID(created.id))

    async def test_delete_missing(self, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await order_service.delete_order(db, uuid.uuid4())


class TestOrderApi:
    """주문 API 테스트."""

    async def test_create(self, client: AsyncClient):
        res = await client.post(URL, json=_payload())
        assert res.status_code == 201
        data = res.json()
        assert data["buyer"] == "buyer-1"
        assert data["status"] == "Not Processed"

    async def test_create_invalid_is_422(self, client: AsyncClient):
        res = await client.post(URL, json={"products": []})
        assert res.status_code == 422
        locs = [tuple(e["loc"]) for e in res.json()["detail"]]
        assert ("buyer",) in locs

    async def test_list(self, client: AsyncClient):
        await client.post(URL, json=_payload())
        res = await client.get(URL)
        assert res.status_code == 200
        assert len(res.json()) == 1

    async def test_get_missing(self, client: AsyncClient):
        res = await client.get(f"{URL}/{uuid.uuid4()}")
        assert res.status_code == 404

    async def test_update(self, client: AsyncClient):
        order_id = (await client.post(URL, json=_payload())).json()["id"]
        res = await client.put(f"{URL}/{order_id}", json=_payload(status="Delivered"))
        assert res.status_code == 200
        assert res.json()["status"] == "Delivered"

    async def test_update_invalid(self, client: AsyncClient):
        order_id = (await client.post(URL, json=_payload())).json()["id"]
        res = await client.put(f"{URL}/{order_id}", json={"status": "Shipped"})
        assert res.status_code == 422

    async def test_delete(self, client: AsyncClient):
        order_id = (await client.post(URL, json=_payload())).json()["id"]
        res = await client.delete(f"{URL}/{order_id}")
        assert res.status_code == 204

        res2 = await client.get(f"{URL}/{order_id}")
        assert res2.status_code == 404
