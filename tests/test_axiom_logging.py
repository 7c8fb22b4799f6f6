"""Axiom 로깅 미들웨어 테스트.

Axiom logging middleware tests — Events are built from requests, payment
fields are masked, and pass-through mode sends nothing.
"""

from typing import Any

import pytest
from fastapi import FastAPI, HTTPException
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.middleware import axiom_logging
from app.middleware.axiom_logging import AxiomLoggingMiddleware, _mask_dict


class FakeAxiomClient:
    """ingest 호출을 기록하는 가짜 Axiom 클라이언트."""

    instances: list["FakeAxiomClient"] = []

    def __init__(self, token: str) -> None:
        self.token = token
        self.events: list[dict[str, Any]] = []
        FakeAxiomClient.instances.append(self)

    def ingest_events(self, dataset: str, events: list[dict[str, Any]]) -> None:
        self.events.extend(events)


def _build_app() -> FastAPI:
    test_app = FastAPI()
    test_app.add_middleware(AxiomLoggingMiddleware)

    @test_app.post("/orders")
    async def create(body: dict) -> dict:
        return {"ok": True}

    @test_app.get("/products/{slug}")
    async def get(slug: str) -> dict:
        raise HTTPException(status_code=404, detail=f"Product with slug {slug} does not exist")

    @test_app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return test_app


@pytest.fixture
def axiom(monkeypatch) -> type[FakeAxiomClient]:
    FakeAxiomClient.instances = []
    monkeypatch.setattr(axiom_logging, "AxiomClient", FakeAxiomClient)
    monkeypatch.setattr(settings, "AXIOM_API_TOKEN", "token")
    monkeypatch.setattr(settings, "AXIOM_DATASET", "catalog")
    return FakeAxiomClient


def test_mask_dict():
    masked = _mask_dict({"buyer": "b", "payment": {"card_number": "4111", "amount": 3}})
    assert masked == {"buyer": "b", "payment": {"card_number": "***", "amount": 3}}


async def _call(test_app: FastAPI, method: str, path: str, **kwargs):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.request(method, path, **kwargs)


async def test_logs_masked_request_body(axiom):
    test_app = _build_app()
    res = await _call(test_app, "POST", "/orders", json={"buyer": "b", "payment": {"cvv": "123"}})
    assert res.status_code == 200

    event = axiom.instances[0].events[0]
    assert event["method"] == "POST"
    assert event["path"] == "/orders"
    assert event["status_code"] == 200
    assert event["request_body"] == {"buyer": "b", "payment": {"cvv": "***"}}


async def test_logs_error_detail(axiom):
    test_app = _build_app()
    res = await _call(test_app, "GET", "/products/ghost")
    assert res.status_code == 404
    assert res.json()["detail"] == "Product with slug ghost does not exist"

    event = axiom.instances[0].events[0]
    assert event["status_code"] == 404
    assert event["error"] == "Product with slug ghost does not exist"


async def test_skips_health(axiom):
    test_app = _build_app()
    await _call(test_app, "GET", "/health")
    assert all(not client.events for client in axiom.instances)


async def test_pass_through_without_token(monkeypatch):
    monkeypatch.setattr(settings, "AXIOM_API_TOKEN", "")
    test_app = _build_app()
    res = await _call(test_app, "GET", "/health")
    assert res.status_code == 200
