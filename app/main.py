"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어 및 라우터 등록.

FastAPI application entry point — Middleware and router registration.
Configures request logging, CORS, health check, error handlers, local
image serving, and includes the catalog routers.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.services.storage_service import storage_service
from app.utils.exceptions import OrderValidationError

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — Axiom API request/response logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OrderValidationError)
async def order_validation_error_handler(request: Request, exc: OrderValidationError) -> JSONResponse:
    """주문 스키마 검증 실패를 422 응답으로 변환합니다.

    Render order schema violations as 422 with the Pydantic error list.
    """
    return JSONResponse(status_code=422, content={"detail": exc.errors})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# 로컬 이미지 저장 모드에서는 업로드 파일을 직접 서빙
# Serve stored images directly when running without S3
if storage_service.is_local:
    app.mount(
        "/uploads",
        StaticFiles(directory=storage_service.uploads_dir, check_dir=False),
        name="uploads",
    )

# ---------------------------------------------------------------------------
# 라우터 등록 — Router registration
# ---------------------------------------------------------------------------
from app.api.catalog import catalog_router  # noqa: E402

app.include_router(catalog_router, prefix="/api/v1")
