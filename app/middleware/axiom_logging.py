"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Sends one structured event per catalog request to Axiom: method, path,
params, body summary, status code, duration and error reason.
Payment and credential fields are masked; multipart product forms are
logged by size only so image bytes never leave the server.
"""

import json
import logging
import re
import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from axiom_py import Client as AxiomClient

from app.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies (주문 결제 정보 포함)
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|card|cvv|cvc|iban|payment_method)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}
_SKIP_PREFIXES = ("/uploads/",)


def _mask_dict(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else _mask_dict(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask_dict(item, depth + 1) for item in data[:20]]
    if isinstance(data, str) and len(data) > 500:
        return data[:500] + "...(truncated)"
    return data


def _should_skip(path: str) -> bool:
    return path in _SKIP_PATHS or path.startswith(_SKIP_PREFIXES)


async def _read_body(request: Request) -> Any:
    """요청 본문 요약 — JSON은 마스킹, multipart는 크기만."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data"):
        return {"multipart": True, "content_length": request.headers.get("content-length")}

    body_bytes = await request.body()
    if not body_bytes:
        return None
    try:
        return _mask_dict(json.loads(body_bytes))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 카탈로그 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs catalog API requests and responses to Axiom.
    Passes requests straight through when Axiom is not configured.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self._client or _should_skip(request.url.path):
            return await call_next(request)

        start_time = time.time()
        method = request.method
        path = request.url.path
        query_params = dict(request.query_params) if request.query_params else None

        request_body: Any = None
        if method in ("POST", "PUT", "PATCH"):
            request_body = await _read_body(request)

        error_detail: str | None = None
        status_code: int = 500
        try:
            response = await call_next(request)
            status_code = response.status_code

            # 에러 응답시 body에서 사유 추출 — Extract error detail from error responses
            if status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

                try:
                    detail = json.loads(resp_body).get("detail")
                    error_detail = detail if isinstance(detail, str) else json.dumps(detail)[:500]
                except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
                    error_detail = resp_body.decode("utf-8", errors="replace")[:500]

                # 소비한 body를 다시 응답으로 반환 — Re-wrap consumed body
                response = Response(
                    content=resp_body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error_detail = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            log_event: dict[str, Any] = {
                "method": method,
                "path": path,
                "status_code": status_code,
                "duration_ms": round((time.time() - start_time) * 1000, 2),
            }
            if query_params:
                log_event["query_params"] = _mask_dict(query_params)
            if request.path_params:
                log_event["path_params"] = dict(request.path_params)
            if request_body is not None:
                log_event["request_body"] = request_body
            if error_detail:
                log_event["error"] = error_detail

            # 수집 실패는 경고만 남김 (Ingest failures are logged, not raised)
            try:
                self._client.ingest_events(self._dataset, [log_event])
            except Exception as exc:
                logger.warning("Axiom ingest failed: %s", exc)

        return response
