"""Request correlation, request logging, and the JSON error envelope.

Every error leaves the API as ``{"error": ..., "details"?: [...], "request_id"?: ...}``:

- request validation failures (including undecodable opaque ids) become 400
  with a ``details`` list of ``{field, message}`` entries;
- ``HTTPException`` keeps its status code and uses ``detail`` as ``error``;
- anything unhandled (store failures included) becomes a redacted 500.
"""

from __future__ import annotations

from collections.abc import Sequence
from time import perf_counter
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from fastapi import status
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers, MutableHeaders
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.core.config import settings
from taskboard.core.logging import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.requests import Request
    from starlette.types import ASGIApp, Message, Receive, Scope, Send

REQUEST_ID_HEADER = "X-Request-Id"
VALIDATION_FAILED = "Validation failed"
INTERNAL_SERVER_ERROR = "Internal server error"
_HEALTH_PATHS = frozenset({"/health", "/healthz", "/readyz"})
_REQUEST_ID_MAX_LENGTH = 128

logger = get_logger(__name__)


def _normalize_request_id(raw: str | None) -> str | None:
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    return value[:_REQUEST_ID_MAX_LENGTH]


def _get_request_id(request: Request) -> str | None:
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    return None


def _json_safe(value: object) -> object:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_json_safe(item) for item in value]
    return str(value)


def _field_path(loc: Sequence[object]) -> str:
    return ".".join(str(part) for part in loc)


def _validation_details(errors: Sequence[Any]) -> list[dict[str, str]]:
    details: list[dict[str, str]] = []
    for error in errors:
        if not isinstance(error, dict):
            details.append({"field": "", "message": str(error)})
            continue
        loc = error.get("loc") or ()
        details.append(
            {
                "field": _field_path(loc if isinstance(loc, (list, tuple)) else (loc,)),
                "message": str(error.get("msg", "")),
            },
        )
    return details


def _error_payload(
    *,
    error: object,
    request_id: str | None,
    details: list[dict[str, str]] | None = None,
) -> dict[str, object]:
    payload: dict[str, object] = {"error": _json_safe(error)}
    if details is not None:
        payload["details"] = details
    if request_id is not None:
        payload["request_id"] = request_id
    return payload


def _error_response(
    request: Request,
    *,
    status_code: int,
    error: object,
    details: list[dict[str, str]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    request_id = _get_request_id(request)
    response_headers = dict(headers or {})
    if request_id is not None:
        response_headers[REQUEST_ID_HEADER] = request_id
    return JSONResponse(
        status_code=status_code,
        content=_error_payload(error=error, request_id=request_id, details=details),
        headers=response_headers,
    )


async def _request_validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, RequestValidationError):
        msg = "Expected RequestValidationError"
        raise TypeError(msg)
    details = _validation_details(exc.errors())
    logger.info(
        "http.request.invalid method=%s path=%s fields=%s",
        request.method,
        request.url.path,
        ",".join(item["field"] for item in details),
    )
    return _error_response(
        request,
        status_code=status.HTTP_400_BAD_REQUEST,
        error=VALIDATION_FAILED,
        details=details,
    )


async def _response_validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, ResponseValidationError):
        msg = "Expected ResponseValidationError"
        raise TypeError(msg)
    logger.error(
        "http.response.invalid method=%s path=%s errors=%s",
        request.method,
        request.url.path,
        _json_safe(exc.errors()),
    )
    return _error_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error=INTERNAL_SERVER_ERROR,
    )


async def _http_exception_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, StarletteHTTPException):
        msg = "Expected StarletteHTTPException"
        raise TypeError(msg)
    return _error_response(
        request,
        status_code=exc.status_code,
        error=exc.detail,
        headers=dict(exc.headers or {}),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "http.request.unhandled method=%s path=%s error=%s",
        request.method,
        request.url.path,
        type(exc).__name__,
    )
    return _error_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error=INTERNAL_SERVER_ERROR,
    )


class RequestContextMiddleware:
    """Assign a request id, echo it back as a header, and log each request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _normalize_request_id(Headers(scope=scope).get(REQUEST_ID_HEADER))
        if request_id is None:
            request_id = uuid4().hex
        scope.setdefault("state", {})["request_id"] = request_id

        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        started = perf_counter()

        async def send_with_request_id(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = int(message["status"])
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            elapsed_ms = (perf_counter() - started) * 1000
            _log_request(
                method=str(scope.get("method", "")),
                path=str(scope.get("path", "")),
                status_code=status_code,
                elapsed_ms=elapsed_ms,
                request_id=request_id,
            )


def _log_request(
    *,
    method: str,
    path: str,
    status_code: int,
    elapsed_ms: float,
    request_id: str,
) -> None:
    if path in _HEALTH_PATHS and not settings.request_log_include_health:
        return
    extra = {
        "method": method,
        "path": path,
        "status_code": status_code,
        "duration_ms": round(elapsed_ms, 2),
        "request_id": request_id,
    }
    slow_threshold_ms = settings.request_log_slow_ms
    if slow_threshold_ms and elapsed_ms >= slow_threshold_ms:
        logger.warning(
            "http.request.slow",
            extra={**extra, "slow_threshold_ms": slow_threshold_ms},
        )
        return
    logger.info("http.request.complete", extra=extra)


def install_error_handling(app: FastAPI) -> None:
    """Register request-id middleware and JSON error handlers on the app."""
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(
        RequestValidationError,
        _request_validation_exception_handler,
    )
    app.add_exception_handler(
        ResponseValidationError,
        _response_validation_exception_handler,
    )
    app.add_exception_handler(
        StarletteHTTPException,
        _http_exception_exception_handler,
    )
    app.add_exception_handler(Exception, _unhandled_exception_handler)
