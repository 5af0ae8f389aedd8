"""
Request middleware for the FuelEU Ledger API.

Every request gets a correlation id (``X-Request-ID``) that is echoed on the
response and attached to each JSON log line written while it is handled.
Requests that change the ledger (banking, apply, pool creation, baseline
changes) are logged with ``ledger_write`` set so they can be filtered out of
read traffic.
"""
import json
import logging
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

REQUEST_ID_HEADER = "X-Request-ID"

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Correlation id of the request being handled, if any."""
    return _request_id.get()


class StructuredLogger:
    """
    Writes one JSON object per log line.

    Each line carries the service name and the current request id; keyword
    fields passed by the caller are merged in and ``None`` values dropped.
    """

    SERVICE = "fueleu-ledger"

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log(self, level: int, event: str, **fields):
        if not self.logger.isEnabledFor(level):
            return
        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": logging.getLevelName(level),
            "event": event,
            "service": self.SERVICE,
            "request_id": get_request_id(),
        }
        record.update(fields)
        self.logger.log(
            level,
            json.dumps({k: v for k, v in record.items() if v is not None}, default=str),
        )

    def info(self, event: str, **fields):
        self.log(logging.INFO, event, **fields)

    def warning(self, event: str, **fields):
        self.log(logging.WARNING, event, **fields)

    def error(self, event: str, **fields):
        self.log(logging.ERROR, event, **fields)


structured_logger = StructuredLogger("fueleu.requests")


def is_ledger_write(method: str, path: str) -> bool:
    """True for requests that append to the ledger or change pool/baseline state."""
    if method != "POST":
        return False
    return (
        path.startswith("/banking/")
        or path == "/pools"
        or (path.startswith("/routes/") and path.endswith("/baseline"))
    )


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Binds a request id (client-supplied or a fresh UUID4) for the request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = _request_id.set(request_id)
        try:
            response = await call_next(request)
        finally:
            _request_id.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request with status, duration and the ship queried."""

    QUIET_PATHS = frozenset({"/health", "/health/live"})

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in self.QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        fields = {
            "method": request.method,
            "path": path,
            "ship_id": request.query_params.get("shipId"),
            "ledger_write": is_ledger_write(request.method, path) or None,
        }

        try:
            response = await call_next(request)
        except Exception as e:
            structured_logger.error(
                "request_failed",
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
                **fields,
            )
            raise

        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        structured_logger.log(
            level,
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            **fields,
        )
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Turns unexpected exceptions into a 500 JSON body.

    Engine errors never get here; ``api.main`` maps them to 4xx responses.
    Outside debug mode the body hides the exception text.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            request_id = get_request_id()
            structured_logger.error(
                "unhandled_exception",
                error=str(e),
                error_type=type(e).__name__,
                method=request.method,
                path=request.url.path,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": str(e) if self.debug else "Internal server error",
                    "request_id": request_id,
                },
                headers={REQUEST_ID_HEADER: request_id} if request_id else None,
            )


def setup_middleware(app: FastAPI, debug: bool = False):
    """
    Install request middleware.

    Starlette runs the last-added middleware first, so the request id is
    bound before logging and error handling see the request.
    """
    app.add_middleware(ErrorHandlingMiddleware, debug=debug)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)
