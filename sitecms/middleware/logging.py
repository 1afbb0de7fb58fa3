"""
Request logging

One access-log line per request plus request-scoped context on every log
record: the request id (taken from ``X-Request-ID`` or generated) and the
locale ``LanguageMiddleware`` detected. With ``json_format`` the root
handler emits one JSON object per line.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
request_locale_var: ContextVar[str] = ContextVar("request_locale", default="")

# Extra attributes copied into JSON log lines when a record carries them
EXTRA_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "client_ip",
    "error_code",
    "document_id",
)
QUIET_PATHS = frozenset({"/health"})


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = getattr(record, "request_id", "") or request_id_var.get()
        record.locale = getattr(record, "locale", "") or request_locale_var.get()
        return True


class StructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("request_id", "locale"):
            value = getattr(record, key, "")
            if value:
                entry[key] = value
        entry.update({key: getattr(record, key) for key in EXTRA_FIELDS if hasattr(record, key)})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def client_address(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("X-Real-IP") or (request.client.host if request.client else "unknown")


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """Access log keyed by request id; the id is echoed in the ``X-Request-ID`` response header."""

    def __init__(self, app: ASGIApp, logger_name: str = "sitecms.access"):
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request_id_var.set(request_id)
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            self._access(request, 500, started, error=repr(e))
            raise

        response.headers["X-Request-ID"] = request_id
        self._access(request, response.status_code, started)
        return response

    def _access(self, request: Request, status_code: int, started: float, error: str | None = None) -> None:
        if request.url.path in QUIET_PATHS:
            return
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        message = "%s %s -> %d in %.2fms"
        args = [request.method, request.url.path, status_code, duration_ms]
        if error:
            message += " (%s)"
            args.append(error)
        self.logger.log(
            level_for_status(status_code),
            message,
            *args,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": duration_ms,
                "client_ip": client_address(request),
                "locale": getattr(request.state, "locale", ""),
            },
        )


def setup_structured_logging(log_level: str = "INFO", json_format: bool = True) -> None:
    """Install a single root handler carrying the request context filter."""
    level = getattr(logging, log_level.upper())
    handler = logging.StreamHandler()
    handler.addFilter(RequestContextFilter())
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s [%(request_id)s %(locale)s] %(message)s")
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
