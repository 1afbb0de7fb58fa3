"""
Language Detection Middleware

Sets request.state.locale from:
  1. the first path segment when it is a supported locale ("/en/blog/guide")
  2. X-Language request header (exact match against supported list)
  3. Accept-Language header (quality-weighted, best-match)
  4. the configured default locale (fallback)

No DB lookups. The ``LocaleConfig`` is read from ``app.state.locale_config``.
Detection only; requests are never redirected to a locale-prefixed path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from sitecms.i18n.locale import parse_accept_language
from sitecms.i18n.locale_config import DEFAULT_LOCALE_CONFIG, LocaleConfig
from sitecms.middleware.logging import request_locale_var

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import Request
    from starlette.responses import Response


def detect_locale(path: str, headers, config: LocaleConfig) -> str:
    first_segment = path.strip("/").split("/", 1)[0]
    if config.is_supported(first_segment):
        return first_segment

    locale = headers.get("X-Language", "").strip()
    if config.is_supported(locale):
        return locale

    return parse_accept_language(headers.get("Accept-Language", ""), config.locales) or config.default_locale


class LanguageMiddleware(BaseHTTPMiddleware):
    """Detect the request locale and attach it to request.state.locale."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        config = getattr(request.app.state, "locale_config", None) or DEFAULT_LOCALE_CONFIG
        request.state.locale = detect_locale(request.url.path, request.headers, config)
        request_locale_var.set(request.state.locale)
        response = await call_next(request)
        response.headers.setdefault("Content-Language", request.state.locale)
        return response
