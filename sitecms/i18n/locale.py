"""
Locale helpers

Pure functions for locale codes:
- display metadata (English and native names, text direction)
- Accept-Language header matching with quality values
- validation with fallback to the configured default locale
"""

from __future__ import annotations

import logging

from sitecms.i18n.locale_config import DEFAULT_LOCALE_CONFIG, LocaleConfig

logger = logging.getLogger(__name__)

# ── Constants ─────────────────────────────────────────────────────────────────

# Base language codes whose scripts read right-to-left
RTL_LOCALES: frozenset[str] = frozenset({"ar", "he", "fa", "ur", "yi", "ku"})

LOCALE_METADATA: dict[str, dict[str, str]] = {
    "fr": {"name": "French", "native_name": "Français"},
    "en": {"name": "English", "native_name": "English"},
    "de": {"name": "German", "native_name": "Deutsch"},
    "es": {"name": "Spanish", "native_name": "Español"},
    "it": {"name": "Italian", "native_name": "Italiano"},
    "pt": {"name": "Portuguese", "native_name": "Português"},
    "nl": {"name": "Dutch", "native_name": "Nederlands"},
    "ar": {"name": "Arabic", "native_name": "العربية"},
    "ja": {"name": "Japanese", "native_name": "日本語"},
    "zh": {"name": "Chinese", "native_name": "中文"},
}


# ── Public helpers ────────────────────────────────────────────────────────────


def is_rtl_locale(locale: str) -> bool:
    """Return True when the base language of ``locale`` is written right-to-left."""
    return locale.split("-")[0].lower() in RTL_LOCALES


def get_locale_name(locale: str, native: bool = True) -> str:
    """Display name for a locale; unknown codes are returned unchanged."""
    meta = LOCALE_METADATA.get(locale) or LOCALE_METADATA.get(locale.split("-")[0])
    if meta is None:
        return locale
    return meta["native_name"] if native else meta["name"]


def get_language_info(locale: str) -> dict[str, str | bool]:
    """Metadata dict for a locale: ``code``, ``name``, ``native_name``, ``direction``, ``is_rtl``."""
    rtl = is_rtl_locale(locale)
    return {
        "code": locale,
        "name": get_locale_name(locale, native=False),
        "native_name": get_locale_name(locale),
        "direction": "rtl" if rtl else "ltr",
        "is_rtl": rtl,
    }


def parse_accept_language(header: str, supported: list[str] | tuple[str, ...]) -> str | None:
    """Return the best supported locale for an Accept-Language header.

    Tags are tried in descending q-value order (ties keep header order);
    each tag matches exactly first, then by its base language.
    """
    if not header:
        return None

    weighted: list[tuple[float, int, str]] = []
    for position, part in enumerate(header.split(",")):
        tag, _, params = part.strip().partition(";")
        if not tag:
            continue
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 1.0
        if quality <= 0:
            continue
        weighted.append((-quality, position, tag.strip().lower()))

    by_lower = {code.lower(): code for code in supported}
    for _, _, tag in sorted(weighted):
        if tag in by_lower:
            return by_lower[tag]
        base = tag.split("-")[0]
        if base in by_lower:
            return by_lower[base]

    return None


def get_valid_locale(locale: str | None, config: LocaleConfig | None = None) -> str:
    """Return ``locale`` when supported, otherwise the default locale (logged)."""
    config = config or DEFAULT_LOCALE_CONFIG
    if config.is_supported(locale):
        return locale

    if locale:
        logger.warning(
            "Invalid locale %r, falling back to default %r (valid: %s)",
            locale,
            config.default_locale,
            ", ".join(config.locales),
        )
    return config.default_locale
