"""
Locale configuration passed explicitly through the translation core.

Every pathname, locale-map, switcher and consistency function takes a
``LocaleConfig`` argument instead of reading the settings singleton, so
the same process can evaluate several locale setups side by side.

The pathname table maps a route pattern to its localized form per locale.
``[slug]`` marks where the document slug goes; a pattern without it is a
slug-less route (homepage, collection index).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from sitecms.exceptions import ConfigurationError, UnsupportedLocaleError
from sitecms.i18n.content_types import ContentType

if TYPE_CHECKING:
    from sitecms.config import Settings

SLUG_PLACEHOLDER = "[slug]"

DEFAULT_PATHNAMES: dict[str, dict[str, str]] = {
    "/": {"fr": "/", "en": "/"},
    "/[slug]": {"fr": "/[slug]", "en": "/[slug]"},
    "/blog": {"fr": "/blogue", "en": "/blog"},
    "/blog/[slug]": {"fr": "/blogue/[slug]", "en": "/blog/[slug]"},
}

DEFAULT_TYPE_PATTERNS: dict[ContentType, str] = {
    ContentType.HOME_PAGE: "/",
    ContentType.PAGE: "/[slug]",
    ContentType.ARTICLE_INDEX: "/blog",
    ContentType.ARTICLE: "/blog/[slug]",
}


def _freeze(table: Mapping[str, Mapping[str, str]]) -> Mapping[str, Mapping[str, str]]:
    return MappingProxyType({pattern: MappingProxyType(dict(values)) for pattern, values in table.items()})


@dataclass(frozen=True)
class LocaleConfig:
    """Supported locales, the default locale and the localized pathname table."""

    locales: tuple[str, ...] = ("fr", "en")
    default_locale: str = "fr"
    pathnames: Mapping[str, Mapping[str, str]] = field(default_factory=lambda: DEFAULT_PATHNAMES)
    type_patterns: Mapping[ContentType, str] = field(default_factory=lambda: DEFAULT_TYPE_PATTERNS)

    def __post_init__(self) -> None:
        locales = tuple(self.locales)
        if not locales:
            raise ConfigurationError("At least one locale must be configured")
        if len(set(locales)) != len(locales):
            raise ConfigurationError("Duplicate locale codes in configuration", details={"locales": list(locales)})
        if self.default_locale not in locales:
            raise ConfigurationError(
                f"Default locale '{self.default_locale}' is not a supported locale",
                details={"locales": list(locales), "default_locale": self.default_locale},
            )
        for content_type, pattern in self.type_patterns.items():
            if pattern not in self.pathnames:
                raise ConfigurationError(
                    f"Content type '{ContentType(content_type).value}' uses unknown pathname pattern '{pattern}'",
                )
        object.__setattr__(self, "locales", locales)
        object.__setattr__(self, "pathnames", _freeze(self.pathnames))
        object.__setattr__(
            self,
            "type_patterns",
            MappingProxyType({ContentType(k): v for k, v in self.type_patterns.items()}),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> LocaleConfig:
        return cls(locales=tuple(settings.supported_locales), default_locale=settings.default_locale)

    def is_supported(self, locale: str | None) -> bool:
        return locale is not None and locale in self.locales

    def require_supported(self, locale: str) -> str:
        if not self.is_supported(locale):
            raise UnsupportedLocaleError(locale, self.locales)
        return locale

    def pattern_for(self, content_type: ContentType | str) -> str | None:
        """Return the route pattern for a content type, or None when it has no public route."""
        return self.type_patterns.get(ContentType(content_type))

    def localized_pattern(self, content_type: ContentType | str, locale: str) -> str | None:
        pattern = self.pattern_for(content_type)
        if pattern is None:
            return None
        return self.pathnames[pattern].get(locale)


DEFAULT_LOCALE_CONFIG = LocaleConfig()
