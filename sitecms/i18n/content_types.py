"""
Content types: the closed set of document kinds the site stores.

Localized types carry a locale code and take part in translation groups.
Singleton types exist at most once per locale (or once globally when they
are not localized).
"""

from __future__ import annotations

import enum


class ContentType(str, enum.Enum):
    """Document type tag stored on every content document."""

    PAGE = "page"
    ARTICLE = "article"
    ARTICLE_INDEX = "article_index"
    HOME_PAGE = "home_page"
    SETTINGS = "settings"
    AUTHOR = "author"


LOCALIZED_TYPES: frozenset[ContentType] = frozenset(
    {ContentType.PAGE, ContentType.ARTICLE, ContentType.ARTICLE_INDEX, ContentType.HOME_PAGE}
)

SINGLETON_TYPES: frozenset[ContentType] = frozenset(
    {ContentType.HOME_PAGE, ContentType.ARTICLE_INDEX, ContentType.SETTINGS}
)

# Types stored without a slug; their path comes from the pattern alone
SLUGLESS_TYPES: frozenset[ContentType] = frozenset(
    {ContentType.HOME_PAGE, ContentType.ARTICLE_INDEX, ContentType.SETTINGS}
)

# Types listed in manually ordered collections
ORDERABLE_TYPES: frozenset[ContentType] = frozenset({ContentType.ARTICLE})


def is_localized(content_type: ContentType | str) -> bool:
    return ContentType(content_type) in LOCALIZED_TYPES


def is_singleton(content_type: ContentType | str) -> bool:
    return ContentType(content_type) in SINGLETON_TYPES


def is_content_type(value: str | None) -> bool:
    """Return True when ``value`` names one of the known content types."""
    if not value:
        return False
    try:
        ContentType(value)
    except ValueError:
        return False
    return True
