"""
Localized pathname generation.

``generate_path`` turns (content type, locale, slug) into the canonical
path below the locale root; ``localized_pathname`` adds the locale prefix
and is the form used as a locale-map key and as a switcher target.

    generate_path("article", "en", "guide")          -> "blog/guide"
    generate_path("article", "fr", "guide-complet")  -> "blogue/guide-complet"
    generate_path("page", "en", "/about-us")         -> "/about-us"
    generate_path("home_page", "fr", None)           -> "/"
    generate_path("article_index", "fr", None)       -> "blogue"

    localized_pathname("article", "en", "guide")     -> "/en/blog/guide"
    localized_pathname("home_page", "fr", None)      -> "/fr"

Both functions are pure; they are called while building the locale map
and when rendering a single internal link.
"""

from __future__ import annotations

from sitecms.i18n.content_types import SLUGLESS_TYPES, ContentType, is_content_type
from sitecms.i18n.locale_config import DEFAULT_LOCALE_CONFIG, SLUG_PLACEHOLDER, LocaleConfig


def strip_slug(slug: str | None) -> str:
    """Remove any leading separators from a stored slug."""
    return (slug or "").lstrip("/")


def localized_prefix(content_type: ContentType | str, locale: str, config: LocaleConfig | None = None) -> str:
    """Return the localized path segment(s) preceding the slug, without slashes.

    An empty string means no prefix is configured for the type in that locale.
    """
    config = config or DEFAULT_LOCALE_CONFIG
    localized = config.localized_pattern(content_type, locale)
    if not localized:
        return ""
    if localized.endswith(SLUG_PLACEHOLDER):
        localized = localized[: -len(SLUG_PLACEHOLDER)]
    return localized.strip("/")


def generate_path(
    content_type: ContentType | str,
    locale: str,
    slug: str | None = None,
    config: LocaleConfig | None = None,
) -> str:
    """Compute the canonical path of a document below its locale root."""
    config = config or DEFAULT_LOCALE_CONFIG
    content_type = ContentType(content_type)
    config.require_supported(locale)

    if content_type is ContentType.HOME_PAGE:
        return "/"

    prefix = localized_prefix(content_type, locale, config)

    # Collection index pages live at their localized prefix, slug ignored
    if content_type is ContentType.ARTICLE_INDEX:
        return prefix or "/"

    slug_content = strip_slug(slug)
    if not slug_content:
        # Would land on the collection index or the locale root
        raise ValueError(f"Documents of type '{content_type.value}' need a slug to have a path")
    if prefix:
        return f"{prefix}/{slug_content}"
    return f"/{slug_content}"


def join_locale(locale: str, path: str) -> str:
    """Prefix a locale-relative path with its locale segment."""
    relative = path.strip("/")
    if not relative:
        return f"/{locale}"
    return f"/{locale}/{relative}"


def localized_pathname(
    content_type: ContentType | str,
    locale: str,
    slug: str | None = None,
    config: LocaleConfig | None = None,
) -> str:
    """Return the full path, locale prefix included, for a document."""
    return join_locale(locale, generate_path(content_type, locale, slug, config))


def locale_root(locale: str, config: LocaleConfig | None = None) -> str:
    config = config or DEFAULT_LOCALE_CONFIG
    config.require_supported(locale)
    return f"/{locale}"


def normalize_path(path: str) -> str:
    """Normalize an incoming request path for locale-map lookups.

    Drops query string and fragment, collapses duplicate slashes and removes
    the trailing slash, so "/en/blog/guide/?x=1" and "/en/blog/guide" match.
    """
    path = path.split("#", 1)[0].split("?", 1)[0]
    segments = [segment for segment in path.split("/") if segment]
    return "/" + "/".join(segments)


def routable_pathname(
    content_type: ContentType | str | None,
    locale: str | None,
    slug: str | None,
    config: LocaleConfig | None = None,
) -> str | None:
    """Return the localized path of a document, or None when it has no page.

    A type without a pathname pattern (settings, authors) has no page. Neither
    does a slug-carrying type stored without a slug, nor any unsupported locale.
    """
    config = config or DEFAULT_LOCALE_CONFIG
    if not is_content_type(content_type) or not config.is_supported(locale):
        return None
    content_type = ContentType(content_type)
    if config.pattern_for(content_type) is None:
        return None
    if content_type not in SLUGLESS_TYPES and not strip_slug(slug):
        return None
    return localized_pathname(content_type, locale, slug, config)


def internal_link_href(
    slug: str | None,
    content_type: str | None,
    locale: str,
    config: LocaleConfig | None = None,
) -> str:
    """Build an href for an internal reference, or "#" when it cannot be resolved."""
    return routable_pathname(content_type, locale, slug, config) or "#"
