"""
Bidirectional locale map.

Built once per render from the default-locale snapshot: every localized
document arrives with the list of its translation siblings. For each such
group a single ``LocaleTranslations`` dict (locale -> TranslationItem) is
created and stored under the full localized path of *every* sibling, so a
lookup from whichever locale the visitor is reading returns the whole group:

    {
        "/en/blog/guide":           {"en": <guide>, "fr": <guide-complet>},
        "/fr/blogue/guide-complet": {"en": <guide>, "fr": <guide-complet>},  # same dict
    }

The map is never patched; callers rebuild it from a fresh snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from sitecms.i18n.content_types import ContentType
from sitecms.i18n.locale_config import DEFAULT_LOCALE_CONFIG, LocaleConfig
from sitecms.i18n.pathnames import normalize_path, routable_pathname

logger = logging.getLogger(__name__)

OrderValue = Union[int, float, str, None]


@dataclass(frozen=True)
class TranslationItem:
    """One locale's version of a logical document, as needed for navigation."""

    document_id: str
    content_type: ContentType
    locale: str
    slug: str | None
    title: str = ""
    order_rank: OrderValue = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "title": self.title,
            "document_id": self.document_id,
            "content_type": self.content_type.value,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TranslationItem:
        """Build an item from a query result row.

        Accepts both the plain keys (``id``, ``type``, ``locale``) and the
        document-store style keys (``_id``, ``_type``, ``language``).
        """
        return cls(
            document_id=str(_first(data, "document_id", "id", "_id")),
            content_type=ContentType(_first(data, "content_type", "type", "_type")),
            locale=_first(data, "locale", "language"),
            slug=data.get("slug"),
            title=data.get("title") or "",
            order_rank=_first(data, "order_rank", "orderRank", default=None),
        )


@dataclass(frozen=True)
class LocalizedRecord:
    """A default-locale document together with its resolved translation siblings."""

    document_id: str
    content_type: ContentType
    locale: str
    slug: str | None
    title: str = ""
    order_rank: OrderValue = None
    translations: tuple[TranslationItem, ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LocalizedRecord:
        own = TranslationItem.from_mapping(data)
        raw_translations = _first(data, "translations", "_translations", default=None) or ()
        return cls(
            document_id=own.document_id,
            content_type=own.content_type,
            locale=own.locale,
            slug=own.slug,
            title=own.title,
            order_rank=own.order_rank,
            translations=tuple(
                item if isinstance(item, TranslationItem) else TranslationItem.from_mapping(item)
                for item in raw_translations
            ),
        )


def _first(data: Mapping[str, Any], *keys: str, **kwargs: Any) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    if "default" in kwargs:
        return kwargs["default"]
    raise KeyError(f"None of {keys} present in record")


LocaleTranslations = dict[str, TranslationItem]


class LocaleMap:
    """Read-only mapping from a full localized path to its sibling translations."""

    def __init__(self, entries: dict[str, LocaleTranslations] | None = None):
        self._entries: dict[str, LocaleTranslations] = entries or {}

    def get(self, path: str) -> LocaleTranslations | None:
        return self._entries.get(normalize_path(path))

    def __getitem__(self, path: str) -> LocaleTranslations:
        return self._entries[normalize_path(path)]

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def paths(self) -> list[str]:
        return list(self._entries)

    def to_dict(self) -> dict[str, dict[str, dict[str, Any]]]:
        """Serializable form handed to the rendering layer."""
        return {
            path: {locale: item.as_dict() for locale, item in translations.items()}
            for path, translations in self._entries.items()
        }


def build_translations(
    items: Iterable[TranslationItem],
    config: LocaleConfig | None = None,
) -> LocaleTranslations:
    """Index sibling items by locale, ignoring locales the site does not serve."""
    config = config or DEFAULT_LOCALE_CONFIG
    translations: LocaleTranslations = {}
    for item in items:
        if not config.is_supported(item.locale):
            logger.debug("Ignoring translation %s in unsupported locale %s", item.document_id, item.locale)
            continue
        translations[item.locale] = item
    return translations


def build_map(
    records: Iterable[LocalizedRecord | Mapping[str, Any]],
    config: LocaleConfig | None = None,
) -> LocaleMap:
    """Build the bidirectional path -> translations map from a snapshot.

    Each record contributes one shared translations dict, inserted under the
    localized path of every sibling it contains. Records without resolvable
    siblings are skipped, and siblings without a path (a page saved without
    its slug) stay in the shared dict but get no key of their own.
    """
    config = config or DEFAULT_LOCALE_CONFIG
    entries: dict[str, LocaleTranslations] = {}

    for raw in records:
        record = raw if isinstance(raw, LocalizedRecord) else LocalizedRecord.from_mapping(raw)
        translations = build_translations(record.translations, config)
        if not translations:
            continue

        for locale in config.locales:
            item = translations.get(locale)
            if item is None:
                continue
            pathname = routable_pathname(item.content_type, locale, item.slug, config)
            if pathname is None:
                logger.warning("No path for %s in %s, left out of the locale map", item.document_id, locale)
                continue
            existing = entries.get(pathname)
            if existing is not None and existing is not translations:
                logger.warning(
                    "Locale map path collision on %s: %s replaces %s",
                    pathname,
                    item.document_id,
                    existing[locale].document_id if locale in existing else "?",
                )
            entries[pathname] = translations

    logger.debug("Built locale map with %d paths", len(entries))
    return LocaleMap(entries)


def get_alternate(translations: Iterable[TranslationItem] | None, locale: str) -> TranslationItem | None:
    """Return the sibling in ``locale`` from a translations list, if any."""
    if not translations:
        return None
    return next((item for item in translations if item.locale == locale), None)


def has_translation(translations: Iterable[TranslationItem] | None, locale: str) -> bool:
    return get_alternate(translations, locale) is not None
