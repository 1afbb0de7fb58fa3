"""
Language switcher runtime.

Reads the locale map built for the current render and answers "where does
this page live in locale X?". Fallback policy:

- current path not in the map -> root of the target locale;
- path mapped but no sibling in the target locale -> the *current*
  document's slug rendered under the target locale's pattern. That path is
  expected to 404; a visibly broken link is preferred over silently landing
  on the homepage. Options built this way are flagged
  ``has_translation=False`` so the UI can mute them.
"""

from __future__ import annotations

from dataclasses import dataclass

from sitecms.i18n.locale import get_locale_name
from sitecms.i18n.locale_config import DEFAULT_LOCALE_CONFIG, LocaleConfig
from sitecms.i18n.locale_map import LocaleMap, LocaleTranslations, TranslationItem, has_translation
from sitecms.i18n.pathnames import locale_root, normalize_path, routable_pathname


@dataclass(frozen=True)
class SwitcherOption:
    locale: str
    href: str
    label: str
    has_translation: bool
    is_active: bool


def current_locale_from_path(path: str, config: LocaleConfig | None = None) -> str:
    """Return the locale encoded in the first path segment, or the default locale."""
    config = config or DEFAULT_LOCALE_CONFIG
    first = normalize_path(path).strip("/").split("/", 1)[0]
    return first if config.is_supported(first) else config.default_locale


def _current_item(
    current_path: str,
    translations: LocaleTranslations,
    config: LocaleConfig,
) -> TranslationItem | None:
    """Pick the sibling whose own localized path is the page being viewed."""
    path = normalize_path(current_path)
    for locale, item in translations.items():
        if routable_pathname(item.content_type, locale, item.slug, config) == path:
            return item
    return translations.get(current_locale_from_path(current_path, config))


class LanguageSwitcher:
    """Resolves switcher targets against one locale map."""

    def __init__(self, locale_map: LocaleMap, config: LocaleConfig | None = None):
        self.locale_map = locale_map
        self.config = config or DEFAULT_LOCALE_CONFIG

    def resolve_target(self, current_path: str, target_locale: str) -> str | None:
        """Return the path of the current page in ``target_locale``.

        Returns None only when ``target_locale`` is not a supported locale.
        """
        if not self.config.is_supported(target_locale):
            return None

        translations = self.locale_map.get(current_path)
        if not translations:
            return locale_root(target_locale, self.config)

        target = translations.get(target_locale)
        if target is not None:
            target_path = routable_pathname(target.content_type, target_locale, target.slug, self.config)
            if target_path is not None:
                return target_path

        current = _current_item(current_path, translations, self.config)
        if current is None:
            return locale_root(target_locale, self.config)
        fallback = routable_pathname(current.content_type, target_locale, current.slug, self.config)
        return fallback or locale_root(target_locale, self.config)

    def has_translation(self, current_path: str, target_locale: str) -> bool:
        translations = self.locale_map.get(current_path)
        return bool(translations) and has_translation(translations.values(), target_locale)

    def options(self, current_path: str) -> list[SwitcherOption]:
        """One option per supported locale, in configured order."""
        active = current_locale_from_path(current_path, self.config)
        return [
            SwitcherOption(
                locale=locale,
                href=self.resolve_target(current_path, locale),
                label=get_locale_name(locale),
                has_translation=self.has_translation(current_path, locale),
                is_active=locale == active,
            )
            for locale in self.config.locales
        ]


def resolve_target(
    current_path: str,
    target_locale: str,
    locale_map: LocaleMap,
    config: LocaleConfig | None = None,
) -> str | None:
    return LanguageSwitcher(locale_map, config).resolve_target(current_path, target_locale)


def switcher_options(
    current_path: str,
    locale_map: LocaleMap,
    config: LocaleConfig | None = None,
) -> list[SwitcherOption]:
    return LanguageSwitcher(locale_map, config).options(current_path)
