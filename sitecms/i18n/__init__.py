"""
i18n package

Translation-navigation core: locale configuration, localized pathnames,
the bidirectional locale map, the language switcher and ordering rules.
Everything here is synchronous and takes its ``LocaleConfig`` explicitly.
"""

from .content_types import LOCALIZED_TYPES, ContentType, is_localized
from .locale import get_language_info, get_locale_name, get_valid_locale, is_rtl_locale, parse_accept_language
from .locale_config import DEFAULT_LOCALE_CONFIG, LocaleConfig
from .locale_map import LocaleMap, LocaleTranslations, LocalizedRecord, TranslationItem, build_map
from .ordering import effective_order, sort_by_effective_order
from .pathnames import generate_path, localized_pathname
from .switcher import LanguageSwitcher, SwitcherOption, resolve_target, switcher_options

__all__ = [
    "DEFAULT_LOCALE_CONFIG",
    "LOCALIZED_TYPES",
    "ContentType",
    "LanguageSwitcher",
    "LocaleConfig",
    "LocaleMap",
    "LocaleTranslations",
    "LocalizedRecord",
    "SwitcherOption",
    "TranslationItem",
    "build_map",
    "effective_order",
    "generate_path",
    "get_language_info",
    "get_locale_name",
    "get_valid_locale",
    "is_localized",
    "is_rtl_locale",
    "localized_pathname",
    "parse_accept_language",
    "resolve_target",
    "sort_by_effective_order",
    "switcher_options",
]
