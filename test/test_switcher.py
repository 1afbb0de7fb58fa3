"""
Tests for the language switcher runtime
"""

import pytest

from sitecms.i18n.content_types import ContentType
from sitecms.i18n.locale_config import LocaleConfig
from sitecms.i18n.locale_map import LocalizedRecord, TranslationItem, build_map
from sitecms.i18n.switcher import (
    LanguageSwitcher,
    current_locale_from_path,
    resolve_target,
    switcher_options,
)


def _record(*items: TranslationItem) -> LocalizedRecord:
    first = items[0]
    return LocalizedRecord(first.document_id, first.content_type, first.locale, first.slug, first.title, translations=items)


@pytest.fixture
def locale_map():
    guide_fr = TranslationItem("guide-fr", ContentType.ARTICLE, "fr", "guide-complet")
    guide_en = TranslationItem("guide-en", ContentType.ARTICLE, "en", "guide")
    about_fr = TranslationItem("about-fr", ContentType.PAGE, "fr", "a-propos")
    news_fr = TranslationItem("news-fr", ContentType.ARTICLE, "fr", "nouvelles")
    home_fr = TranslationItem("home_page.fr", ContentType.HOME_PAGE, "fr", None)
    home_en = TranslationItem("home_page.en", ContentType.HOME_PAGE, "en", None)
    return build_map(
        [
            _record(guide_fr, guide_en),
            _record(about_fr),
            _record(news_fr),
            _record(home_fr, home_en),
        ]
    )


class TestResolveTarget:
    def test_mapped_sibling(self, locale_map):
        assert resolve_target("/fr/blogue/guide-complet", "en", locale_map) == "/en/blog/guide"
        assert resolve_target("/en/blog/guide", "fr", locale_map) == "/fr/blogue/guide-complet"

    def test_same_locale_returns_current_path(self, locale_map):
        assert resolve_target("/en/blog/guide", "en", locale_map) == "/en/blog/guide"

    def test_homepage(self, locale_map):
        assert resolve_target("/fr", "en", locale_map) == "/en"
        assert resolve_target("/en/", "fr", locale_map) == "/fr"

    def test_unmapped_path_goes_to_target_root(self, locale_map):
        assert resolve_target("/fr/inconnu", "en", locale_map) == "/en"

    def test_missing_page_sibling_keeps_current_slug(self, locale_map):
        assert resolve_target("/fr/a-propos", "en", locale_map) == "/en/a-propos"

    def test_missing_article_sibling_uses_target_pattern(self, locale_map):
        assert resolve_target("/fr/blogue/nouvelles", "en", locale_map) == "/en/blog/nouvelles"

    def test_unsupported_target_locale(self, locale_map):
        assert resolve_target("/fr/blogue/guide-complet", "de", locale_map) is None

    def test_query_string_is_ignored(self, locale_map):
        assert resolve_target("/fr/blogue/guide-complet?x=1", "en", locale_map) == "/en/blog/guide"

    def test_sibling_without_slug_uses_current_slug(self):
        guide_fr = TranslationItem("guide-fr", ContentType.ARTICLE, "fr", "guide-complet")
        unsaved_en = TranslationItem("guide-en", ContentType.ARTICLE, "en", None)
        locale_map = build_map([_record(guide_fr, unsaved_en)])
        assert resolve_target("/fr/blogue/guide-complet", "en", locale_map) == "/en/blog/guide-complet"

    def test_other_locale_config(self):
        config = LocaleConfig(locales=("en", "fr"), default_locale="en")
        guide_fr = TranslationItem("guide-fr", ContentType.ARTICLE, "fr", "guide-complet")
        guide_en = TranslationItem("guide-en", ContentType.ARTICLE, "en", "guide")
        locale_map = build_map([_record(guide_en, guide_fr)], config)
        assert resolve_target("/fr/inconnu", "en", locale_map, config) == "/en"
        assert resolve_target("/en/blog/guide", "fr", locale_map, config) == "/fr/blogue/guide-complet"


class TestCurrentLocaleFromPath:
    def test_prefixed_path(self):
        assert current_locale_from_path("/en/blog/guide") == "en"
        assert current_locale_from_path("/fr") == "fr"

    def test_unprefixed_path_uses_default(self):
        assert current_locale_from_path("/about") == "fr"
        assert current_locale_from_path("/") == "fr"

    def test_unsupported_prefix_uses_default(self):
        assert current_locale_from_path("/de/blog") == "fr"


class TestSwitcherOptions:
    def test_one_option_per_locale_in_order(self, locale_map):
        options = switcher_options("/fr/blogue/guide-complet", locale_map)
        assert [o.locale for o in options] == ["fr", "en"]
        assert [o.href for o in options] == ["/fr/blogue/guide-complet", "/en/blog/guide"]
        assert [o.is_active for o in options] == [True, False]
        assert all(o.has_translation for o in options)

    def test_missing_translation_is_flagged(self, locale_map):
        options = {o.locale: o for o in switcher_options("/fr/a-propos", locale_map)}
        assert options["en"].href == "/en/a-propos"
        assert options["en"].has_translation is False
        assert options["fr"].has_translation is True

    def test_labels(self, locale_map):
        options = switcher_options("/en", locale_map)
        assert [o.label for o in options] == ["Français", "English"]

    def test_unmapped_path(self, locale_map):
        options = LanguageSwitcher(locale_map).options("/en/nowhere")
        assert [o.href for o in options] == ["/fr", "/en"]
        assert not any(o.has_translation for o in options)
        assert options[1].is_active
