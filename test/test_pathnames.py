"""
Tests for localized pathname generation and locale configuration
"""

import pytest

from sitecms.exceptions import ConfigurationError, UnsupportedLocaleError
from sitecms.i18n.content_types import ContentType
from sitecms.i18n.locale_config import DEFAULT_PATHNAMES, LocaleConfig
from sitecms.i18n.pathnames import (
    generate_path,
    internal_link_href,
    locale_root,
    localized_pathname,
    localized_prefix,
    normalize_path,
    routable_pathname,
)

GERMAN_CONFIG = LocaleConfig(
    locales=("en", "de"),
    default_locale="en",
    pathnames={
        "/": {"en": "/", "de": "/"},
        "/[slug]": {"en": "/[slug]", "de": "/[slug]"},
        "/blog": {"en": "/blog", "de": "/artikel"},
        "/blog/[slug]": {"en": "/blog/[slug]", "de": "/artikel/[slug]"},
    },
)


class TestGeneratePath:
    def test_article_paths_use_localized_prefix(self):
        assert generate_path("article", "en", "guide") == "blog/guide"
        assert generate_path("article", "fr", "guide-complet") == "blogue/guide-complet"

    def test_accepts_enum_members(self):
        assert generate_path(ContentType.ARTICLE, "en", "guide") == "blog/guide"

    def test_page_without_prefix(self):
        assert generate_path("page", "en", "about-us") == "/about-us"

    def test_leading_slash_in_slug_is_ignored(self):
        assert generate_path("page", "en", "/about-us") == "/about-us"
        assert generate_path("article", "en", "/guide") == "blog/guide"

    def test_home_page_is_root(self):
        assert generate_path("home_page", "fr") == "/"
        assert generate_path("home_page", "en", "ignored") == "/"

    def test_article_index_is_localized_prefix(self):
        assert generate_path("article_index", "fr") == "blogue"
        assert generate_path("article_index", "en") == "blog"

    def test_is_deterministic(self):
        assert generate_path("article", "fr", "x") == generate_path("article", "fr", "x")

    def test_unsupported_locale_raises(self):
        with pytest.raises(UnsupportedLocaleError) as exc_info:
            generate_path("article", "de", "guide")
        assert exc_info.value.details["supported_locales"] == ["fr", "en"]

    def test_unknown_content_type_raises(self):
        with pytest.raises(ValueError):
            generate_path("faq", "en", "question")

    def test_missing_slug_raises(self):
        with pytest.raises(ValueError):
            generate_path("article", "en", None)
        with pytest.raises(ValueError):
            generate_path("page", "en", "/")

    def test_custom_config(self):
        assert generate_path("article", "de", "leitfaden", GERMAN_CONFIG) == "artikel/leitfaden"
        assert generate_path("article_index", "de", config=GERMAN_CONFIG) == "artikel"


class TestLocalizedPathname:
    def test_includes_locale_prefix(self):
        assert localized_pathname("article", "en", "guide") == "/en/blog/guide"
        assert localized_pathname("article", "fr", "guide-complet") == "/fr/blogue/guide-complet"

    def test_page(self):
        assert localized_pathname("page", "en", "about-us") == "/en/about-us"

    def test_home_page_is_locale_root(self):
        assert localized_pathname("home_page", "fr") == "/fr"
        assert locale_root("en") == "/en"

    def test_article_index(self):
        assert localized_pathname("article_index", "fr") == "/fr/blogue"

    def test_localized_prefix(self):
        assert localized_prefix("article", "fr") == "blogue"
        assert localized_prefix("page", "fr") == ""
        assert localized_prefix("author", "fr") == ""


class TestNormalizePath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("/en/blog/guide", "/en/blog/guide"),
            ("/en/blog/guide/", "/en/blog/guide"),
            ("/en/blog/guide?ref=nav#top", "/en/blog/guide"),
            ("//en//blog", "/en/blog"),
            ("", "/"),
            ("/", "/"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_path(raw) == expected


class TestInternalLinkHref:
    def test_resolved_link(self):
        assert internal_link_href("guide", "article", "en") == "/en/blog/guide"

    def test_missing_slug(self):
        assert internal_link_href(None, "article", "en") == "#"
        assert internal_link_href("", "page", "en") == "#"

    def test_unknown_type(self):
        assert internal_link_href("guide", "faq", "en") == "#"
        assert internal_link_href("guide", None, "en") == "#"

    def test_slugless_types_link_to_their_pattern(self):
        assert internal_link_href(None, "home_page", "fr") == "/fr"
        assert internal_link_href(None, "article_index", "fr") == "/fr/blogue"
        assert internal_link_href(None, ContentType.ARTICLE_INDEX, "en") == "/en/blog"

    def test_types_without_a_route(self):
        assert internal_link_href("guide", "settings", "en") == "#"
        assert internal_link_href("jane-doe", "author", "en") == "#"

    def test_unsupported_locale(self):
        assert internal_link_href("guide", "article", "de") == "#"


class TestRoutablePathname:
    def test_routable_document(self):
        assert routable_pathname("article", "fr", "guide-complet") == "/fr/blogue/guide-complet"

    def test_no_page(self):
        assert routable_pathname("article", "en", None) is None
        assert routable_pathname("settings", "en", None) is None
        assert routable_pathname("page", None, "about") is None


class TestLocaleConfig:
    def test_defaults(self):
        config = LocaleConfig()
        assert config.locales == ("fr", "en")
        assert config.default_locale == "fr"
        assert config.pattern_for("article") == "/blog/[slug]"
        assert config.pattern_for("author") is None
        assert config.localized_pattern("article_index", "fr") == "/blogue"

    def test_is_supported(self):
        config = LocaleConfig()
        assert config.is_supported("en")
        assert not config.is_supported("de")
        assert not config.is_supported(None)

    def test_require_supported(self):
        config = LocaleConfig()
        assert config.require_supported("fr") == "fr"
        with pytest.raises(UnsupportedLocaleError):
            config.require_supported("es")

    def test_empty_locales_rejected(self):
        with pytest.raises(ConfigurationError):
            LocaleConfig(locales=(), default_locale="fr")

    def test_default_must_be_supported(self):
        with pytest.raises(ConfigurationError) as exc_info:
            LocaleConfig(locales=("en",), default_locale="fr")
        assert "fr" in exc_info.value.message

    def test_duplicate_locales_rejected(self):
        with pytest.raises(ConfigurationError):
            LocaleConfig(locales=("fr", "fr"), default_locale="fr")

    def test_unknown_pattern_rejected(self):
        pathnames = {k: v for k, v in DEFAULT_PATHNAMES.items() if k != "/blog"}
        with pytest.raises(ConfigurationError):
            LocaleConfig(pathnames=pathnames)

    def test_tables_are_read_only(self):
        config = LocaleConfig()
        with pytest.raises(TypeError):
            config.pathnames["/new"] = {}

    def test_from_settings(self):
        from sitecms.config import Settings

        config = LocaleConfig.from_settings(Settings(supported_locales=["en", "fr"], default_locale="en"))
        assert config.locales == ("en", "fr")
        assert config.default_locale == "en"
