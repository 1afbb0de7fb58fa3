"""
Tests for the locale backfill migrations
"""

import logging

import pytest
from sqlalchemy import select

from sitecms.exceptions import UnsupportedLocaleError
from sitecms.models.document import Document
from sitecms.services.backfill_service import (
    PROGRESS_EVERY,
    MigrationReport,
    assign_default_locale,
    backfill_locale_versions,
)
from sitecms.services.translation_service import resolve_translations


async def english_ids(db):
    result = await db.execute(select(Document.id).where(Document.locale == "en").order_by(Document.id))
    return list(result.scalars().all())


class TestMigrationReport:
    def test_summary(self):
        report = MigrationReport("fr", "en", processed=3, created=2, skipped=1)
        assert report.summary() == "fr -> en: 3 processed, 2 created, 1 skipped, 0 errors"

    def test_dry_run_summary(self):
        report = MigrationReport("fr", "en", dry_run=True)
        assert report.summary().startswith("[dry run] ")

    def test_progress_logged_every_batch(self, caplog):
        report = MigrationReport("fr", "en", processed=PROGRESS_EVERY)
        with caplog.at_level(logging.INFO, logger="sitecms.services.backfill_service"):
            report.progress()
            report.processed += 1
            report.progress()
        assert caplog.text.count("Progress:") == 1


class TestBackfillLocaleVersions:
    @pytest.mark.asyncio
    async def test_creates_missing_versions(self, test_db, make_document, link_group, locale_config):
        await make_document("page", "fr", "a-propos", id="about-fr")
        await make_document("article", "fr", "guide", id="guide-fr")
        await make_document("home_page", "fr", None, id="home_page.fr")
        fr = await make_document("page", "fr", "contact", id="contact-fr")
        en = await make_document("page", "en", "contact-us", id="reach-us")
        await link_group(fr, en)
        await make_document("page", "fr", "brouillon", id="drafts.about-fr")

        report = await backfill_locale_versions(test_db, locale_config, MigrationReport("fr", "en"))

        assert (report.processed, report.created, report.skipped, report.errors) == (4, 3, 1, 0)
        assert await english_ids(test_db) == ["about-en", "guide-en", "home_page.en", "reach-us"]
        items = await resolve_translations("about-en", test_db)
        assert {i.locale: i.document_id for i in items} == {"fr": "about-fr", "en": "about-en"}

    @pytest.mark.asyncio
    async def test_second_run_skips_everything(self, test_db, make_document, locale_config):
        await make_document("page", "fr", "a-propos", id="about-fr")
        await backfill_locale_versions(test_db, locale_config, MigrationReport("fr", "en"))

        report = await backfill_locale_versions(test_db, locale_config, MigrationReport("fr", "en"))
        assert (report.processed, report.created, report.skipped) == (1, 0, 1)

    @pytest.mark.asyncio
    async def test_dry_run_writes_nothing(self, test_db, make_document, locale_config):
        await make_document("page", "fr", "a-propos", id="about-fr")
        await make_document("article", "fr", "guide", id="guide-fr")

        report = await backfill_locale_versions(test_db, locale_config, MigrationReport("fr", "en"), dry_run=True)

        assert report.dry_run is True
        assert report.created == 2
        assert "would create page: about-fr -> about-en" in report.messages
        assert await english_ids(test_db) == []

    @pytest.mark.asyncio
    async def test_error_is_counted_and_run_continues(self, test_db, make_document, locale_config):
        await make_document("page", "fr", "contact", id="a-contact-fr")
        await make_document("page", "fr", "equipe", id="b-team-fr")
        await make_document("page", "en", "contact", id="unrelated-en")

        report = await backfill_locale_versions(test_db, locale_config, MigrationReport("fr", "en"))

        assert (report.processed, report.created, report.errors) == (2, 1, 1)
        assert any(m.startswith("error page: a-contact-fr") for m in report.messages)
        assert await english_ids(test_db) == ["b-team-en", "unrelated-en"]

    @pytest.mark.asyncio
    async def test_unsupported_target(self, test_db, locale_config):
        with pytest.raises(UnsupportedLocaleError):
            await backfill_locale_versions(test_db, locale_config, MigrationReport("fr", "de"))


class TestAssignDefaultLocale:
    @pytest.mark.asyncio
    async def test_tags_legacy_documents(self, test_db, make_document, locale_config):
        await make_document("page", None, "a-propos", id="legacy-page")
        await make_document("author", None, "jane", id="author-1")
        await make_document("page", "en", "about", id="about-en")

        report = await assign_default_locale(test_db, locale_config, MigrationReport("none", "fr"))

        assert (report.processed, report.created) == (1, 1)
        result = await test_db.execute(select(Document.id, Document.locale).order_by(Document.id))
        assert dict(result.all()) == {"about-en": "en", "author-1": None, "legacy-page": "fr"}

    @pytest.mark.asyncio
    async def test_dry_run(self, test_db, make_document, locale_config):
        await make_document("page", None, "a-propos", id="legacy-page")

        report = await assign_default_locale(test_db, locale_config, MigrationReport("none", "fr"), dry_run=True)

        assert report.created == 1
        result = await test_db.execute(select(Document.locale).where(Document.id == "legacy-page"))
        assert result.scalar_one() is None
