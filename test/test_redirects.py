"""
Tests for redirects recorded on slug changes
"""

import pytest

from sitecms.schemas.documents import DocumentUpdate
from sitecms.services.document_service import update_document
from sitecms.services.redirect_service import list_active_redirects, record_slug_change


async def rename(document_id, slug, db, config):
    return await update_document(document_id, DocumentUpdate(slug=slug), db, config)


def pairs(redirects):
    return sorted((r.source, r.destination) for r in redirects)


class TestSlugChangeRedirects:
    @pytest.mark.asyncio
    async def test_redirect_in_default_locale(self, test_db, make_document, locale_config):
        await make_document("page", "fr", "a-propos", id="about-fr")
        await rename("about-fr", "qui-sommes-nous", test_db, locale_config)

        redirects = await list_active_redirects(test_db)
        assert pairs(redirects) == [("/fr/a-propos", "/fr/qui-sommes-nous")]
        assert redirects[0].permanent is True
        assert redirects[0].document_id == "about-fr"

    @pytest.mark.asyncio
    async def test_chain_is_collapsed(self, test_db, make_document, locale_config):
        await make_document("article", "en", "a", id="post-en")
        await rename("post-en", "b", test_db, locale_config)
        await rename("post-en", "c", test_db, locale_config)

        assert pairs(await list_active_redirects(test_db)) == [
            ("/en/blog/a", "/en/blog/c"),
            ("/en/blog/b", "/en/blog/c"),
        ]

    @pytest.mark.asyncio
    async def test_renaming_back_deactivates_redirect(self, test_db, make_document, locale_config):
        await make_document("article", "en", "a", id="post-en")
        await rename("post-en", "b", test_db, locale_config)
        await rename("post-en", "a", test_db, locale_config)

        assert pairs(await list_active_redirects(test_db)) == [("/en/blog/b", "/en/blog/a")]

    @pytest.mark.asyncio
    async def test_renaming_back_and_forth_reuses_source(self, test_db, make_document, locale_config):
        await make_document("article", "en", "a", id="post-en")
        await rename("post-en", "b", test_db, locale_config)
        await rename("post-en", "a", test_db, locale_config)
        await rename("post-en", "b", test_db, locale_config)

        assert pairs(await list_active_redirects(test_db)) == [("/en/blog/a", "/en/blog/b")]


class TestNoRedirect:
    @pytest.mark.asyncio
    async def test_non_localized_document(self, test_db, make_document, locale_config):
        await make_document("author", None, "jane", id="author-1")
        await rename("author-1", "jane-doe", test_db, locale_config)
        assert await list_active_redirects(test_db) == []

    @pytest.mark.asyncio
    async def test_draft_document(self, test_db, make_document, locale_config):
        await make_document("article", "en", "a", id="drafts.post-en")
        await rename("drafts.post-en", "b", test_db, locale_config)
        assert await list_active_redirects(test_db) == []

    @pytest.mark.asyncio
    async def test_unchanged_slug(self, test_db, make_document, locale_config):
        document = await make_document("article", "en", "a", id="post-en")
        assert await record_slug_change(document, "a", test_db, locale_config) is None

    @pytest.mark.asyncio
    async def test_previously_unslugged_document(self, test_db, make_document, locale_config):
        document = await make_document("article", "en", "a", id="post-en")
        assert await record_slug_change(document, None, test_db, locale_config) is None
