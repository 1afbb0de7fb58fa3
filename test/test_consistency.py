"""
Tests for orphan detection, locale-filtered collections and reordering
"""

import pytest

from sitecms.exceptions import DocumentNotFoundError, InvalidOperationError, UnsupportedLocaleError
from sitecms.models.document import Document
from sitecms.services.consistency_service import (
    find_orphans,
    is_orphaned,
    list_collection,
    reorder_document,
)


class TestIsOrphaned:
    @pytest.mark.asyncio
    async def test_english_document_without_group(self, test_db, make_document, locale_config):
        document = await make_document("page", "en", "about", id="about-en")
        assert await is_orphaned(document, test_db, locale_config) is True

    @pytest.mark.asyncio
    async def test_english_document_with_french_sibling(self, test_db, make_document, link_group, locale_config):
        fr = await make_document("page", "fr", "a-propos", id="about-fr")
        en = await make_document("page", "en", "about", id="about-en")
        await link_group(fr, en)
        assert await is_orphaned(en, test_db, locale_config) is False

    @pytest.mark.asyncio
    async def test_default_locale_document_is_never_orphaned(self, test_db, make_document, locale_config):
        document = await make_document("page", "fr", "a-propos", id="about-fr")
        assert await is_orphaned(document, test_db, locale_config) is False

    @pytest.mark.asyncio
    async def test_non_localized_document_is_never_orphaned(self, test_db, make_document, locale_config):
        document = await make_document("author", None, "jane-doe", id="author-1")
        assert await is_orphaned(document, test_db, locale_config) is False

    @pytest.mark.asyncio
    async def test_deleted_default_sibling_makes_orphan(self, test_db, make_document, link_group, locale_config):
        en = await make_document("page", "en", "about", id="about-en")
        await link_group(("fr", "deleted-fr"), en)
        assert await is_orphaned(en, test_db, locale_config) is True


class TestFindOrphans:
    @pytest.mark.asyncio
    async def test_reports_only_orphans(self, test_db, make_document, link_group, locale_config):
        fr = await make_document("page", "fr", "a-propos", id="about-fr")
        en = await make_document("page", "en", "about", id="about-en")
        await link_group(fr, en)
        await make_document("article", "en", "lonely", id="lonely-en")
        await make_document("article", "en", "lonely", id="drafts.lonely-en")
        await make_document("author", None, "jane-doe", id="author-1")

        orphans = await find_orphans(test_db, locale_config)

        assert [doc.id for doc in orphans] == ["lonely-en"]

    @pytest.mark.asyncio
    async def test_no_documents(self, test_db, locale_config):
        assert await find_orphans(test_db, locale_config) == []


class TestListCollection:
    @pytest.mark.asyncio
    async def test_english_list_follows_french_ranks(self, test_db, make_document, link_group, locale_config):
        a_fr = await make_document("article", "fr", "a", id="a-fr", title="A", order_rank="b")
        a_en = await make_document("article", "en", "a", id="a-en", title="A", order_rank="a")
        b_fr = await make_document("article", "fr", "b", id="b-fr", title="B", order_rank="a")
        b_en = await make_document("article", "en", "b", id="b-en", title="B", order_rank="b")
        await link_group(a_fr, a_en)
        await link_group(b_fr, b_en)

        fr_records = await list_collection("article", "fr", test_db, locale_config)
        en_records = await list_collection("article", "en", test_db, locale_config)

        assert [r.document_id for r in fr_records] == ["b-fr", "a-fr"]
        assert [r.document_id for r in en_records] == ["b-en", "a-en"]

    @pytest.mark.asyncio
    async def test_reorder_in_default_locale_moves_siblings(self, test_db, make_document, link_group, locale_config):
        a_fr = await make_document("article", "fr", "a", id="a-fr", title="A", order_rank="a")
        a_en = await make_document("article", "en", "a", id="a-en", title="A", order_rank="a")
        b_fr = await make_document("article", "fr", "b", id="b-fr", title="B", order_rank="b")
        b_en = await make_document("article", "en", "b", id="b-en", title="B", order_rank="b")
        await link_group(a_fr, a_en)
        await link_group(b_fr, b_en)

        await reorder_document("a-fr", "c", test_db)

        en_records = await list_collection("article", "en", test_db, locale_config)
        assert [r.document_id for r in en_records] == ["b-en", "a-en"]
        assert (await test_db.get(Document, "a-en")).order_rank == "a"

    @pytest.mark.asyncio
    async def test_orphan_uses_its_own_rank(self, test_db, make_document, locale_config):
        await make_document("article", "en", "x", id="x-en", title="X", order_rank="a")
        await make_document("article", "en", "y", id="y-en", title="Y", order_rank=None)

        records = await list_collection("article", "en", test_db, locale_config)
        assert [r.document_id for r in records] == ["x-en", "y-en"]

    @pytest.mark.asyncio
    async def test_drafts_are_excluded(self, test_db, make_document, locale_config):
        await make_document("article", "fr", "x", id="x-fr")
        await make_document("article", "fr", "x", id="drafts.x-fr")
        records = await list_collection("article", "fr", test_db, locale_config)
        assert [r.document_id for r in records] == ["x-fr"]

    @pytest.mark.asyncio
    async def test_non_localized_type_is_rejected(self, test_db, locale_config):
        with pytest.raises(InvalidOperationError):
            await list_collection("author", "fr", test_db, locale_config)

    @pytest.mark.asyncio
    async def test_unsupported_locale(self, test_db, locale_config):
        with pytest.raises(UnsupportedLocaleError):
            await list_collection("article", "de", test_db, locale_config)


class TestReorderDocument:
    @pytest.mark.asyncio
    async def test_sets_rank(self, test_db, make_document):
        await make_document("article", "fr", "x", id="x-fr", order_rank="a")
        document = await reorder_document("x-fr", "m", test_db)
        assert document.order_rank == "m"

    @pytest.mark.asyncio
    async def test_clears_rank(self, test_db, make_document):
        await make_document("article", "fr", "x", id="x-fr", order_rank="a")
        document = await reorder_document("x-fr", None, test_db)
        assert document.order_rank is None

    @pytest.mark.asyncio
    async def test_page_is_not_orderable(self, test_db, make_document):
        await make_document("page", "fr", "contact", id="contact-fr")
        with pytest.raises(InvalidOperationError):
            await reorder_document("contact-fr", "a", test_db)

    @pytest.mark.asyncio
    async def test_missing_document(self, test_db):
        with pytest.raises(DocumentNotFoundError):
            await reorder_document("missing", "a", test_db)
