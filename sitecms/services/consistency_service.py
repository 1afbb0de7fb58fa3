"""
Consistency Service

Orphan detection and locale-filtered collection reads.

A document in a non-default locale is *orphaned* when its translation group
has no resolvable default-locale sibling, or when it has no group at all.
Default-locale documents and non-localized documents are never orphaned.
Orphans are only reported; nothing here deletes or relinks them.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from sitecms.exceptions import InvalidOperationError
from sitecms.i18n.content_types import LOCALIZED_TYPES, ORDERABLE_TYPES, ContentType, is_localized
from sitecms.i18n.locale_config import LocaleConfig  # noqa: TC001
from sitecms.i18n.locale_map import LocalizedRecord  # noqa: TC001
from sitecms.i18n.ordering import sort_by_effective_order
from sitecms.models.document import DRAFTS_PREFIX, Document
from sitecms.services.document_service import get_document
from sitecms.services.translation_service import (
    record_from_document,
    resolve_translations,
    resolve_translations_bulk,
)

logger = logging.getLogger(__name__)


async def is_orphaned(document: Document, db: AsyncSession, config: LocaleConfig) -> bool:
    if not document.is_localized or document.locale in (None, config.default_locale):
        return False
    siblings = await resolve_translations(document.id, db)
    return not any(item.locale == config.default_locale for item in siblings)


async def find_orphans(db: AsyncSession, config: LocaleConfig) -> list[Document]:
    """All published localized documents outside the default locale lacking a default sibling."""
    result = await db.execute(
        select(Document)
        .where(
            Document.doc_type.in_([t.value for t in LOCALIZED_TYPES]),
            Document.locale.is_not(None),
            Document.locale != config.default_locale,
            Document.id.not_like(f"{DRAFTS_PREFIX}%"),
        )
        .order_by(Document.locale, Document.id)
    )
    candidates = list(result.scalars().all())
    siblings = await resolve_translations_bulk(candidates, db)

    orphans = [
        doc
        for doc in candidates
        if not any(item.locale == config.default_locale for item in siblings[doc.id])
    ]
    if orphans:
        logger.info("Found %d orphaned document(s)", len(orphans))
    return orphans


async def list_collection(
    doc_type: ContentType | str,
    locale: str,
    db: AsyncSession,
    config: LocaleConfig,
) -> list[LocalizedRecord]:
    """Published documents of ``doc_type`` in ``locale``, sorted by effective order."""
    doc_type = ContentType(doc_type)
    if not is_localized(doc_type):
        raise InvalidOperationError(f"Collections are only available for localized types, not '{doc_type.value}'")
    config.require_supported(locale)

    result = await db.execute(
        select(Document).where(
            Document.doc_type == doc_type.value,
            Document.locale == locale,
            Document.id.not_like(f"{DRAFTS_PREFIX}%"),
        )
    )
    documents = list(result.scalars().all())
    siblings = await resolve_translations_bulk(documents, db)
    records = [record_from_document(doc, siblings[doc.id]) for doc in documents]
    return sort_by_effective_order(records, config)


async def reorder_document(document_id: str, order_rank: str | None, db: AsyncSession) -> Document:
    """Set the manual rank of one document. Its locale siblings are not touched."""
    document = await get_document(document_id, db)
    if document.content_type not in ORDERABLE_TYPES:
        raise InvalidOperationError(
            f"Documents of type '{document.doc_type}' are not manually ordered",
            details={"document_id": document.id, "doc_type": document.doc_type},
        )
    document.order_rank = order_rank
    await db.commit()
    await db.refresh(document)
    logger.info("Document %s reordered to %s", document.id, order_rank)
    return document
