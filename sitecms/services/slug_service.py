"""
Slug Service

Slug uniqueness checks used by document creation, updates and the
editor-facing slug-check endpoint.

A slug is unique when no other document uses it. The document being edited
is excluded under both its published and its draft id. For localized types
the check is scoped to the document's locale, so ``fr`` and ``en`` versions
may share a slug; for non-localized types it is global. The check does not
filter by content type.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from sitecms.exceptions import DuplicateSlugError, ValidationError
from sitecms.i18n.content_types import is_localized
from sitecms.models.document import Document, get_draft_id, get_published_id

logger = logging.getLogger(__name__)


async def is_unique(slug: str, document: Document, db: AsyncSession) -> bool:
    """Return True when ``slug`` is free for ``document``.

    ``document`` only needs ``id``, ``doc_type`` and ``locale``; it may be a
    transient instance that was never added to the session.
    """
    query = select(Document.id).where(Document.slug == slug)

    if document.id:
        published_id = get_published_id(document.id)
        query = query.where(Document.id.notin_([published_id, get_draft_id(published_id)]))

    if is_localized(document.doc_type) and document.locale:
        query = query.where(Document.locale == document.locale)

    result = await db.execute(query.limit(1))
    return result.first() is None


async def validate_slug(slug: str, document: Document, db: AsyncSession) -> None:
    """Raise DuplicateSlugError when ``slug`` is already taken in ``document``'s scope."""
    if await is_unique(slug, document, db):
        return
    locale = document.locale if is_localized(document.doc_type) else None
    logger.info("Slug conflict: %s (locale=%s, document=%s)", slug, locale, document.id)
    raise DuplicateSlugError(slug, locale)


async def check_slug(
    slug: str,
    doc_type: str,
    db: AsyncSession,
    *,
    locale: str | None = None,
    document_id: str | None = None,
) -> bool:
    """Editor-side check of ``slug`` for a document that may not be saved yet.

    When ``document_id`` names a stored document (published or draft), its
    type and locale decide the scope; a ``locale`` contradicting the stored
    one is rejected.
    """
    stored = None
    if document_id:
        published_id = get_published_id(document_id)
        stored = await db.get(Document, published_id) or await db.get(Document, get_draft_id(published_id))

    if stored is None:
        candidate = Document(id=document_id, doc_type=doc_type, locale=locale)
    else:
        if locale is not None and locale != stored.locale:
            raise ValidationError(
                f"Document '{stored.id}' is in locale '{stored.locale}', not '{locale}'",
                field="locale",
            )
        candidate = stored
    return await is_unique(slug, candidate, db)
