"""
Document Service

Async CRUD for content documents.

Functions:
    create_document            — insert a document from a typed create payload
    get_document               — fetch by id or raise
    update_document            — partial update with slug validation and redirects
    delete_document            — hard delete; translation groups are left untouched
    list_documents             — filter by type and locale for editor lists
    ensure_singleton_available — one singleton document per type and locale
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from sitecms.exceptions import DocumentNotFoundError, DuplicateResourceError, ValidationError
from sitecms.i18n.content_types import SLUGLESS_TYPES, ContentType, is_localized, is_singleton
from sitecms.i18n.locale_config import LocaleConfig  # noqa: TC001
from sitecms.models.document import Document, new_document_id
from sitecms.services.redirect_service import record_slug_change
from sitecms.services.slug_service import validate_slug

if TYPE_CHECKING:
    from sitecms.schemas.documents import DocumentCreate, DocumentUpdate

logger = logging.getLogger(__name__)


def normalize_slug(slug: str) -> str:
    """Strip whitespace and surrounding slashes: "/about-us/" -> "about-us"."""
    normalized = slug.strip().strip("/")
    if not normalized:
        raise ValidationError("Slug cannot be empty", field="slug")
    return normalized


def default_document_id(doc_type: str, locale: str | None) -> str:
    if is_singleton(doc_type):
        return f"{doc_type}.{locale}" if locale else doc_type
    return new_document_id()


async def ensure_singleton_available(doc_type: str, locale: str | None, db: AsyncSession) -> None:
    """Raise DuplicateResourceError when a singleton of ``doc_type`` already exists in ``locale``."""
    if not is_singleton(doc_type):
        return
    query = select(Document.id).where(Document.doc_type == doc_type)
    if is_localized(doc_type):
        query = query.where(Document.locale == locale)
    result = await db.execute(query.limit(1))
    existing = result.scalar_one_or_none()
    if existing is not None:
        raise DuplicateResourceError(
            resource_type=ContentType(doc_type).value,
            field="locale",
            value=locale,
            details={"existing_id": existing},
        )


async def create_document(data: DocumentCreate, db: AsyncSession, config: LocaleConfig) -> Document:
    """Insert a new document.

    Localized types must name a supported locale; non-localized types are
    stored without one. Slugs are validated for uniqueness before the insert.

    Raises:
        UnsupportedLocaleError, DuplicateSlugError, DuplicateResourceError
    """
    doc_type = data.doc_type
    locale = getattr(data, "locale", None) if is_localized(doc_type) else None
    if is_localized(doc_type):
        config.require_supported(locale)

    raw_slug = getattr(data, "slug", None)
    slug = normalize_slug(raw_slug) if raw_slug is not None else None

    await ensure_singleton_available(doc_type, locale, db)

    document_id = data.id or default_document_id(doc_type, locale)
    if await db.get(Document, document_id) is not None:
        raise DuplicateResourceError(resource_type="Document", field="id", value=document_id)

    document = Document(
        id=document_id,
        doc_type=doc_type,
        locale=locale,
        slug=slug,
        title=data.title,
        payload=data.payload,
        order_rank=getattr(data, "order_rank", None),
    )
    if slug is not None:
        await validate_slug(slug, document, db)

    db.add(document)
    await db.commit()
    await db.refresh(document)
    logger.info("Document created: %s (%s, locale=%s)", document.id, doc_type, locale)
    return document


async def get_document(document_id: str, db: AsyncSession) -> Document:
    document = await db.get(Document, document_id)
    if document is None:
        raise DocumentNotFoundError(document_id)
    return document


async def update_document(
    document_id: str,
    updates: DocumentUpdate,
    db: AsyncSession,
    config: LocaleConfig,
    *,
    auto_redirect: bool = True,
) -> Document:
    """Apply a partial update. Locale and type are immutable.

    A slug change on a published localized document records a redirect
    from the old path when ``auto_redirect`` is set.
    """
    document = await get_document(document_id, db)
    fields = updates.model_dump(exclude_unset=True)
    old_slug = document.slug

    if "slug" in fields and fields["slug"] is not None:
        if document.content_type in SLUGLESS_TYPES:
            raise ValidationError(f"Documents of type '{document.doc_type}' have no slug", field="slug")
        new_slug = normalize_slug(fields["slug"])
        if new_slug != old_slug:
            await validate_slug(new_slug, document, db)
        document.slug = new_slug

    if fields.get("title") is not None:
        document.title = fields["title"]
    if fields.get("payload") is not None:
        document.payload = fields["payload"]

    if auto_redirect and document.slug != old_slug:
        await record_slug_change(document, old_slug, db, config)

    await db.commit()
    await db.refresh(document)
    logger.info("Document updated: %s", document.id)
    return document


async def delete_document(document_id: str, db: AsyncSession) -> None:
    """Delete a document. Group entries referencing it are left dangling."""
    document = await get_document(document_id, db)
    await db.delete(document)
    await db.commit()
    logger.info("Document deleted: %s", document_id)


async def list_documents(
    db: AsyncSession,
    doc_type: str | None = None,
    locale: str | None = None,
    *,
    include_legacy: bool = False,
) -> list[Document]:
    """List documents, optionally filtered by type and locale.

    With ``include_legacy`` the locale filter also keeps localized documents
    that predate locale tagging and have no locale at all.
    """
    query = select(Document)
    if doc_type is not None:
        query = query.where(Document.doc_type == ContentType(doc_type).value)
    if locale is not None:
        if include_legacy:
            query = query.where(or_(Document.locale == locale, Document.locale.is_(None)))
        else:
            query = query.where(Document.locale == locale)
    result = await db.execute(query.order_by(Document.doc_type, Document.title, Document.id))
    return list(result.scalars().all())
