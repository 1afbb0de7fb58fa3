"""
Translation Service

Async functions over translation groups: resolving the siblings of a
document, creating and linking translations, and fetching the
default-locale snapshot the locale map is built from.

Functions:
    get_translation_group      — group a document belongs to, if any
    resolve_translations       — sibling items of one document, itself included
    resolve_translations_bulk  — same for many documents in a fixed number of queries
    fetch_locale_snapshot      — default-locale records with their siblings
    create_translation         — copy a document into another locale and link it
    link_translation           — attach an existing document to a group
    prune_dangling_entries     — explicit cleanup of entries for deleted documents

Dangling entries (documents deleted after being linked) are tolerated on
every read path: they are skipped and logged, never raised.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from sitecms.exceptions import (
    DocumentNotFoundError,
    InvalidOperationError,
    TranslationExistsError,
)
from sitecms.i18n.content_types import LOCALIZED_TYPES, is_singleton
from sitecms.i18n.locale_config import LocaleConfig  # noqa: TC001
from sitecms.i18n.locale_map import LocalizedRecord, TranslationItem
from sitecms.models.document import DRAFTS_PREFIX, Document, get_published_id, new_document_id
from sitecms.models.translation_group import TranslationGroup, TranslationGroupEntry
from sitecms.services.document_service import ensure_singleton_available, normalize_slug
from sitecms.services.slug_service import validate_slug

logger = logging.getLogger(__name__)


def item_from_document(document: Document) -> TranslationItem:
    return TranslationItem(
        document_id=document.id,
        content_type=document.content_type,
        locale=document.locale,
        slug=document.slug,
        title=document.title or "",
        order_rank=document.order_rank,
    )


def translated_document_id(source_id: str, doc_type: str, source_locale: str, target_locale: str) -> str:
    """Deterministic id for the ``target_locale`` copy of ``source_id``.

    Singletons use ``<base>.<locale>``; other documents swap a trailing
    ``.<source_locale>`` / ``-<source_locale>`` marker or append ``.<target_locale>``.
    """
    if is_singleton(doc_type):
        base, _, suffix = source_id.rpartition(".")
        if base and suffix == source_locale:
            return f"{base}.{target_locale}"
        return f"{source_id}.{target_locale}"

    for separator in (".", "-"):
        marker = f"{separator}{source_locale}"
        if source_id.endswith(marker):
            return f"{source_id[: -len(marker)]}{separator}{target_locale}"
    return f"{source_id}.{target_locale}"


def group_id_for(document_id: str) -> str:
    return f"{document_id}.__i18n"


async def get_translation_group(document_id: str, db: AsyncSession) -> TranslationGroup | None:
    """Return the translation group referencing ``document_id`` (draft ids resolve to published)."""
    result = await db.execute(
        select(TranslationGroup)
        .join(TranslationGroupEntry, TranslationGroupEntry.group_id == TranslationGroup.id)
        .where(TranslationGroupEntry.document_id == get_published_id(document_id))
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def _load_documents(ids: Sequence[str], db: AsyncSession) -> dict[str, Document]:
    if not ids:
        return {}
    result = await db.execute(select(Document).where(Document.id.in_(set(ids))))
    return {doc.id: doc for doc in result.scalars().all()}


def _items_for_entries(
    group_id: str,
    entries: Sequence[TranslationGroupEntry],
    documents: dict[str, Document],
) -> list[TranslationItem]:
    items = []
    for entry in entries:
        document = documents.get(entry.document_id)
        if document is None:
            logger.warning(
                "Translation group %s references missing document %s (locale %s); entry skipped",
                group_id,
                entry.document_id,
                entry.locale,
            )
            continue
        if document.locale != entry.locale:
            logger.warning(
                "Translation group %s lists %s as %s but the document is in %s",
                group_id,
                document.id,
                entry.locale,
                document.locale,
            )
        items.append(item_from_document(document))
    return items


async def resolve_translations(document_id: str, db: AsyncSession) -> list[TranslationItem]:
    """Return every resolvable sibling of ``document_id``, the document itself included.

    A document not linked to any group resolves to a single-item list.

    Raises:
        DocumentNotFoundError: the document does not exist and no group references it.
    """
    published_id = get_published_id(document_id)
    group = await get_translation_group(published_id, db)
    if group is None:
        document = await db.get(Document, published_id) or await db.get(Document, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return [item_from_document(document)]

    documents = await _load_documents([e.document_id for e in group.entries], db)
    return _items_for_entries(group.id, group.entries, documents)


async def resolve_translations_bulk(
    documents: Sequence[Document],
    db: AsyncSession,
) -> dict[str, tuple[TranslationItem, ...]]:
    """Resolve siblings for many documents at once, keyed by document id."""
    ids = [doc.id for doc in documents]
    if not ids:
        return {}

    own_entries = await db.execute(
        select(TranslationGroupEntry.document_id, TranslationGroupEntry.group_id).where(
            TranslationGroupEntry.document_id.in_(ids)
        )
    )
    group_by_document = dict(own_entries.all())

    entries_by_group: dict[str, list[TranslationGroupEntry]] = {}
    if group_by_document:
        result = await db.execute(
            select(TranslationGroupEntry)
            .where(TranslationGroupEntry.group_id.in_(set(group_by_document.values())))
            .order_by(TranslationGroupEntry.id)
        )
        for entry in result.scalars().all():
            entries_by_group.setdefault(entry.group_id, []).append(entry)

    known = {doc.id: doc for doc in documents}
    missing = {
        entry.document_id
        for entries in entries_by_group.values()
        for entry in entries
        if entry.document_id not in known
    }
    known.update(await _load_documents(sorted(missing), db))

    resolved: dict[str, tuple[TranslationItem, ...]] = {}
    for doc in documents:
        group_id = group_by_document.get(doc.id)
        if group_id is None:
            resolved[doc.id] = (item_from_document(doc),)
        else:
            resolved[doc.id] = tuple(_items_for_entries(group_id, entries_by_group.get(group_id, []), known))
    return resolved


def record_from_document(document: Document, translations: Sequence[TranslationItem]) -> LocalizedRecord:
    return LocalizedRecord(
        document_id=document.id,
        content_type=document.content_type,
        locale=document.locale,
        slug=document.slug,
        title=document.title or "",
        order_rank=document.order_rank,
        translations=tuple(translations),
    )


async def fetch_locale_snapshot(db: AsyncSession, config: LocaleConfig) -> list[LocalizedRecord]:
    """Every published localized document in the default locale, with its siblings."""
    result = await db.execute(
        select(Document)
        .where(
            Document.doc_type.in_([t.value for t in LOCALIZED_TYPES]),
            Document.locale == config.default_locale,
            Document.id.not_like(f"{DRAFTS_PREFIX}%"),
        )
        .order_by(Document.id)
    )
    documents = list(result.scalars().all())
    siblings = await resolve_translations_bulk(documents, db)
    return [record_from_document(doc, siblings[doc.id]) for doc in documents]


async def _drop_dangling_entry(group: TranslationGroup, locale: str, db: AsyncSession) -> bool:
    """Remove the ``locale`` entry of ``group`` when its document no longer exists.

    Returns False when the entry points at a live document.
    """
    entry = group.entry_for(locale)
    if entry is None:
        return True
    if await db.get(Document, entry.document_id) is not None:
        return False
    logger.info("Replacing dangling %s entry %s in group %s", locale, entry.document_id, group.id)
    group.entries.remove(entry)
    await db.flush()
    return True


async def create_translation(
    source_id: str,
    target_locale: str,
    db: AsyncSession,
    config: LocaleConfig,
    *,
    slug: str | None = None,
    title: str | None = None,
) -> Document:
    """Spawn the ``target_locale`` version of a document and link both in one group.

    The new document copies the source payload, title, slug and rank unless
    ``slug``/``title`` are given. The group is created on the first
    translation and extended afterwards.

    Raises:
        UnsupportedLocaleError, DocumentNotFoundError, InvalidOperationError,
        TranslationExistsError, DuplicateSlugError
    """
    config.require_supported(target_locale)
    source = await db.get(Document, get_published_id(source_id))
    if source is None:
        raise DocumentNotFoundError(source_id)
    if not source.is_localized:
        raise InvalidOperationError(
            f"Documents of type '{source.doc_type}' are not translatable",
            details={"document_id": source.id, "doc_type": source.doc_type},
        )
    if source.locale == target_locale:
        raise InvalidOperationError(
            f"Document '{source.id}' is already in locale '{target_locale}'",
            details={"document_id": source.id, "locale": target_locale},
        )

    group = await get_translation_group(source.id, db)
    if group is not None and not await _drop_dangling_entry(group, target_locale, db):
        raise TranslationExistsError(source.id, target_locale, group.entry_for(target_locale).document_id)

    await ensure_singleton_available(source.doc_type, target_locale, db)

    new_id = translated_document_id(source.id, source.doc_type, source.locale, target_locale)
    if await db.get(Document, new_id) is not None:
        new_id = new_document_id()

    translation = Document(
        id=new_id,
        doc_type=source.doc_type,
        locale=target_locale,
        slug=normalize_slug(slug) if slug else source.slug,
        title=title or source.title,
        payload=copy.deepcopy(source.payload or {}),
        order_rank=source.order_rank,
    )
    if translation.slug:
        await validate_slug(translation.slug, translation, db)

    if group is None:
        group = TranslationGroup(id=group_id_for(source.id))
        group.entries.append(TranslationGroupEntry(locale=source.locale, document_id=source.id))
        db.add(group)
    group.entries.append(TranslationGroupEntry(locale=target_locale, document_id=translation.id))
    db.add(translation)

    await db.commit()
    await db.refresh(translation)
    logger.info("Translation created: %s (%s) -> %s (%s)", source.id, source.locale, translation.id, target_locale)
    return translation


async def link_translation(
    document_id: str,
    sibling_id: str,
    db: AsyncSession,
    config: LocaleConfig,
) -> list[TranslationItem]:
    """Attach the existing document ``sibling_id`` to ``document_id``'s translation group."""
    document = await db.get(Document, get_published_id(document_id))
    if document is None:
        raise DocumentNotFoundError(document_id)
    sibling = await db.get(Document, get_published_id(sibling_id))
    if sibling is None:
        raise DocumentNotFoundError(sibling_id)

    if not (document.is_localized and sibling.is_localized):
        raise InvalidOperationError("Only localized documents can be linked as translations")
    if document.doc_type != sibling.doc_type:
        raise InvalidOperationError(
            "Translations must share a content type",
            details={"document_type": document.doc_type, "sibling_type": sibling.doc_type},
        )
    if document.locale == sibling.locale:
        raise InvalidOperationError(
            "Translations must be in different locales",
            details={"locale": document.locale},
        )
    config.require_supported(sibling.locale)

    group = await get_translation_group(document.id, db)
    sibling_group = await get_translation_group(sibling.id, db)
    if sibling_group is not None:
        if group is not None and sibling_group.id == group.id:
            return await resolve_translations(document.id, db)
        raise InvalidOperationError(
            f"Document '{sibling.id}' is already linked to translation group '{sibling_group.id}'",
            details={"document_id": sibling.id, "group_id": sibling_group.id},
        )

    if group is None:
        group = TranslationGroup(id=group_id_for(document.id))
        group.entries.append(TranslationGroupEntry(locale=document.locale, document_id=document.id))
        db.add(group)
    elif not await _drop_dangling_entry(group, sibling.locale, db):
        raise TranslationExistsError(document.id, sibling.locale, group.entry_for(sibling.locale).document_id)

    group.entries.append(TranslationGroupEntry(locale=sibling.locale, document_id=sibling.id))
    await db.commit()
    logger.info("Linked %s (%s) to group %s", sibling.id, sibling.locale, group.id)
    return await resolve_translations(document.id, db)


async def prune_dangling_entries(db: AsyncSession) -> int:
    """Delete group entries whose document no longer exists.

    Groups left without any entry are deleted as well. Returns the number of
    entries removed. Read paths never call this; it is an explicit
    maintenance action.
    """
    result = await db.execute(
        select(TranslationGroupEntry)
        .outerjoin(Document, Document.id == TranslationGroupEntry.document_id)
        .where(Document.id.is_(None))
    )
    dangling = list(result.scalars().all())
    if not dangling:
        return 0

    affected_groups = {entry.group_id for entry in dangling}
    for entry in dangling:
        logger.info("Pruning dangling entry %s/%s -> %s", entry.group_id, entry.locale, entry.document_id)
        await db.delete(entry)
    await db.flush()

    remaining = await db.execute(
        select(TranslationGroupEntry.group_id).where(TranslationGroupEntry.group_id.in_(affected_groups))
    )
    non_empty = set(remaining.scalars().all())
    for group_id in affected_groups - non_empty:
        group = await db.get(TranslationGroup, group_id)
        if group is not None:
            logger.info("Deleting empty translation group %s", group_id)
            await db.delete(group)

    await db.commit()
    return len(dangling)
