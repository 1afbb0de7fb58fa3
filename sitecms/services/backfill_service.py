"""
Backfill Service

One-off data migrations for bringing existing content into the
translation model:

    assign_default_locale    — tag localized documents that have no locale yet
    backfill_locale_versions — create target-locale copies of every
                               source-locale document lacking one, linked in
                               a translation group

Both take a ``MigrationReport`` owned by the caller and update its counters
in place, and both support a dry run that only reports what would change.
A failure on one document is counted and logged; the run continues with
the next document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from sitecms.exceptions import SiteCMSError
from sitecms.i18n.content_types import LOCALIZED_TYPES
from sitecms.i18n.locale_config import LocaleConfig  # noqa: TC001
from sitecms.models.document import DRAFTS_PREFIX, Document
from sitecms.services.translation_service import (
    create_translation,
    get_translation_group,
    translated_document_id,
)

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 10


@dataclass
class MigrationReport:
    source_locale: str
    target_locale: str
    dry_run: bool = False
    processed: int = 0
    created: int = 0
    skipped: int = 0
    errors: int = 0
    messages: list[str] = field(default_factory=list)

    def note(self, message: str) -> None:
        self.messages.append(message)

    def progress(self) -> None:
        if self.processed and self.processed % PROGRESS_EVERY == 0:
            logger.info(
                "Progress: %d processed | %d created | %d skipped | %d errors",
                self.processed,
                self.created,
                self.skipped,
                self.errors,
            )

    def summary(self) -> str:
        prefix = "[dry run] " if self.dry_run else ""
        return (
            f"{prefix}{self.source_locale} -> {self.target_locale}: {self.processed} processed, "
            f"{self.created} created, {self.skipped} skipped, {self.errors} errors"
        )


async def assign_default_locale(
    db: AsyncSession,
    config: LocaleConfig,
    report: MigrationReport,
    *,
    dry_run: bool = False,
) -> MigrationReport:
    """Set the default locale on localized documents stored without one."""
    result = await db.execute(
        select(Document)
        .where(Document.doc_type.in_([t.value for t in LOCALIZED_TYPES]), Document.locale.is_(None))
        .order_by(Document.id)
    )
    for document in result.scalars().all():
        report.processed += 1
        report.note(f"{document.doc_type}: {document.id} -> {config.default_locale}")
        if not dry_run:
            document.locale = config.default_locale
        report.created += 1
        report.progress()

    if not dry_run:
        await db.commit()
    logger.info("Locale assignment finished: %s", report.summary())
    return report


async def _has_target_version(document_id: str, target_id: str, target_locale: str, db: AsyncSession) -> bool:
    if await db.get(Document, target_id) is not None:
        return True
    group = await get_translation_group(document_id, db)
    if group is None:
        return False
    entry = group.entry_for(target_locale)
    return entry is not None and await db.get(Document, entry.document_id) is not None


async def backfill_locale_versions(
    db: AsyncSession,
    config: LocaleConfig,
    report: MigrationReport,
    *,
    dry_run: bool = False,
) -> MigrationReport:
    """Copy every ``report.source_locale`` document into ``report.target_locale``.

    Documents that already have a target-locale version (by deterministic id
    or through their translation group) are skipped. Copies keep the source
    content and must be translated by an editor afterwards.
    """
    config.require_supported(report.source_locale)
    config.require_supported(report.target_locale)
    report.dry_run = dry_run

    result = await db.execute(
        select(Document.id, Document.doc_type)
        .where(
            Document.doc_type.in_([t.value for t in LOCALIZED_TYPES]),
            Document.locale == report.source_locale,
            Document.id.not_like(f"{DRAFTS_PREFIX}%"),
        )
        .order_by(Document.id)
    )
    sources = list(result.all())

    for document_id, doc_type in sources:
        report.processed += 1
        target_id = translated_document_id(document_id, doc_type, report.source_locale, report.target_locale)

        if await _has_target_version(document_id, target_id, report.target_locale, db):
            report.skipped += 1
            logger.debug("Skipped %s: %s (%s version exists)", doc_type, document_id, report.target_locale)
        elif dry_run:
            report.created += 1
            report.note(f"would create {doc_type}: {document_id} -> {target_id}")
        else:
            try:
                translation = await create_translation(document_id, report.target_locale, db, config)
            except SiteCMSError as e:
                await db.rollback()
                report.errors += 1
                report.note(f"error {doc_type}: {document_id}: {e.message}")
                logger.warning("Backfill failed for %s: %s", document_id, e.message)
            else:
                report.created += 1
                report.note(f"created {doc_type}: {document_id} -> {translation.id}")
                logger.info("Created %s: %s -> %s", doc_type, document_id, translation.id)
        report.progress()

    logger.info("Backfill finished: %s", report.summary())
    return report
