"""
Redirect Service

Records a permanent redirect whenever a published localized document's
path changes because its slug was edited, and lists active redirects for
the front end.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from sitecms.i18n.locale_config import LocaleConfig  # noqa: TC001
from sitecms.i18n.pathnames import localized_pathname
from sitecms.models.document import Document  # noqa: TC001
from sitecms.models.redirect import Redirect

logger = logging.getLogger(__name__)


async def record_slug_change(
    document: Document,
    old_slug: str | None,
    db: AsyncSession,
    config: LocaleConfig,
) -> Redirect | None:
    """Add a redirect from the old localized path to the new one.

    Nothing is recorded for drafts, non-localized documents, or when the path
    did not change. Existing redirects that pointed at the old path are
    re-targeted to the new one, and an active redirect whose source is the
    new path is deactivated since that path now serves content again.
    The caller commits.
    """
    if document.is_draft or not document.is_localized or not old_slug or old_slug == document.slug:
        return None
    if not config.is_supported(document.locale):
        return None

    source = localized_pathname(document.doc_type, document.locale, old_slug, config)
    destination = localized_pathname(document.doc_type, document.locale, document.slug, config)
    if source == destination:
        return None

    result = await db.execute(select(Redirect).where(Redirect.active.is_(True), Redirect.source == destination))
    for stale in result.scalars().all():
        logger.info("Deactivating redirect %s -> %s, path is live again", stale.source, stale.destination)
        stale.active = False
    await db.flush()

    result = await db.execute(select(Redirect).where(Redirect.active.is_(True), Redirect.destination == source))
    for chained in result.scalars().all():
        chained.destination = destination
    await db.flush()

    result = await db.execute(select(Redirect).where(Redirect.active.is_(True), Redirect.source == source))
    existing = result.scalars().first()
    if existing is not None:
        existing.destination = destination
        logger.info("Redirect updated: %s -> %s", source, destination)
        return existing

    redirect = Redirect(source=source, destination=destination, permanent=True, active=True, document_id=document.id)
    db.add(redirect)
    logger.info("Redirect created: %s -> %s (document %s)", source, destination, document.id)
    return redirect


async def list_active_redirects(db: AsyncSession) -> list[Redirect]:
    result = await db.execute(select(Redirect).where(Redirect.active.is_(True)).order_by(Redirect.id))
    return list(result.scalars().all())
