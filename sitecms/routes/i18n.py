"""
Internationalization Routes

i18n_router  (prefix: /api/v1/i18n)
    GET    /languages                 → supported languages, default flagged
    GET    /locale-map                → bidirectional path → translations map
    GET    /switch?path=&locale=      → switcher target for one locale
    GET    /switcher?path=            → switcher options for every locale
    GET    /orphans                   → documents lacking a default-locale sibling
    GET    /collections/{doc_type}    → locale-filtered collection in effective order

maintenance_router  (prefix: /api/v1/i18n/maintenance)
    POST   /backfill                  → create missing target-locale versions
    POST   /assign-default-locale     → tag legacy documents with the default locale
    POST   /prune                     → remove dangling translation group entries

The locale map is rebuilt from a fresh snapshot on every request.
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from sitecms.database import get_db
from sitecms.i18n.content_types import ContentType
from sitecms.i18n.locale import get_language_info
from sitecms.i18n.locale_config import LocaleConfig  # noqa: TC001
from sitecms.i18n.locale_map import LocaleMap, build_map
from sitecms.i18n.ordering import effective_order
from sitecms.i18n.pathnames import routable_pathname
from sitecms.i18n.switcher import LanguageSwitcher
from sitecms.routes.dependencies import get_locale_config, get_request_locale
from sitecms.schemas.documents import OrphanStatusResponse
from sitecms.schemas.i18n import (
    CollectionItemResponse,
    LanguageInfo,
    MigrationReportResponse,
    SwitcherOptionResponse,
    SwitchTargetResponse,
)
from sitecms.services import backfill_service, consistency_service, translation_service

i18n_router = APIRouter(prefix="/api/v1/i18n", tags=["Internationalization"])
maintenance_router = APIRouter(prefix="/api/v1/i18n/maintenance", tags=["Maintenance"])
logger = logging.getLogger(__name__)


async def _current_locale_map(db: AsyncSession, config: LocaleConfig) -> LocaleMap:
    records = await translation_service.fetch_locale_snapshot(db, config)
    return build_map(records, config)


def _report_response(report: backfill_service.MigrationReport) -> MigrationReportResponse:
    return MigrationReportResponse(
        source_locale=report.source_locale,
        target_locale=report.target_locale,
        dry_run=report.dry_run,
        processed=report.processed,
        created=report.created,
        skipped=report.skipped,
        errors=report.errors,
        messages=report.messages,
    )


@i18n_router.get("/languages", response_model=list[LanguageInfo])
async def list_languages(config: LocaleConfig = Depends(get_locale_config)) -> list[LanguageInfo]:
    """Supported languages in configured order (public)."""
    return [
        LanguageInfo(**get_language_info(code), is_default=code == config.default_locale)
        for code in config.locales
    ]


@i18n_router.get("/locale-map")
async def get_locale_map(
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> dict:
    locale_map = await _current_locale_map(db, config)
    return locale_map.to_dict()


@i18n_router.get("/switch", response_model=SwitchTargetResponse)
async def switch_locale(
    path: str = Query(..., description="Path currently displayed, locale prefix included."),
    locale: str = Query(..., description="Locale to switch to."),
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> SwitchTargetResponse:
    """Resolve where ``path`` lives in ``locale``; ``href`` is null for unsupported locales."""
    switcher = LanguageSwitcher(await _current_locale_map(db, config), config)
    return SwitchTargetResponse(
        path=path,
        locale=locale,
        href=switcher.resolve_target(path, locale),
        has_translation=switcher.has_translation(path, locale),
    )


@i18n_router.get("/switcher", response_model=list[SwitcherOptionResponse])
async def switcher(
    path: str = Query(...),
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> list[SwitcherOptionResponse]:
    options = LanguageSwitcher(await _current_locale_map(db, config), config).options(path)
    return [
        SwitcherOptionResponse(
            locale=option.locale,
            href=option.href,
            label=option.label,
            has_translation=option.has_translation,
            is_active=option.is_active,
        )
        for option in options
    ]


@i18n_router.get("/orphans", response_model=list[OrphanStatusResponse])
async def list_orphans(
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> list[OrphanStatusResponse]:
    orphans = await consistency_service.find_orphans(db, config)
    return [OrphanStatusResponse(document_id=doc.id, locale=doc.locale, is_orphaned=True) for doc in orphans]


@i18n_router.get("/collections/{doc_type}", response_model=list[CollectionItemResponse])
async def list_collection(
    doc_type: ContentType,
    locale: str | None = Query(None, description="Defaults to the request locale."),
    request_locale: str = Depends(get_request_locale),
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> list[CollectionItemResponse]:
    locale = locale or request_locale
    records = await consistency_service.list_collection(doc_type, locale, db, config)
    items = []
    for record in records:
        rank = effective_order(record, record.translations, config)
        items.append(
            CollectionItemResponse(
                document_id=record.document_id,
                title=record.title,
                slug=record.slug,
                path=routable_pathname(record.content_type, locale, record.slug, config),
                order_rank=None if record.order_rank is None else str(record.order_rank),
                effective_order=None if rank is None else str(rank),
            )
        )
    return items


@maintenance_router.post("/backfill", response_model=MigrationReportResponse)
async def backfill_locale(
    target: str = Query(..., description="Locale to create missing versions in."),
    source: str | None = Query(None, description="Locale to copy from; defaults to the default locale."),
    dry_run: bool = Query(True),
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> MigrationReportResponse:
    report = backfill_service.MigrationReport(source_locale=source or config.default_locale, target_locale=target)
    await backfill_service.backfill_locale_versions(db, config, report, dry_run=dry_run)
    return _report_response(report)


@maintenance_router.post("/assign-default-locale", response_model=MigrationReportResponse)
async def assign_default_locale(
    dry_run: bool = Query(True),
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> MigrationReportResponse:
    report = backfill_service.MigrationReport(source_locale="", target_locale=config.default_locale)
    await backfill_service.assign_default_locale(db, config, report, dry_run=dry_run)
    return _report_response(report)


@maintenance_router.post("/prune")
async def prune_dangling(db: AsyncSession = Depends(get_db)) -> dict[str, int]:
    removed = await translation_service.prune_dangling_entries(db)
    return {"removed": removed}
