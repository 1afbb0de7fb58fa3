"""
Document & Translation Routes

documents_router  (prefix: /api/v1/documents)
    POST   /                                  → create document
    GET    /                                  → list documents (type / locale filter)
    GET    /slug-suggestion                   → slug suggested for a title
    POST   /slug-check                        → slug uniqueness check
    GET    /{document_id}                     → get document
    PATCH  /{document_id}                     → update document
    DELETE /{document_id}                     → delete document
    POST   /{document_id}/reorder             → set manual rank
    GET    /{document_id}/translations        → list translation siblings
    POST   /{document_id}/translations/link   → link an existing document
    POST   /{document_id}/translations/{locale} → create translation
    GET    /{document_id}/orphaned            → orphan status

Static paths are declared before the ``/{document_id}`` routes.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from sitecms.config import settings
from sitecms.database import get_db
from sitecms.exceptions import ValidationError
from sitecms.i18n.content_types import ContentType
from sitecms.i18n.locale_config import LocaleConfig  # noqa: TC001
from sitecms.i18n.locale_map import TranslationItem  # noqa: TC001
from sitecms.i18n.pathnames import internal_link_href, routable_pathname
from sitecms.models.document import Document
from sitecms.routes.dependencies import get_locale_config
from sitecms.schemas.documents import (
    DocumentResponse,
    DocumentUpdate,
    DocumentVariant,
    OrphanStatusResponse,
    ReorderRequest,
    SlugCheckRequest,
    SlugCheckResponse,
    TranslationCreate,
    TranslationItemResponse,
    TranslationLink,
)
from sitecms.services import consistency_service, document_service, slug_service, translation_service
from sitecms.utils.slugify import generate_slug

documents_router = APIRouter(prefix="/api/v1/documents", tags=["Documents"])
logger = logging.getLogger(__name__)


def _item_response(item: TranslationItem, config: LocaleConfig) -> TranslationItemResponse:
    return TranslationItemResponse(
        document_id=item.document_id,
        content_type=item.content_type.value,
        locale=item.locale,
        slug=item.slug,
        title=item.title,
        path=routable_pathname(item.content_type, item.locale, item.slug, config),
        href=internal_link_href(item.slug, item.content_type, item.locale, config),
    )


@documents_router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document_route(
    data: Annotated[DocumentVariant, Body(discriminator="doc_type")],
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> Document:
    return await document_service.create_document(data, db, config)


@documents_router.get("", response_model=list[DocumentResponse])
async def list_documents_route(
    doc_type: ContentType | None = Query(None),
    locale: str | None = Query(None),
    include_legacy: bool = Query(False, description="Also return documents stored without a locale."),
    db: AsyncSession = Depends(get_db),
) -> list[Document]:
    return await document_service.list_documents(db, doc_type, locale, include_legacy=include_legacy)


@documents_router.get("/slug-suggestion")
async def slug_suggestion_route(
    title: str = Query(..., min_length=1),
    doc_type: ContentType = Query(...),
) -> dict[str, str]:
    try:
        return {"slug": generate_slug(title, doc_type)}
    except ValueError as e:
        raise ValidationError(str(e), field="title") from e


@documents_router.post("/slug-check", response_model=SlugCheckResponse)
async def slug_check_route(
    payload: SlugCheckRequest,
    db: AsyncSession = Depends(get_db),
) -> SlugCheckResponse:
    """Editor-side uniqueness check; the document being edited is excluded."""
    slug = document_service.normalize_slug(payload.slug)
    is_unique = await slug_service.check_slug(
        slug,
        payload.doc_type.value,
        db,
        locale=payload.locale,
        document_id=payload.document_id,
    )
    return SlugCheckResponse(slug=slug, is_unique=is_unique)


@documents_router.get("/{document_id}", response_model=DocumentResponse)
async def get_document_route(document_id: str, db: AsyncSession = Depends(get_db)) -> Document:
    return await document_service.get_document(document_id, db)


@documents_router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document_route(
    document_id: str,
    updates: DocumentUpdate,
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> Document:
    return await document_service.update_document(
        document_id,
        updates,
        db,
        config,
        auto_redirect=settings.auto_redirect_on_slug_change,
    )


@documents_router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document_route(document_id: str, db: AsyncSession = Depends(get_db)) -> None:
    await document_service.delete_document(document_id, db)


@documents_router.post("/{document_id}/reorder", response_model=DocumentResponse)
async def reorder_document_route(
    document_id: str,
    payload: ReorderRequest,
    db: AsyncSession = Depends(get_db),
) -> Document:
    return await consistency_service.reorder_document(document_id, payload.order_rank, db)


@documents_router.get("/{document_id}/translations", response_model=list[TranslationItemResponse])
async def list_translations_route(
    document_id: str,
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> list[TranslationItemResponse]:
    items = await translation_service.resolve_translations(document_id, db)
    return [_item_response(item, config) for item in items]


@documents_router.post("/{document_id}/translations/link", response_model=list[TranslationItemResponse])
async def link_translation_route(
    document_id: str,
    payload: TranslationLink,
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> list[TranslationItemResponse]:
    items = await translation_service.link_translation(document_id, payload.document_id, db, config)
    return [_item_response(item, config) for item in items]


@documents_router.post(
    "/{document_id}/translations/{locale}",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_translation_route(
    document_id: str,
    locale: str,
    payload: TranslationCreate | None = None,
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> Document:
    """Copy a document into ``locale`` and link both versions."""
    payload = payload or TranslationCreate()
    return await translation_service.create_translation(
        document_id,
        locale,
        db,
        config,
        slug=payload.slug,
        title=payload.title,
    )


@documents_router.get("/{document_id}/orphaned", response_model=OrphanStatusResponse)
async def orphan_status_route(
    document_id: str,
    db: AsyncSession = Depends(get_db),
    config: LocaleConfig = Depends(get_locale_config),
) -> OrphanStatusResponse:
    document = await document_service.get_document(document_id, db)
    return OrphanStatusResponse(
        document_id=document.id,
        locale=document.locale,
        is_orphaned=await consistency_service.is_orphaned(document, db, config),
    )
