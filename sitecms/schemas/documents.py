"""
Document schemas

Request bodies are a tagged union over the closed set of content types,
discriminated by ``doc_type``. Each variant states exactly which fields
it carries: localized types require ``locale``, slug-less types have no
``slug`` field, only orderable types accept ``order_rank``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from sitecms.i18n.content_types import ContentType


class _DocumentBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str | None = Field(None, description="Optional explicit document id; generated when omitted.")
    title: str = Field(..., min_length=1, max_length=255)
    payload: dict[str, Any] = Field(default_factory=dict, description="Type-specific content fields.")


class PageDocument(_DocumentBase):
    doc_type: Literal["page"] = "page"
    locale: str
    slug: str = Field(..., min_length=1)


class ArticleDocument(_DocumentBase):
    doc_type: Literal["article"] = "article"
    locale: str
    slug: str = Field(..., min_length=1)
    order_rank: str | None = Field(None, description="Manual rank inside the article list.")


class ArticleIndexDocument(_DocumentBase):
    doc_type: Literal["article_index"] = "article_index"
    locale: str


class HomePageDocument(_DocumentBase):
    doc_type: Literal["home_page"] = "home_page"
    locale: str


class SettingsDocument(_DocumentBase):
    doc_type: Literal["settings"] = "settings"


class AuthorDocument(_DocumentBase):
    doc_type: Literal["author"] = "author"
    slug: str = Field(..., min_length=1)


DocumentVariant = Union[
    PageDocument,
    ArticleDocument,
    ArticleIndexDocument,
    HomePageDocument,
    SettingsDocument,
    AuthorDocument,
]

DocumentCreate = Annotated[DocumentVariant, Field(discriminator="doc_type")]

document_create_adapter: TypeAdapter[DocumentCreate] = TypeAdapter(DocumentCreate)


class DocumentUpdate(BaseModel):
    """Partial update. The locale and type of a document cannot change."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1)
    payload: dict[str, Any] | None = None


class ReorderRequest(BaseModel):
    order_rank: str | None = Field(
        ...,
        description="Lexorank-style rank compared as a string (\"a10\" < \"a9\"); null drops manual ordering.",
    )


class TranslationCreate(BaseModel):
    slug: str | None = Field(None, description="Slug for the new locale; defaults to the source slug.")
    title: str | None = Field(None, description="Title for the new locale; defaults to the source title.")


class TranslationLink(BaseModel):
    document_id: str = Field(..., description="Existing document to attach to this document's translation group.")


class SlugCheckRequest(BaseModel):
    slug: str = Field(..., min_length=1)
    document_id: str | None = None
    doc_type: ContentType
    locale: str | None = None


class SlugCheckResponse(BaseModel):
    slug: str
    is_unique: bool


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    doc_type: str
    locale: str | None
    slug: str | None
    title: str
    payload: dict[str, Any]
    order_rank: str | None
    created_at: datetime
    updated_at: datetime


class TranslationItemResponse(BaseModel):
    document_id: str
    content_type: str
    locale: str
    slug: str | None
    title: str
    path: str | None = None
    href: str = "#"


class OrphanStatusResponse(BaseModel):
    document_id: str
    locale: str | None
    is_orphaned: bool
