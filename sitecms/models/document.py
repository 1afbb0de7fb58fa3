"""
Document model

One row per version of one piece of content in one locale. Draft versions
share the published id with a ``drafts.`` prefix. Localized types carry a
locale code that never changes after creation; non-localized types leave
it NULL.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Index, String

from sitecms.database import Base
from sitecms.i18n.content_types import ContentType, is_localized

DRAFTS_PREFIX = "drafts."


def new_document_id() -> str:
    return uuid.uuid4().hex


def get_published_id(document_id: str) -> str:
    return document_id[len(DRAFTS_PREFIX):] if document_id.startswith(DRAFTS_PREFIX) else document_id


def get_draft_id(document_id: str) -> str:
    return f"{DRAFTS_PREFIX}{get_published_id(document_id)}"


def is_draft_id(document_id: str) -> bool:
    return document_id.startswith(DRAFTS_PREFIX)


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(128), primary_key=True, default=new_document_id)
    doc_type = Column(String(32), nullable=False, index=True)
    locale = Column(String(10), nullable=True)
    slug = Column(String(255), nullable=True)
    title = Column(String(255), nullable=False, default="")
    payload = Column(JSON, nullable=False, default=dict)
    # Manual rank for ordered collections (lexicographically sortable string)
    order_rank = Column(String(64), nullable=True)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_documents_slug_locale", "slug", "locale"),
        Index("idx_documents_type_locale", "doc_type", "locale"),
    )

    @property
    def content_type(self) -> ContentType:
        return ContentType(self.doc_type)

    @property
    def is_localized(self) -> bool:
        return is_localized(self.doc_type)

    @property
    def published_id(self) -> str:
        return get_published_id(self.id)

    @property
    def is_draft(self) -> bool:
        return is_draft_id(self.id)

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, type={self.doc_type}, locale={self.locale}, slug={self.slug})>"
