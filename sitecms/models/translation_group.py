"""
Translation group models

A TranslationGroup links the documents that are "the same content" in
different locales, one entry per locale. Entries reference documents by
id without a foreign key: deleting a document leaves its entry behind
(a dangling reference), and readers drop such entries.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from sitecms.database import Base


class TranslationGroup(Base):
    __tablename__ = "translation_groups"

    id = Column(String(160), primary_key=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    entries = relationship(
        "TranslationGroupEntry",
        back_populates="group",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="TranslationGroupEntry.id",
    )

    def entry_for(self, locale: str) -> TranslationGroupEntry | None:
        return next((e for e in self.entries if e.locale == locale), None)

    def __repr__(self) -> str:
        return f"<TranslationGroup(id={self.id}, locales={[e.locale for e in self.entries]})>"


class TranslationGroupEntry(Base):
    __tablename__ = "translation_group_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(
        String(160),
        ForeignKey("translation_groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    locale = Column(String(10), nullable=False)
    # Published document id; intentionally not a foreign key
    document_id = Column(String(128), nullable=False)

    group = relationship("TranslationGroup", back_populates="entries")

    __table_args__ = (
        # One entry per (group, locale) and each document in at most one group
        UniqueConstraint("group_id", "locale", name="uq_translation_group_locale"),
        UniqueConstraint("document_id", name="uq_translation_group_document"),
    )

    def __repr__(self) -> str:
        return f"<TranslationGroupEntry(group={self.group_id}, locale={self.locale}, document={self.document_id})>"
