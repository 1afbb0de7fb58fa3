from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from sitecms.database import Base


class Redirect(Base):
    """Path redirect recorded when a document's localized path changes."""

    __tablename__ = "redirects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source = Column(String(512), nullable=False, index=True)
    destination = Column(String(512), nullable=False)
    permanent = Column(Boolean, nullable=False, default=True)
    active = Column(Boolean, nullable=False, default=True)
    document_id = Column(String(128), nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"<Redirect({self.source} -> {self.destination}, active={self.active})>"
