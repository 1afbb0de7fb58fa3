"""
Pytest configuration and fixtures for the site CMS tests
"""

import os
import sys
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

import sitecms.models  # noqa: E402, F401
from sitecms.database import Base, get_db  # noqa: E402
from sitecms.i18n.locale_config import LocaleConfig  # noqa: E402
from sitecms.models.document import Document, new_document_id  # noqa: E402
from sitecms.models.translation_group import TranslationGroup, TranslationGroupEntry  # noqa: E402

# In-memory SQLite shared by every connection of one test engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def locale_config() -> LocaleConfig:
    return LocaleConfig()


@pytest.fixture(scope="function")
async def test_engine():
    """Fresh in-memory database per test function."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory, locale_config) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to an app whose sessions use the test database."""
    from main import create_app

    app = create_app(locale_config)

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_document(test_db: AsyncSession):
    """Insert a document row directly, bypassing service validation."""

    async def _make(
        doc_type: str = "article",
        locale: str | None = "fr",
        slug: str | None = None,
        *,
        id: str | None = None,
        title: str = "Untitled",
        order_rank: str | None = None,
        payload: dict | None = None,
    ) -> Document:
        document = Document(
            id=id or new_document_id(),
            doc_type=doc_type,
            locale=locale,
            slug=slug,
            title=title,
            payload=payload or {},
            order_rank=order_rank,
        )
        test_db.add(document)
        await test_db.commit()
        await test_db.refresh(document)
        return document

    return _make


@pytest.fixture
def link_group(test_db: AsyncSession):
    """Put the given documents (or ``(locale, document_id)`` pairs) in one translation group."""

    async def _link(*members, group_id: str | None = None) -> TranslationGroup:
        pairs = [m if isinstance(m, tuple) else (m.locale, m.id) for m in members]
        group = TranslationGroup(id=group_id or f"{pairs[0][1]}.__i18n")
        for locale, document_id in pairs:
            group.entries.append(TranslationGroupEntry(locale=locale, document_id=document_id))
        test_db.add(group)
        await test_db.commit()
        return group

    return _link
