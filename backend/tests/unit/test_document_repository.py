"""Unit tests for the SQLAlchemy document repository on an in-memory SQLite database."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from admissions_rag.domain.entities import Document, DocumentCategory
from admissions_rag.domain.exceptions import UpstreamUnavailableError
from admissions_rag.infrastructure.database.models import DocumentModel
from admissions_rag.infrastructure.database.repositories import SQLAlchemyDocumentRepository


async def _repository() -> SQLAlchemyDocumentRepository:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        # The chunk table needs pgvector; documents alone are plain SQL.
        await conn.run_sync(DocumentModel.__table__.create)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return SQLAlchemyDocumentRepository(factory)


def _document(doc_id: str, minutes: int = 0) -> Document:
    return Document(
        id=doc_id,
        title=f"Document {doc_id}",
        content="Scholarship applications close in March.",
        category=DocumentCategory.ACADEMIC_POLICY,
        chunk_count=2,
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes),
    )


@pytest.mark.asyncio
async def test_create_and_get_round_trip():
    repo = await _repository()
    await repo.create(_document("a"))

    stored = await repo.get_by_id("a")

    assert stored is not None
    assert stored.title == "Document a"
    assert stored.category == DocumentCategory.ACADEMIC_POLICY
    assert stored.chunk_count == 2
    assert await repo.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_list_all_is_newest_first():
    repo = await _repository()
    await repo.create(_document("old", minutes=0))
    await repo.create(_document("new", minutes=5))

    assert [d.id for d in await repo.list_all()] == ["new", "old"]


@pytest.mark.asyncio
async def test_existing_ids_filters_unknown_ids():
    repo = await _repository()
    await repo.create(_document("a"))
    await repo.create(_document("b"))

    assert await repo.existing_ids({"a", "b", "c"}) == {"a", "b"}
    assert await repo.existing_ids(set()) == set()


@pytest.mark.asyncio
async def test_delete_reports_whether_a_row_was_removed():
    repo = await _repository()
    await repo.create(_document("a"))

    assert await repo.delete("a") is True
    assert await repo.delete("a") is False
    assert await repo.get_by_id("a") is None


@pytest.mark.asyncio
async def test_unreachable_database_surfaces_as_upstream_unavailable(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'documents.db'}")
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    repo = SQLAlchemyDocumentRepository(factory)

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await repo.list_all()
    assert exc_info.value.service == "storage"
    assert exc_info.value.retryable is True

    with pytest.raises(UpstreamUnavailableError):
        await repo.create(_document("a"))

    await engine.dispose()
