"""SQLAlchemy implementation of VectorIndex — pgvector-powered vector search."""

import logging
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from admissions_rag.application.interfaces.vector_index import VectorIndex, VectorSearchResult
from admissions_rag.domain.entities.document_chunk import DocumentChunk
from admissions_rag.domain.exceptions import DimensionMismatchError, ValidationError
from admissions_rag.infrastructure.database.errors import storage_errors
from admissions_rag.infrastructure.database.models import (
    DocumentChunkModel,
    VECTOR_COLUMN_DIMENSIONS,
)

logger = logging.getLogger(__name__)


class PgVectorIndex(VectorIndex):
    """Concrete vector index backed by PostgreSQL + pgvector.

    Only chunks embedded by ``embedding_model`` are searched, so vectors
    from another provider in the same table are never mixed into results.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        dimensions: int,
        embedding_model: str,
    ):
        if dimensions != VECTOR_COLUMN_DIMENSIONS:
            raise DimensionMismatchError(
                VECTOR_COLUMN_DIMENSIONS, dimensions, context="configured embedding dimensions"
            )
        self._session_factory = session_factory
        self._dimensions = dimensions
        self._embedding_model = embedding_model

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _check(self, vector: list[float], context: str) -> None:
        if len(vector) != self._dimensions:
            raise DimensionMismatchError(self._dimensions, len(vector), context=context)

    @storage_errors
    async def upsert(self, chunk_id: str, vector: list[float], payload: dict[str, Any]) -> None:
        self._check(vector, f"chunk {chunk_id}")
        row = {
            "chunk_key": chunk_id,
            "document_id": str(payload["document_id"]),
            "chunk_index": int(payload["chunk_index"]),
            "content": str(payload["content"]),
            "embedding_model": str(payload.get("embedding_model") or self._embedding_model),
            "embedding": vector,
        }
        await self._write_rows([row])

    @storage_errors
    async def upsert_many(self, chunks: list[DocumentChunk]) -> None:
        """Persist a batch of chunks in a single transaction."""
        if not chunks:
            return
        for chunk in chunks:
            self._check(chunk.embedding, f"chunk {chunk.id}")

        rows = [
            {
                "chunk_key": chunk.id,
                "document_id": chunk.document_id,
                "chunk_index": chunk.chunk_index,
                "content": chunk.content,
                "embedding_model": chunk.embedding_model or self._embedding_model,
                "embedding": chunk.embedding,
            }
            for chunk in chunks
        ]
        await self._write_rows(rows)
        logger.info("Stored %d chunks for document %s", len(rows), chunks[0].document_id)

    async def _write_rows(self, rows: list[dict[str, Any]]) -> None:
        stmt = insert(DocumentChunkModel).values(rows)
        stmt = stmt.on_conflict_do_update(
            index_elements=[DocumentChunkModel.chunk_key],
            set_={
                "content": stmt.excluded.content,
                "embedding": stmt.excluded.embedding,
                "embedding_model": stmt.excluded.embedding_model,
            },
        )
        async with self._session_factory() as session:
            async with session.begin():
                await session.execute(stmt)

    @storage_errors
    async def remove(self, document_id: str) -> int:
        """Delete all chunks belonging to a document."""
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    delete(DocumentChunkModel).where(
                        DocumentChunkModel.document_id == document_id
                    )
                )
        count = result.rowcount
        if count > 0:
            logger.info("Deleted %d chunks for document %s", count, document_id)
        return count

    @storage_errors
    async def search(self, query_vector: list[float], top_k: int) -> list[VectorSearchResult]:
        """Find chunks most similar to the query vector using cosine similarity.

        1 - (embedding <=> query) gives cosine similarity; ties fall back to
        the auto-increment id, i.e. insertion order.
        """
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k <= 0:
            raise ValidationError("top_k", f"must be a positive integer, got {top_k!r}")
        self._check(query_vector, "query vector")

        similarity_expr = (
            1 - DocumentChunkModel.embedding.cosine_distance(query_vector)
        ).label("similarity")

        query = (
            select(
                DocumentChunkModel.chunk_key,
                DocumentChunkModel.document_id,
                DocumentChunkModel.chunk_index,
                DocumentChunkModel.content,
                DocumentChunkModel.embedding_model,
                similarity_expr,
            )
            .where(DocumentChunkModel.embedding_model == self._embedding_model)
            .order_by(similarity_expr.desc(), DocumentChunkModel.id.asc())
            .limit(top_k)
        )

        async with self._session_factory() as session:
            result = await session.execute(query)
            rows = result.all()

        return [
            VectorSearchResult(
                chunk_id=row.chunk_key,
                document_id=row.document_id,
                chunk_index=row.chunk_index,
                content=row.content,
                similarity=float(row.similarity),
                payload={"embedding_model": row.embedding_model},
            )
            for row in rows
        ]

    @storage_errors
    async def count(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(DocumentChunkModel).where(
                    DocumentChunkModel.embedding_model == self._embedding_model
                )
            )
            return int(result.scalar_one())
