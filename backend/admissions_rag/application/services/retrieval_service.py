"""Retrieval service — ingests documents into the vector index and answers questions with context.

Write path: validate → chunk → embed (all chunks) → commit chunks → commit document.
Read path:  embed question → vector search → drop chunks of invisible documents → join.

The document record is the commit point: a document becomes visible only once
every chunk is stored, and chunks whose document record does not exist are
never returned. A failure after chunks were written removes them again.
"""

import asyncio
import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from admissions_rag.application.interfaces.document_repository import DocumentRepository
from admissions_rag.application.interfaces.vector_index import VectorIndex, VectorSearchResult
from admissions_rag.application.services.embedding_service import EmbeddingService
from admissions_rag.application.services.text_chunker import TextChunker
from admissions_rag.domain.entities import (
    NO_RELEVANT_INFORMATION,
    Document,
    DocumentCategory,
    DocumentChunk,
    RetrievedChunk,
)
from admissions_rag.domain.exceptions import (
    DimensionMismatchError,
    EntityNotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)
from admissions_rag.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("RetrievalService")

_MAX_TITLE_LENGTH = 255
_CONTEXT_SEPARATOR = "\n\n"


@dataclass
class _LockEntry:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    holders: int = 0


class RetrievalService:
    """Application service for document ingestion and similarity retrieval.

    One instance lives for the whole process; it is built once by the
    dependency wiring and injected wherever it is needed.
    """

    def __init__(
        self,
        document_repository: DocumentRepository,
        vector_index: VectorIndex,
        embedding_service: EmbeddingService,
        *,
        chunker: TextChunker | None = None,
        min_similarity: float | None = None,
        default_top_k: int = 5,
        ingest_timeout_seconds: float = 120.0,
        query_timeout_seconds: float = 30.0,
    ):
        if embedding_service.dimensions != vector_index.dimensions:
            raise DimensionMismatchError(
                vector_index.dimensions,
                embedding_service.dimensions,
                context="embedding provider",
            )
        self._documents = document_repository
        self._index = vector_index
        self._embeddings = embedding_service
        self._chunker = chunker or TextChunker()
        self._min_similarity = min_similarity
        self._default_top_k = default_top_k
        self._ingest_timeout = ingest_timeout_seconds
        self._query_timeout = query_timeout_seconds
        self._document_locks: dict[str, _LockEntry] = {}

    @property
    def embedding_service(self) -> EmbeddingService:
        return self._embeddings

    # ── Write path ──────────────────────────────────────────────────

    async def add_document(
        self,
        title: str,
        content: str,
        category: DocumentCategory | str,
    ) -> str:
        """Chunk, embed and index a document. Returns the new document id.

        Raises:
            ValidationError: Blank title/content or unknown category.
            UpstreamUnavailableError: Embedding or storage failed or timed out; nothing
                is left behind in the index.
        """
        title, content, category = _validate_document(title, content, category)
        document_id = str(uuid.uuid4())
        start = time.monotonic()

        plog.step_start(PipelineStage.PIPELINE, f"Ingesting '{title}'", category=category.value)

        async with self._locked(document_id):
            with plog.timed_step(PipelineStage.CHUNK, "Splitting content"):
                spans = self._chunker.chunk(content)
                plog.detail(
                    f"{len(spans)} chunks",
                    size=self._chunker.chunk_size,
                    overlap=self._chunker.overlap,
                )

            with plog.timed_step(PipelineStage.EMBED, f"Embedding {len(spans)} chunks"):
                vectors = await self._with_timeout(
                    self._embeddings.embed_texts(spans),
                    self._ingest_timeout,
                    "ingest",
                )

            chunks = [
                DocumentChunk(
                    document_id=document_id,
                    chunk_index=i,
                    content=span,
                    embedding=vector,
                    embedding_model=self._embeddings.model_name,
                )
                for i, (span, vector) in enumerate(zip(spans, vectors, strict=True))
            ]
            document = Document(
                id=document_id,
                title=title,
                content=content,
                category=category,
                chunk_count=len(chunks),
            )

            with plog.timed_step(PipelineStage.INDEX, "Committing chunks and document"):
                try:
                    await self._with_timeout(
                        self._commit(chunks, document),
                        self._ingest_timeout,
                        "commit",
                        service="storage",
                    )
                except Exception as exc:
                    plog.step_error(PipelineStage.ERROR, "Rolling back partial ingest", error=exc)
                    await self._rollback(document_id)
                    raise

        duration_ms = int((time.monotonic() - start) * 1000)
        plog.step_complete(
            PipelineStage.COMPLETE,
            f"Document {document_id} indexed",
            chunks=len(chunks),
            duration_ms=duration_ms,
        )
        return document_id

    async def delete_document(self, document_id: str) -> bool:
        """Remove a document and all of its chunks.

        Deleting an unknown id is a no-op that returns False.
        """
        async with self._locked(document_id):
            existed = await self._documents.delete(document_id)
            removed = await self._index.remove(document_id)

        if not existed:
            plog.warning(f"Document {document_id} not found — nothing to delete")
            return False

        plog.step_complete(PipelineStage.DELETE, f"Document {document_id} deleted", chunks=removed)
        return True

    # ── Read path ───────────────────────────────────────────────────

    async def query(self, question: str, top_k: int | None = None) -> str:
        """Return the context string for ``question``.

        Chunk texts are joined by a blank line in descending similarity.
        Returns ``NO_RELEVANT_INFORMATION`` when the index is empty or no
        chunk clears the similarity threshold.
        """
        results = await self.retrieve(question, top_k=top_k)
        if not results:
            return NO_RELEVANT_INFORMATION
        return _CONTEXT_SEPARATOR.join(r.content for r in results)

    async def retrieve(self, question: str, top_k: int | None = None) -> list[RetrievedChunk]:
        """Return the ``top_k`` most similar chunks with their document metadata."""
        top_k = self._default_top_k if top_k is None else top_k
        if not isinstance(question, str) or not question.strip():
            raise ValidationError("question", "must not be empty")
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k <= 0:
            raise ValidationError("top_k", f"must be a positive integer, got {top_k!r}")

        plog.step_start(PipelineStage.QUERY, "Retrieving context", top_k=top_k)
        hits = await self._with_timeout(
            self._search(question.strip(), top_k),
            self._query_timeout,
            "query",
        )

        if self._min_similarity is not None:
            hits = [h for h in hits if h.similarity >= self._min_similarity]
        if not hits:
            plog.detail("No relevant chunks")
            return []

        documents = {}
        for document_id in {h.document_id for h in hits}:
            document = await self._documents.get_by_id(document_id)
            if document is not None:
                documents[document_id] = document

        retrieved = [
            RetrievedChunk(
                document_id=h.document_id,
                document_title=documents[h.document_id].title,
                category=documents[h.document_id].category,
                chunk_index=h.chunk_index,
                content=h.content,
                similarity=h.similarity,
            )
            for h in hits
            if h.document_id in documents
        ]
        plog.detail(f"{len(retrieved)} chunks retrieved")
        return retrieved

    async def list_documents(self) -> list[Document]:
        """All active documents, newest first."""
        return await self._documents.list_all()

    async def get_document(self, document_id: str) -> Document:
        document = await self._documents.get_by_id(document_id)
        if document is None:
            raise EntityNotFoundError("Document", document_id)
        return document

    # ── Internals ───────────────────────────────────────────────────

    async def _search(self, question: str, top_k: int) -> list[VectorSearchResult]:
        if await self._index.count() == 0:
            return []
        query_vector = await self._embeddings.embed_query(question)

        # Chunks of documents that are mid-ingest or mid-delete are dropped;
        # widen the search by that many so they do not cost visible results.
        limit = top_k
        while True:
            hits = await self._index.search(query_vector, limit)
            visible_ids = await self._documents.existing_ids({h.document_id for h in hits})
            visible = [h for h in hits if h.document_id in visible_ids]
            if len(visible) >= top_k or len(hits) < limit:
                return visible[:top_k]
            limit += len(hits) - len(visible)

    async def _commit(self, chunks: list[DocumentChunk], document: Document) -> None:
        await self._index.upsert_many(chunks)
        await self._documents.create(document)

    async def _with_timeout(
        self, awaitable, timeout: float, operation: str, *, service: str = "embedding"
    ):
        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)
        except asyncio.TimeoutError as exc:
            logger.error("%s exceeded %.1fs waiting for %s", operation, timeout, service)
            raise UpstreamUnavailableError(
                service, f"{operation} timed out after {timeout:g}s"
            ) from exc

    async def _rollback(self, document_id: str) -> None:
        try:
            await self._documents.delete(document_id)
        finally:
            removed = await self._index.remove(document_id)
            logger.warning("Rolled back document %s (%d chunks removed)", document_id, removed)

    @asynccontextmanager
    async def _locked(self, document_id: str) -> AsyncIterator[None]:
        """Serialise mutations of one document id; other ids run concurrently."""
        entry = self._document_locks.get(document_id)
        if entry is None:
            entry = self._document_locks[document_id] = _LockEntry()
        entry.holders += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.holders -= 1
            if entry.holders == 0:
                del self._document_locks[document_id]


def _validate_document(
    title: str, content: str, category: DocumentCategory | str
) -> tuple[str, str, DocumentCategory]:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("title", "must not be empty")
    if len(title.strip()) > _MAX_TITLE_LENGTH:
        raise ValidationError("title", f"must be at most {_MAX_TITLE_LENGTH} characters")
    if not isinstance(content, str) or not content.strip():
        raise ValidationError("content", "must not be empty")
    try:
        category = DocumentCategory(category)
    except ValueError:
        allowed = ", ".join(c.value for c in DocumentCategory)
        raise ValidationError("category", f"{category!r} is not one of: {allowed}") from None
    return title.strip(), content, category
