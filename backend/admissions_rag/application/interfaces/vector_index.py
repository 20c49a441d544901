"""Abstract interface (port) for chunk storage and similarity search."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from admissions_rag.domain.entities.document_chunk import DocumentChunk


@dataclass
class VectorSearchResult:
    """A single result from a vector similarity search."""

    chunk_id: str
    document_id: str
    chunk_index: int
    content: str
    similarity: float  # -1.0 – 1.0 (cosine similarity)
    payload: dict[str, Any] = field(default_factory=dict)


class VectorIndex(ABC):
    """Port for (chunk, vector) persistence and top-K nearest-neighbour search."""

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Dimension shared by every vector in this index."""
        ...

    @abstractmethod
    async def upsert(self, chunk_id: str, vector: list[float], payload: dict[str, Any]) -> None:
        """Insert or replace a single chunk.

        ``payload`` must carry ``document_id``, ``chunk_index`` and ``content``.
        """
        ...

    @abstractmethod
    async def upsert_many(self, chunks: list[DocumentChunk]) -> None:
        """Persist a batch of chunks so that all become visible at once, or none."""
        ...

    @abstractmethod
    async def remove(self, document_id: str) -> int:
        """Delete all chunks of a document. Returns count of deleted chunks."""
        ...

    @abstractmethod
    async def search(self, query_vector: list[float], top_k: int) -> list[VectorSearchResult]:
        """Find chunks most similar to the query vector.

        Returns:
            At most ``top_k`` results ordered by descending similarity;
            equal similarities keep insertion order.
        """
        ...

    @abstractmethod
    async def count(self) -> int:
        """Number of chunks currently stored."""
        ...
