"""In-memory implementation of VectorIndex — numpy cosine-similarity scan.

Chunks live for the process lifetime. Writers swap in new entry lists
under a lock; readers take a snapshot of the current list, so a search
never observes half of a batch.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any

import numpy as np

from admissions_rag.application.interfaces.vector_index import VectorIndex, VectorSearchResult
from admissions_rag.domain.entities.document_chunk import DocumentChunk
from admissions_rag.domain.exceptions import DimensionMismatchError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    chunk_id: str
    document_id: str
    sequence: int  # insertion order, used to break similarity ties
    vector: np.ndarray
    payload: dict[str, Any]


def cosine_similarity(a: list[float] | np.ndarray, b: list[float] | np.ndarray) -> float:
    """Cosine of the angle between two vectors; 0.0 if either has zero norm."""
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise DimensionMismatchError(va.shape[0], vb.shape[0])
    denom = np.linalg.norm(va) * np.linalg.norm(vb)
    if denom == 0:
        return 0.0
    return float(np.dot(va, vb) / denom)


class InMemoryVectorIndex(VectorIndex):
    """Concrete vector index backed by a Python list and numpy arithmetic."""

    def __init__(self, dimensions: int):
        if dimensions <= 0:
            raise ValueError(f"dimensions must be positive, got {dimensions}")
        self._dimensions = dimensions
        self._entries: list[_Entry] = []
        self._next_sequence = 0
        self._lock = threading.RLock()

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def upsert(self, chunk_id: str, vector: list[float], payload: dict[str, Any]) -> None:
        for key in ("document_id", "chunk_index", "content"):
            if key not in payload:
                raise ValidationError("payload", f"missing '{key}'")
        entry_vector = self._as_vector(vector, context=f"chunk {chunk_id}")
        with self._lock:
            self._entries = self._merged(
                [(chunk_id, str(payload["document_id"]), entry_vector, dict(payload))]
            )

    async def upsert_many(self, chunks: list[DocumentChunk]) -> None:
        if not chunks:
            return
        # Validate the whole batch before touching the store.
        prepared = [
            (
                chunk.id,
                chunk.document_id,
                self._as_vector(chunk.embedding, context=f"chunk {chunk.id}"),
                {
                    "document_id": chunk.document_id,
                    "chunk_index": chunk.chunk_index,
                    "content": chunk.content,
                    "embedding_model": chunk.embedding_model,
                },
            )
            for chunk in chunks
        ]
        with self._lock:
            self._entries = self._merged(prepared)
        logger.info("Stored %d chunks for document %s", len(prepared), chunks[0].document_id)

    async def remove(self, document_id: str) -> int:
        with self._lock:
            kept = [e for e in self._entries if e.document_id != document_id]
            count = len(self._entries) - len(kept)
            self._entries = kept
        if count > 0:
            logger.info("Deleted %d chunks for document %s", count, document_id)
        return count

    async def search(self, query_vector: list[float], top_k: int) -> list[VectorSearchResult]:
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k <= 0:
            raise ValidationError("top_k", f"must be a positive integer, got {top_k!r}")
        query = self._as_vector(query_vector, context="query vector")

        with self._lock:
            snapshot = self._entries
        if not snapshot:
            return []

        matrix = np.vstack([e.vector for e in snapshot])
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        dots = matrix @ query
        similarities = np.divide(dots, norms, out=np.zeros_like(dots), where=norms != 0)

        ranked = sorted(
            range(len(snapshot)),
            key=lambda i: (-similarities[i], snapshot[i].sequence),
        )[:top_k]

        return [
            VectorSearchResult(
                chunk_id=snapshot[i].chunk_id,
                document_id=snapshot[i].document_id,
                chunk_index=int(snapshot[i].payload["chunk_index"]),
                content=str(snapshot[i].payload["content"]),
                similarity=float(similarities[i]),
                payload=dict(snapshot[i].payload),
            )
            for i in ranked
        ]

    async def count(self) -> int:
        return len(self._entries)

    # ── Internals ───────────────────────────────────────────────────

    def _as_vector(self, values: list[float], *, context: str) -> np.ndarray:
        vector = np.asarray(values, dtype=np.float64)
        if vector.ndim != 1 or vector.shape[0] != self._dimensions:
            actual = vector.shape[0] if vector.ndim == 1 else vector.size
            raise DimensionMismatchError(self._dimensions, actual, context=context)
        return vector

    def _merged(self, items: list[tuple[str, str, np.ndarray, dict[str, Any]]]) -> list[_Entry]:
        """Return a new entry list with ``items`` inserted or replaced.

        Caller must hold the lock. Replaced chunks keep their insertion order.
        """
        positions = {e.chunk_id: i for i, e in enumerate(self._entries)}
        entries = list(self._entries)
        for chunk_id, document_id, vector, payload in items:
            if chunk_id in positions:
                old = entries[positions[chunk_id]]
                entries[positions[chunk_id]] = _Entry(
                    chunk_id, document_id, old.sequence, vector, payload
                )
            else:
                positions[chunk_id] = len(entries)
                entries.append(_Entry(chunk_id, document_id, self._next_sequence, vector, payload))
                self._next_sequence += 1
        return entries
