"""Offline embedding provider — deterministic vectors when no API key is configured.

Each vector is drawn from a numpy generator seeded with the SHA-256 of the
input text, then unit-normalised. Vectors carry no semantic meaning, but
identical text always maps to the identical vector, so retrieval stays
reproducible across calls and processes.
"""

import hashlib
import logging

import numpy as np

from admissions_rag.application.interfaces.embedding_provider import EmbeddingProvider

logger = logging.getLogger(__name__)


class OfflineEmbeddingProvider(EmbeddingProvider):
    """Infrastructure adapter — hash-seeded pseudo-random embeddings."""

    def __init__(self, dimensions: int = 768):
        if dimensions <= 0:
            raise ValueError(f"dimensions must be positive, got {dimensions}")
        self._dimensions = dimensions

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def model_name(self) -> str:
        return f"offline/hash-{self._dimensions}"

    @property
    def is_offline(self) -> bool:
        return True

    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        return [self._vector_for(text) for text in texts]

    def _vector_for(self, text: str) -> list[float]:
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        rng = np.random.default_rng(int.from_bytes(digest, "big"))
        vector = rng.standard_normal(self._dimensions)
        norm = np.linalg.norm(vector)
        if norm > 0:
            vector = vector / norm
        return vector.tolist()
