"""In-process vector index package."""

from .in_memory_vector_index import InMemoryVectorIndex, cosine_similarity

__all__ = ["InMemoryVectorIndex", "cosine_similarity"]
