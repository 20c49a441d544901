"""Local embedding providers package."""

from .offline_embedding_provider import OfflineEmbeddingProvider

__all__ = ["OfflineEmbeddingProvider"]
