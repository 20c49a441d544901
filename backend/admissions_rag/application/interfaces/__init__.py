from .embedding_provider import EmbeddingProvider
from .vector_index import VectorIndex, VectorSearchResult
from .document_repository import DocumentRepository
from .program_catalog import ProgramCatalog

__all__ = [
    "EmbeddingProvider",
    "VectorIndex",
    "VectorSearchResult",
    "DocumentRepository",
    "ProgramCatalog",
]
