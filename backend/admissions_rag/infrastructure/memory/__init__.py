"""In-process storage adapters."""

from .in_memory_document_repository import InMemoryDocumentRepository

__all__ = ["InMemoryDocumentRepository"]
