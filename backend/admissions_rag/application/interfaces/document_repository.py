"""Abstract repository interface (port) for document metadata."""

from abc import ABC, abstractmethod

from admissions_rag.domain.entities import Document


class DocumentRepository(ABC):
    """Port for document persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def create(self, document: Document) -> Document:
        """Persist a new document."""
        ...

    @abstractmethod
    async def get_by_id(self, document_id: str) -> Document | None:
        """Retrieve a single document by its ID."""
        ...

    @abstractmethod
    async def list_all(self) -> list[Document]:
        """Retrieve all documents, newest first."""
        ...

    @abstractmethod
    async def existing_ids(self, document_ids: set[str]) -> set[str]:
        """Return the subset of ``document_ids`` that currently exist."""
        ...

    @abstractmethod
    async def delete(self, document_id: str) -> bool:
        """Delete a document. Returns True if deleted, False if not found."""
        ...
