"""In-memory implementation of DocumentRepository — process-lifetime storage."""

import threading

from admissions_rag.application.interfaces.document_repository import DocumentRepository
from admissions_rag.domain.entities import Document


class InMemoryDocumentRepository(DocumentRepository):
    """Implements the DocumentRepository port with a dict guarded by a lock."""

    def __init__(self):
        self._documents: dict[str, Document] = {}
        self._lock = threading.Lock()

    async def create(self, document: Document) -> Document:
        with self._lock:
            if document.id in self._documents:
                raise ValueError(f"Document {document.id} already exists")
            self._documents[document.id] = document
        return document

    async def get_by_id(self, document_id: str) -> Document | None:
        return self._documents.get(document_id)

    async def list_all(self) -> list[Document]:
        with self._lock:
            documents = list(self._documents.values())
        # Stable sort keeps insertion order for equal timestamps; reverse it too.
        return sorted(reversed(documents), key=lambda d: d.created_at, reverse=True)

    async def existing_ids(self, document_ids: set[str]) -> set[str]:
        with self._lock:
            return {doc_id for doc_id in document_ids if doc_id in self._documents}

    async def delete(self, document_id: str) -> bool:
        with self._lock:
            return self._documents.pop(document_id, None) is not None
