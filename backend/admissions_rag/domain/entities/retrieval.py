"""Domain entities for retrieval results."""

from dataclasses import dataclass

from admissions_rag.domain.entities.document import DocumentCategory


# Returned by query() when nothing is indexed or nothing clears the threshold.
NO_RELEVANT_INFORMATION = "No relevant information found. Please try a different question."


@dataclass(frozen=True)
class RetrievedChunk:
    """A chunk returned for a question, with its parent document's metadata."""

    document_id: str
    document_title: str
    category: DocumentCategory
    chunk_index: int
    content: str
    similarity: float
