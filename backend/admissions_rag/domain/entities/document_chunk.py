"""Domain entity for document chunks — text spans with vector embeddings."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class DocumentChunk:
    """A contiguous span of a document's text, the unit of embedding and retrieval.

    Chunks reference their document by id only; they are created when the
    document is ingested and removed together with it.
    """

    document_id: str
    chunk_index: int
    content: str
    embedding: list[float] = field(default_factory=list)
    embedding_model: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def id(self) -> str:
        return f"{self.document_id}:{self.chunk_index}"
