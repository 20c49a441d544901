"""Pydantic schemas for retrieval API requests and responses."""

from pydantic import BaseModel, Field

from admissions_rag.domain.entities import DocumentCategory


class RetrievalRequest(BaseModel):
    """Request body for a context query."""

    question: str = Field(..., min_length=1, description="Natural-language question")
    top_k: int | None = Field(
        default=None, ge=1, le=50, description="Maximum number of chunks; server default when omitted"
    )


class RetrievalContextResponse(BaseModel):
    """Concatenated context for a downstream language model."""

    context: str
    found: bool


class RetrievedChunkSchema(BaseModel):
    """A single chunk in a structured search response."""

    document_id: str
    document_title: str
    category: DocumentCategory
    chunk_index: int
    content: str
    similarity: float

    model_config = {"from_attributes": True}


class RetrievalSearchResponse(BaseModel):
    """Structured search result, best match first."""

    results: list[RetrievedChunkSchema] = []
    total: int = 0
