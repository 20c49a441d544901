"""Pydantic DTOs (Data Transfer Objects) for the Document feature."""

from datetime import datetime

from pydantic import BaseModel, Field

from admissions_rag.domain.entities import DocumentCategory


class DocumentCreate(BaseModel):
    """Schema for ingesting a new document."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Fee Schedule 2025"])
    content: str = Field(..., min_length=1, examples=["Tuition for undergraduate programs is..."])
    category: DocumentCategory = Field(..., examples=[DocumentCategory.FEE_SCHEDULE])


class DocumentCreated(BaseModel):
    """Schema returned after a successful ingest."""

    id: str
    success: bool = True


class DocumentResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    content: str
    category: DocumentCategory
    chunk_count: int
    created_at: datetime

    model_config = {"from_attributes": True}


class DocumentDeleted(BaseModel):
    """Schema returned by delete — ``deleted`` is False for unknown ids."""

    id: str
    deleted: bool
