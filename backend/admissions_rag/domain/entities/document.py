"""Domain entity for knowledge documents ingested into the retrieval index."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class DocumentCategory(str, Enum):
    """Closed set of document categories accepted on ingest."""

    ACADEMIC_POLICY = "academic_policy"
    PROGRAM_DESCRIPTION = "program_description"
    FEE_SCHEDULE = "fee_schedule"
    GENERAL = "general"


@dataclass(frozen=True)
class Document:
    """An ingested document. Immutable — updates are delete + re-add."""

    id: str
    title: str
    content: str
    category: DocumentCategory
    chunk_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
