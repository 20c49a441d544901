from .document import Document, DocumentCategory
from .document_chunk import DocumentChunk
from .program import (
    EligibilityResult,
    Program,
    ProgramMatch,
    ScholarshipEligibility,
)
from .retrieval import NO_RELEVANT_INFORMATION, RetrievedChunk
from .student_profile import StudentProfile

__all__ = [
    "Document",
    "DocumentCategory",
    "DocumentChunk",
    "EligibilityResult",
    "Program",
    "ProgramMatch",
    "ScholarshipEligibility",
    "NO_RELEVANT_INFORMATION",
    "RetrievedChunk",
    "StudentProfile",
]
