from .document import DocumentCreate, DocumentCreated, DocumentDeleted, DocumentResponse
from .retrieval import (
    RetrievalContextResponse,
    RetrievalRequest,
    RetrievalSearchResponse,
    RetrievedChunkSchema,
)
from .recommendation import (
    EligibilityRequest,
    EligibilityResponse,
    ProgramMatchSchema,
    ProgramSchema,
    RecommendationRequest,
    RecommendationResponse,
    ScholarshipSchema,
    StudentProfileSchema,
)

__all__ = [
    "DocumentCreate",
    "DocumentCreated",
    "DocumentDeleted",
    "DocumentResponse",
    "RetrievalContextResponse",
    "RetrievalRequest",
    "RetrievalSearchResponse",
    "RetrievedChunkSchema",
    "EligibilityRequest",
    "EligibilityResponse",
    "ProgramMatchSchema",
    "ProgramSchema",
    "RecommendationRequest",
    "RecommendationResponse",
    "ScholarshipSchema",
    "StudentProfileSchema",
]
