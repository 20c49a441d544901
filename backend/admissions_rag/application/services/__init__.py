from .text_chunker import TextChunker
from .embedding_service import EmbeddingService
from .retrieval_service import RetrievalService
from .match_scorer import (
    DEFAULT_SCHOLARSHIP_TIERS,
    MatchScorer,
    ScholarshipTier,
    ScoringPolicy,
)
from .recommendation_service import RecommendationService

__all__ = [
    "TextChunker",
    "EmbeddingService",
    "RetrievalService",
    "DEFAULT_SCHOLARSHIP_TIERS",
    "MatchScorer",
    "ScholarshipTier",
    "ScoringPolicy",
    "RecommendationService",
]
