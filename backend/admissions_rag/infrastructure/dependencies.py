"""Dependency wiring — builds the process-wide services and hands them to FastAPI.

Every factory below is cached: the first call constructs the object from
settings, later calls return the same instance for the process lifetime.
Controllers receive the services through ``Depends`` and never reach for
module-level globals themselves.
"""

import logging
from functools import lru_cache

from admissions_rag.config import Settings, get_settings
from admissions_rag.application.interfaces import (
    DocumentRepository,
    EmbeddingProvider,
    ProgramCatalog,
    VectorIndex,
)
from admissions_rag.application.services import (
    EmbeddingService,
    MatchScorer,
    RecommendationService,
    RetrievalService,
    ScoringPolicy,
    TextChunker,
)
from admissions_rag.infrastructure.catalog import YamlProgramCatalog
from admissions_rag.infrastructure.embeddings import OfflineEmbeddingProvider
from admissions_rag.infrastructure.memory import InMemoryDocumentRepository
from admissions_rag.infrastructure.openrouter import OpenRouterEmbeddingProvider
from admissions_rag.infrastructure.vector import InMemoryVectorIndex

logger = logging.getLogger(__name__)


def build_embedding_provider(settings: Settings) -> EmbeddingProvider:
    """Select the embedding provider once, from configuration presence."""
    api_key = settings.openrouter_api_key.strip()
    if api_key:
        logger.info("Using OpenRouter embeddings (model=%s)", settings.embedding_model)
        return OpenRouterEmbeddingProvider(
            api_key=api_key,
            base_url=settings.openrouter_base_url,
            app_name=settings.openrouter_app_name,
            model=settings.embedding_model,
            model_dimensions=settings.embedding_dimensions,
            timeout_seconds=settings.embedding_timeout_seconds,
        )

    logger.warning(
        "OPENROUTER_API_KEY is not configured; using offline hash embeddings "
        "(retrieval results are not semantically meaningful)."
    )
    return OfflineEmbeddingProvider(dimensions=settings.embedding_dimensions)


def build_storage(settings: Settings, embedding_model: str) -> tuple[DocumentRepository, VectorIndex]:
    """Create the document repository and vector index for the configured backend."""
    if settings.vector_store_backend == "postgres":
        from admissions_rag.infrastructure.database.repositories import (
            PgVectorIndex,
            SQLAlchemyDocumentRepository,
        )
        from admissions_rag.infrastructure.database.session import get_session_factory

        session_factory = get_session_factory()
        return (
            SQLAlchemyDocumentRepository(session_factory),
            PgVectorIndex(
                session_factory,
                dimensions=settings.embedding_dimensions,
                embedding_model=embedding_model,
            ),
        )

    return InMemoryDocumentRepository(), InMemoryVectorIndex(settings.embedding_dimensions)


def build_scoring_policy(settings: Settings) -> ScoringPolicy:
    return ScoringPolicy(
        academic_cgpa_weight=settings.score_academic_cgpa_weight,
        academic_subject_weight=settings.score_academic_subject_weight,
        interest_keyword_weight=settings.score_interest_keyword_weight,
        interest_text_weight=settings.score_interest_text_weight,
        match_academic_share=settings.score_match_academic_share,
        match_interest_share=settings.score_match_interest_share,
        neutral_interest_score=settings.score_neutral_interest,
        recommendation_limit=settings.recommendation_limit,
    )


@lru_cache
def get_retrieval_service() -> RetrievalService:
    """Process-wide RetrievalService — built on first use."""
    settings = get_settings()
    provider = build_embedding_provider(settings)
    document_repository, vector_index = build_storage(settings, provider.model_name)

    embedding_service = EmbeddingService(
        provider,
        timeout_seconds=settings.embedding_timeout_seconds,
        max_attempts=settings.embedding_max_attempts,
        backoff_seconds=settings.embedding_backoff_seconds,
        batch_size=settings.embedding_batch_size,
    )
    return RetrievalService(
        document_repository=document_repository,
        vector_index=vector_index,
        embedding_service=embedding_service,
        chunker=TextChunker(settings.chunk_size, settings.chunk_overlap),
        min_similarity=settings.retrieval_min_similarity,
        default_top_k=settings.retrieval_top_k,
        ingest_timeout_seconds=settings.ingest_timeout_seconds,
        query_timeout_seconds=settings.query_timeout_seconds,
    )


@lru_cache
def get_program_catalog() -> ProgramCatalog:
    settings = get_settings()
    return YamlProgramCatalog(settings.resolve_path(settings.programs_file))


@lru_cache
def get_recommendation_service() -> RecommendationService:
    """Process-wide RecommendationService — built on first use."""
    settings = get_settings()
    return RecommendationService(
        catalog=get_program_catalog(),
        scorer=MatchScorer(build_scoring_policy(settings)),
    )


async def shutdown_services() -> None:
    """Release network connections held by services that were initialised."""
    if get_retrieval_service.cache_info().currsize:
        await get_retrieval_service().embedding_service.provider.aclose()
        get_retrieval_service.cache_clear()
