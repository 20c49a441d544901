"""Retrieval API controller — context lookup for the downstream language model."""

from fastapi import APIRouter, Depends, HTTPException, status

from admissions_rag.application.schemas import (
    RetrievalContextResponse,
    RetrievalRequest,
    RetrievalSearchResponse,
    RetrievedChunkSchema,
)
from admissions_rag.application.services import RetrievalService
from admissions_rag.domain.entities import NO_RELEVANT_INFORMATION
from admissions_rag.domain.exceptions import (
    DimensionMismatchError,
    UpstreamUnavailableError,
    ValidationError,
)
from admissions_rag.infrastructure.dependencies import get_retrieval_service

router = APIRouter(prefix="/retrieval", tags=["Retrieval"])


@router.post("/query", response_model=RetrievalContextResponse)
async def query_context(
    body: RetrievalRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> RetrievalContextResponse:
    """Return the joined context for a question, or the no-information sentinel."""
    try:
        context = await service.query(body.question, top_k=body.top_k)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except DimensionMismatchError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return RetrievalContextResponse(
        context=context,
        found=context != NO_RELEVANT_INFORMATION,
    )


@router.post("/search", response_model=RetrievalSearchResponse)
async def search_chunks(
    body: RetrievalRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> RetrievalSearchResponse:
    """Return the matching chunks with document metadata and similarity."""
    try:
        results = await service.retrieve(body.question, top_k=body.top_k)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except DimensionMismatchError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return RetrievalSearchResponse(
        results=[RetrievedChunkSchema.model_validate(r, from_attributes=True) for r in results],
        total=len(results),
    )
