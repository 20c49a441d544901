"""Recommendation API controller — program ranking, eligibility and the catalog."""

from fastapi import APIRouter, Depends, HTTPException, status

from admissions_rag.application.schemas import (
    EligibilityRequest,
    EligibilityResponse,
    ProgramMatchSchema,
    ProgramSchema,
    RecommendationRequest,
    RecommendationResponse,
)
from admissions_rag.application.services import RecommendationService
from admissions_rag.domain.exceptions import EntityNotFoundError, ValidationError
from admissions_rag.infrastructure.dependencies import get_recommendation_service

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])
programs_router = APIRouter(prefix="/programs", tags=["Programs"])


@programs_router.get("", response_model=list[ProgramSchema])
async def list_programs(
    service: RecommendationService = Depends(get_recommendation_service),
) -> list[ProgramSchema]:
    """List the degree program catalog."""
    programs = await service.list_programs()
    return [ProgramSchema.from_entity(p) for p in programs]


@router.post("", response_model=RecommendationResponse)
async def get_recommendations(
    body: RecommendationRequest,
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationResponse:
    """Rank programs for a student profile (top matches first)."""
    try:
        profile = body.profile.to_entity()
        candidates = (
            [c.to_entity() for c in body.candidates] if body.candidates is not None else None
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    matches = await service.get_recommendations(profile, candidates)
    return RecommendationResponse(
        recommendations=[ProgramMatchSchema.from_entity(m) for m in matches],
    )


@router.post("/eligibility", response_model=EligibilityResponse)
async def calculate_eligibility(
    body: EligibilityRequest,
    service: RecommendationService = Depends(get_recommendation_service),
) -> EligibilityResponse:
    """Check eligibility of a profile for one program (by id or inline)."""
    try:
        profile = body.profile.to_entity()
        candidate = body.program.to_entity() if body.program is not None else body.program_id
        result = await service.calculate_eligibility(profile, candidate)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return EligibilityResponse.from_entity(result)
