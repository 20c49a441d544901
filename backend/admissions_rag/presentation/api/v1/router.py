"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from admissions_rag.presentation.api.v1.endpoints.health import router as health_router
from admissions_rag.presentation.api.v1.documents_controller import router as documents_router
from admissions_rag.presentation.api.v1.retrieval_controller import router as retrieval_router
from admissions_rag.presentation.api.v1.recommendations_controller import (
    programs_router,
    router as recommendations_router,
)

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(documents_router)
router.include_router(retrieval_router)
router.include_router(programs_router)
router.include_router(recommendations_router)
