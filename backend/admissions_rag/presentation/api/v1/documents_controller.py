"""Documents API controller — ingest, list, inspect and delete knowledge documents."""

from fastapi import APIRouter, Depends, HTTPException, status

from admissions_rag.application.schemas import (
    DocumentCreate,
    DocumentCreated,
    DocumentDeleted,
    DocumentResponse,
)
from admissions_rag.application.services import RetrievalService
from admissions_rag.domain.exceptions import (
    DimensionMismatchError,
    EntityNotFoundError,
    UpstreamUnavailableError,
    ValidationError,
)
from admissions_rag.infrastructure.dependencies import get_retrieval_service

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    service: RetrievalService = Depends(get_retrieval_service),
) -> list[DocumentResponse]:
    """List all documents, newest first."""
    try:
        documents = await service.list_documents()
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return [DocumentResponse.model_validate(d, from_attributes=True) for d in documents]


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    service: RetrievalService = Depends(get_retrieval_service),
) -> DocumentResponse:
    """Retrieve a single document by ID."""
    try:
        document = await service.get_document(document_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return DocumentResponse.model_validate(document, from_attributes=True)


@router.post("", response_model=DocumentCreated, status_code=status.HTTP_201_CREATED)
async def create_document(
    data: DocumentCreate,
    service: RetrievalService = Depends(get_retrieval_service),
) -> DocumentCreated:
    """Ingest a document: chunk, embed and index its content."""
    try:
        document_id = await service.add_document(data.title, data.content, data.category)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except DimensionMismatchError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return DocumentCreated(id=document_id)


@router.delete("/{document_id}", response_model=DocumentDeleted)
async def delete_document(
    document_id: str,
    service: RetrievalService = Depends(get_retrieval_service),
) -> DocumentDeleted:
    """Delete a document and its chunks. Unknown ids report ``deleted=false``."""
    try:
        deleted = await service.delete_document(document_id)
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return DocumentDeleted(id=document_id, deleted=deleted)
