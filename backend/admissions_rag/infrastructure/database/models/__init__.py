from .document_models import DocumentChunkModel, DocumentModel, VECTOR_COLUMN_DIMENSIONS

__all__ = ["DocumentModel", "DocumentChunkModel", "VECTOR_COLUMN_DIMENSIONS"]
