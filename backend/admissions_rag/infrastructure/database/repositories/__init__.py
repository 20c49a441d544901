from .document_repository import SQLAlchemyDocumentRepository
from .pg_vector_index import PgVectorIndex

__all__ = [
    "SQLAlchemyDocumentRepository",
    "PgVectorIndex",
]
