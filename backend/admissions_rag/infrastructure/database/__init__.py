from .base import Base
from .session import get_engine, get_session_factory
from .models import DocumentModel, DocumentChunkModel

__all__ = [
    "Base",
    "get_engine",
    "get_session_factory",
    "DocumentModel",
    "DocumentChunkModel",
]
