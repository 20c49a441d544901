"""Concrete document repository backed by SQLAlchemy async sessions."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from admissions_rag.application.interfaces import DocumentRepository
from admissions_rag.domain.entities import Document, DocumentCategory
from admissions_rag.infrastructure.database.errors import storage_errors
from admissions_rag.infrastructure.database.models import DocumentModel


class SQLAlchemyDocumentRepository(DocumentRepository):
    """Implements the DocumentRepository port; one short transaction per call.

    Database failures surface as ``UpstreamUnavailableError("storage", ...)``.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    def _to_entity(self, model: DocumentModel) -> Document:
        """Map ORM model → domain entity."""
        return Document(
            id=model.id,
            title=model.title,
            content=model.content,
            category=DocumentCategory(model.category),
            chunk_count=model.chunk_count,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Document) -> DocumentModel:
        """Map domain entity → ORM model (for creation)."""
        return DocumentModel(
            id=entity.id,
            title=entity.title,
            content=entity.content,
            category=entity.category.value,
            chunk_count=entity.chunk_count,
            created_at=entity.created_at,
        )

    @storage_errors
    async def create(self, document: Document) -> Document:
        async with self._session_factory() as session:
            async with session.begin():
                session.add(self._to_model(document))
        return document

    @storage_errors
    async def get_by_id(self, document_id: str) -> Document | None:
        async with self._session_factory() as session:
            result = await session.get(DocumentModel, document_id)
            return self._to_entity(result) if result else None

    @storage_errors
    async def list_all(self) -> list[Document]:
        async with self._session_factory() as session:
            stmt = select(DocumentModel).order_by(DocumentModel.created_at.desc())
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    @storage_errors
    async def existing_ids(self, document_ids: set[str]) -> set[str]:
        if not document_ids:
            return set()
        async with self._session_factory() as session:
            stmt = select(DocumentModel.id).where(DocumentModel.id.in_(document_ids))
            result = await session.execute(stmt)
            return set(result.scalars().all())

    @storage_errors
    async def delete(self, document_id: str) -> bool:
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    delete(DocumentModel).where(DocumentModel.id == document_id)
                )
            return result.rowcount > 0
