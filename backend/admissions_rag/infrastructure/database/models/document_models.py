"""SQLAlchemy ORM models for documents and their pgvector-embedded chunks."""

from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from pgvector.sqlalchemy import Vector

from admissions_rag.infrastructure.database.base import Base

# Fixed by the column type; must match Settings.embedding_dimensions.
VECTOR_COLUMN_DIMENSIONS = 768


class DocumentModel(Base):
    """ORM model — maps to the 'documents' table."""

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(40), nullable=False, index=True)
    chunk_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<DocumentModel(id={self.id}, title='{self.title}')>"


class DocumentChunkModel(Base):
    """A text chunk of a document, with a vector embedding.

    Chunks reference their document by id only (no foreign key): they are
    written before the document row, which is what makes a document visible.
    """

    __tablename__ = "document_chunks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    chunk_key = Column(String(80), nullable=False, unique=True)
    document_id = Column(String(36), nullable=False, index=True)
    chunk_index = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    embedding_model = Column(String(120), nullable=False)
    embedding = Column(Vector(VECTOR_COLUMN_DIMENSIONS), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_document_chunk_identity"),
        Index("idx_document_chunks_embedding_hnsw", embedding, postgresql_using="hnsw",
              postgresql_ops={"embedding": "vector_cosine_ops"}),
    )
