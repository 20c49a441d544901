"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from admissions_rag.config import get_settings
from admissions_rag.infrastructure.dependencies import (
    get_program_catalog,
    get_retrieval_service,
    shutdown_services,
)
from admissions_rag.infrastructure.logging.log_config import setup_logging
from admissions_rag.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _create_database_if_missing(database_url: str) -> None:
    """Issue ``CREATE DATABASE`` through the ``postgres`` maintenance database.

    Best effort: a server that refuses (permissions, not reachable) is logged
    and left to fail loudly on the first real query.
    """
    from urllib.parse import urlparse

    import asyncpg

    db_name = urlparse(database_url).path.lstrip("/")
    if not db_name:
        return

    try:
        conn = await asyncpg.connect(database_url.rsplit("/", 1)[0] + "/postgres")
    except Exception as exc:
        logger.warning("Cannot reach PostgreSQL to check database '%s': %s", db_name, exc)
        return

    try:
        if await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", db_name):
            return
        # Not allowed inside a transaction block; asyncpg runs it in autocommit.
        await conn.execute(f'CREATE DATABASE "{db_name}"')
        logger.info("Created database '%s'", db_name)
    except Exception as exc:
        logger.warning("Could not create database '%s': %s", db_name, exc)
    finally:
        await conn.close()


async def _prepare_vector_store() -> None:
    """Enable pgvector and create the document tables."""
    from admissions_rag.infrastructure.database import Base, get_engine

    await _create_database_if_missing(get_settings().database_url)
    async with get_engine().begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
    logger.info("pgvector store ready")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — prepare storage, warm services, release clients."""
    settings = get_settings()
    setup_logging(settings)

    # 1. Tables only exist for the postgres backend
    if settings.vector_store_backend == "postgres":
        await _prepare_vector_store()

    # 2. Build the retrieval service once so provider selection is logged at startup
    service = get_retrieval_service()
    logger.info(
        "Retrieval ready (embeddings=%s, dimensions=%d, backend=%s)",
        service.embedding_service.model_name,
        service.embedding_service.dimensions,
        settings.vector_store_backend,
    )

    # 3. Load the program catalog
    programs = await get_program_catalog().list_programs()
    logger.info("Program catalog loaded: %d programs", len(programs))

    yield

    # Shutdown
    await shutdown_services()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "admissions_rag.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
