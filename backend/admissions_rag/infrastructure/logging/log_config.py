"""Logging setup — root level plus per-category overrides from Settings.

Noisy third-party loggers (SQL echo, outbound HTTP) and the retrieval
pipeline each have their own level setting, so one can be turned up for
debugging without flooding the console with the others.

    from admissions_rag.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from admissions_rag.config import Settings, get_settings

_FORMAT = "%(levelname)-8s %(name)s — %(message)s"

# Settings field → loggers whose level it controls.
_CATEGORY_LOGGERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("log_level_sql", ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg")),
    ("log_level_http", ("httpx", "httpcore")),
    ("log_level_uvicorn", ("uvicorn", "uvicorn.access", "uvicorn.error")),
    (
        "log_level_pipeline",
        (
            "RetrievalService",
            "admissions_rag.application.services.retrieval_service",
            "admissions_rag.application.services.embedding_service",
        ),
    ),
    ("log_level_openrouter", ("admissions_rag.infrastructure.openrouter",)),
)


def setup_logging(settings: Settings | None = None) -> None:
    """Apply ``settings.log_level`` to the root logger and each category level."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    # uvicorn installs its own handlers; plain pytest or script runs have none.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    applied: dict[str, str] = {}
    for field_name, logger_names in _CATEGORY_LOGGERS:
        raw = getattr(settings, field_name, "INFO")
        for name in logger_names:
            logging.getLogger(name).setLevel(_parse_level(raw))
        applied[field_name.removeprefix("log_level_")] = raw

    logging.getLogger(__name__).debug(
        "Logging configured — root=%s, %s",
        settings.log_level,
        ", ".join(f"{k}={v}" for k, v in applied.items()),
    )


def _parse_level(raw: str) -> int:
    """Map a level name to its ``logging`` constant; unknown names mean INFO."""
    level = logging.getLevelName(str(raw).upper())
    return level if isinstance(level, int) else logging.INFO
