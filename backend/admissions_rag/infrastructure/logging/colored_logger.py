"""Colored pipeline logger for document ingestion and retrieval.

Each stage of the retrieval pipeline gets its own color and icon so an
ingest can be followed in the terminal at a glance:

    CHUNK (yellow) → EMBED (magenta) → INDEX (blue) → COMPLETE (green)

Queries log under QUERY (cyan); deletions and failures log in red.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, NamedTuple


_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_RED = "\033[91m"
_GREEN = "\033[92m"
_YELLOW = "\033[93m"
_BLUE = "\033[94m"
_MAGENTA = "\033[95m"
_CYAN = "\033[96m"
_WHITE = "\033[97m"
_GRAY = "\033[90m"


class Stage(NamedTuple):
    label: str
    color: str
    icon: str


class PipelineStage:
    """Stages of the ingest and query pipeline."""

    CHUNK = Stage("CHUNK", _YELLOW, "✂️")
    EMBED = Stage("EMBED", _MAGENTA, "🧮")
    INDEX = Stage("INDEX", _BLUE, "🗂️")
    QUERY = Stage("QUERY", _CYAN, "🔎")
    DELETE = Stage("DELETE", _RED, "🗑️")
    PIPELINE = Stage("PIPELINE", _WHITE, "⚙️")
    ERROR = Stage("ERROR", _RED, "❌")
    COMPLETE = Stage("COMPLETE", _GREEN, "✅")


def _fields(style: str, values: dict[str, Any]) -> str:
    """Render ``key=value`` pairs as a trailing, dimmed suffix."""
    if not values:
        return ""
    joined = " | ".join(f"{key}={value}" for key, value in values.items())
    return f" {style}({joined}){_RESET}"


class PipelineLogger:
    """Stage-aware logger wrapping a standard ``logging.Logger``.

    Usage:
        plog = PipelineLogger("RetrievalService")
        with plog.timed_step(PipelineStage.EMBED, "Embedding 4 chunks"):
            vectors = await embeddings.embed_texts(chunks)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    def step_start(self, stage: Stage, message: str, **fields: Any) -> None:
        label, color, icon = stage
        self._logger.info(
            f"{color}{_BOLD}{icon} [{label}]{_RESET} {color}{message}{_RESET}"
            + _fields(_GRAY, fields)
        )

    def step_complete(self, stage: Stage, message: str, **fields: Any) -> None:
        label, color, icon = stage
        self._logger.info(
            f"{color}{icon} [{label}]{_RESET} {_GREEN}✓ {message}{_RESET}"
            + _fields(_GRAY, fields)
        )

    def step_error(self, stage: Stage, message: str, error: Exception | None = None) -> None:
        line = f"{_RED}{_BOLD}❌ [{stage.label}]{_RESET} {_RED}{message}{_RESET}"
        if error is not None:
            line += f" {_DIM}→ {type(error).__name__}: {error}{_RESET}"
        self._logger.error(line)

    def detail(self, message: str, **fields: Any) -> None:
        self._logger.info(f"   {_GRAY}├─ {message}{_RESET}" + _fields(_DIM, fields))

    def warning(self, message: str, **fields: Any) -> None:
        self._logger.warning(f"   {_YELLOW}⚠ {message}{_RESET}" + _fields(_DIM, fields))

    @contextmanager
    def timed_step(self, stage: Stage, message: str, **fields: Any):
        """Log ``message`` on entry, then success or failure with the elapsed time."""
        self.step_start(stage, message, **fields)
        started = time.perf_counter()
        try:
            yield
        except Exception as exc:
            self.step_error(
                stage, f"{message} — failed after {time.perf_counter() - started:.2f}s", error=exc
            )
            raise
        self.step_complete(stage, f"{message} — {time.perf_counter() - started:.2f}s", **fields)
