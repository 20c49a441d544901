"""Embedding service — guards an EmbeddingProvider with timeouts, retries and dimension checks.

This is an application service that coordinates:
1. Splitting large inputs into provider-sized batches
2. Calling the EmbeddingProvider with a per-call timeout
3. Retrying transient upstream failures with bounded exponential backoff
4. Verifying that every vector has the configured dimension
"""

import asyncio
import logging
import time

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from admissions_rag.application.interfaces.embedding_provider import EmbeddingProvider
from admissions_rag.domain.exceptions import DimensionMismatchError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 30.0
_DEFAULT_MAX_ATTEMPTS = 3
_DEFAULT_BACKOFF_SECONDS = 0.5
_MAX_BATCH_SIZE = 50  # Max texts per embedding API call


class EmbeddingService:
    """Application service for generating embeddings reliably.

    Every vector it returns has exactly ``dimensions`` entries; upstream
    outages surface as ``UpstreamUnavailableError`` after the final attempt.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        *,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
        max_attempts: int = _DEFAULT_MAX_ATTEMPTS,
        backoff_seconds: float = _DEFAULT_BACKOFF_SECONDS,
        batch_size: int = _MAX_BATCH_SIZE,
    ):
        self._provider = embedding_provider
        self._timeout = timeout_seconds
        self._max_attempts = max(1, max_attempts)
        self._backoff = backoff_seconds
        self._batch_size = max(1, batch_size)

    @property
    def provider(self) -> EmbeddingProvider:
        return self._provider

    @property
    def dimensions(self) -> int:
        return self._provider.dimensions

    @property
    def model_name(self) -> str:
        return self._provider.model_name

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed document chunks in batches. Returns one vector per text."""
        if not texts:
            return []

        start = time.monotonic()
        all_embeddings: list[list[float]] = []

        for batch_start in range(0, len(texts), self._batch_size):
            batch = texts[batch_start : batch_start + self._batch_size]
            batch_embeddings = await self._call_with_retry(
                lambda batch=batch: self._provider.generate_embeddings(batch),
                expected=len(batch),
            )
            all_embeddings.extend(batch_embeddings)

        duration_ms = int((time.monotonic() - start) * 1000)
        logger.debug(
            "Embedded %d texts with %s in %dms",
            len(texts),
            self._provider.model_name,
            duration_ms,
        )
        return all_embeddings

    async def embed_query(self, query: str) -> list[float]:
        """Embed a search question."""
        vectors = await self._call_with_retry(
            lambda: self._single(query),
            expected=1,
        )
        return vectors[0]

    async def _single(self, query: str) -> list[list[float]]:
        return [await self._provider.generate_query_embedding(query)]

    async def _call_with_retry(self, call, *, expected: int) -> list[list[float]]:
        """Run ``call`` with a timeout, retrying retryable upstream failures."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._backoff),
            retry=retry_if_exception(_is_retryable),
            before_sleep=self._log_retry,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    vectors = await self._attempt(call)
        except UpstreamUnavailableError as exc:
            if exc.retryable:
                logger.error("Embedding failed after %d attempts: %s", self._max_attempts, exc)
            raise

        self._verify(vectors, expected)
        return vectors

    async def _attempt(self, call) -> list[list[float]]:
        try:
            return await asyncio.wait_for(call(), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            raise UpstreamUnavailableError(
                "embedding", f"no response within {self._timeout:g}s"
            ) from exc

    def _log_retry(self, retry_state: RetryCallState) -> None:
        logger.warning(
            "Embedding attempt %d/%d failed (%s) — retrying in %.2fs",
            retry_state.attempt_number,
            self._max_attempts,
            retry_state.outcome.exception(),
            retry_state.next_action.sleep,
        )

    def _verify(self, vectors: list[list[float]], expected: int) -> None:
        if len(vectors) != expected:
            raise UpstreamUnavailableError(
                "embedding",
                f"expected {expected} vectors, received {len(vectors)}",
                retryable=False,
            )
        for vector in vectors:
            if len(vector) != self._provider.dimensions:
                raise DimensionMismatchError(
                    self._provider.dimensions, len(vector), context="embedding"
                )


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, UpstreamUnavailableError) and exc.retryable
