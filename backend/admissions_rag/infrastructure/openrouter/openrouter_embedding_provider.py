"""Embedding provider backed by the OpenRouter ``/embeddings`` endpoint.

Default model is google/gemini-embedding-001, requested at the configured
output size (768). Failures are reported as ``UpstreamUnavailableError``;
the EmbeddingService decides whether to retry from its ``retryable`` flag.
"""

import logging
from typing import Any

import httpx

from admissions_rag.application.interfaces.embedding_provider import EmbeddingProvider
from admissions_rag.domain.exceptions import DimensionMismatchError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

# nomic-embed-text models expect a task prefix on every input.
_NOMIC_PREFIXES = {"document": "search_document: ", "query": "search_query: "}

# Rate limiting, timeouts and server errors may clear up on their own.
_RETRYABLE_STATUS = frozenset({408, 425, 429, 500, 502, 503, 504})
_MAX_ERROR_BODY = 500


class OpenRouterEmbeddingProvider(EmbeddingProvider):
    """Infrastructure adapter for OpenRouter embeddings.

    Holds one pooled ``httpx.AsyncClient`` for its lifetime. An injected
    client (tests, shared pools) is used as-is and never closed here.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://openrouter.ai/api/v1",
        app_name: str = "Admissions Assistant",
        model: str = "google/gemini-embedding-001",
        model_dimensions: int = 768,
        timeout_seconds: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not api_key.strip():
            raise ValueError("OpenRouterEmbeddingProvider requires an API key")
        self._api_key = api_key
        self._endpoint = f"{base_url.rstrip('/')}/embeddings"
        self._app_name = app_name
        self._model = model
        self._dimensions = model_dimensions
        self._timeout = timeout_seconds
        self._client = http_client
        self._owns_client = http_client is None

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def model_name(self) -> str:
        return self._model

    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        """Embed document chunks, one vector per text in input order."""
        return await self._embed(texts, mode="document")

    async def generate_query_embedding(self, query: str) -> list[float]:
        vectors = await self._embed([query], mode="query")
        if not vectors:
            raise UpstreamUnavailableError(
                "openrouter", "Embedding API returned no vectors", retryable=False
            )
        return vectors[0]

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    # ── Internals ───────────────────────────────────────────────────

    async def _embed(self, texts: list[str], *, mode: str) -> list[list[float]]:
        if not texts:
            return []

        if "nomic" in self._model.lower():
            texts = [_NOMIC_PREFIXES[mode] + t for t in texts]

        payload: dict[str, Any] = {
            "model": self._model,
            "input": texts,
            "dimensions": self._dimensions,
        }
        response = await self._post(payload)
        vectors = self._parse(response)
        logger.info(
            "Generated %d %s embeddings (model=%s, dims=%d)",
            len(vectors),
            mode,
            self._model,
            self._dimensions,
        )
        return vectors

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "X-Title": self._app_name,
        }
        try:
            response = await self._client.post(self._endpoint, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Embedding request to %s failed: %s", self._endpoint, exc)
            raise UpstreamUnavailableError("openrouter", f"{type(exc).__name__}: {exc}") from exc

        if response.status_code != 200:
            body = response.text[:_MAX_ERROR_BODY]
            logger.error("Embedding API error %d: %s", response.status_code, body)
            raise UpstreamUnavailableError(
                "openrouter",
                f"Embedding API returned {response.status_code}: {body}",
                retryable=response.status_code in _RETRYABLE_STATUS,
            )
        return response

    def _parse(self, response: httpx.Response) -> list[list[float]]:
        items = sorted(response.json().get("data", []), key=lambda item: item.get("index", 0))
        vectors = [item["embedding"] for item in items]
        for vector in vectors:
            if len(vector) != self._dimensions:
                raise DimensionMismatchError(self._dimensions, len(vector), context="embedding")
        return vectors
