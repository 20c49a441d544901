"""Unit tests for the EmbeddingService — retries, timeouts, batching and dimension checks."""

import asyncio
import logging

import pytest

from admissions_rag.application.interfaces import EmbeddingProvider
from admissions_rag.application.services import EmbeddingService
from admissions_rag.domain.exceptions import DimensionMismatchError, UpstreamUnavailableError


# ── Fakes ────────────────────────────────────────────────────────────


class FakeProvider(EmbeddingProvider):
    """Returns constant vectors; fails the first ``failures`` calls."""

    def __init__(
        self,
        dims: int = 4,
        failures: int = 0,
        retryable: bool = True,
        delay: float = 0.0,
        vector_length: int | None = None,
        drop_one: bool = False,
    ):
        self._dims = dims
        self._failures = failures
        self._retryable = retryable
        self._delay = delay
        self._vector_length = vector_length or dims
        self._drop_one = drop_one
        self.calls: list[list[str]] = []

    @property
    def dimensions(self) -> int:
        return self._dims

    @property
    def model_name(self) -> str:
        return "fake/model"

    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        if self._delay:
            await asyncio.sleep(self._delay)
        if len(self.calls) <= self._failures:
            raise UpstreamUnavailableError("fake", "boom", retryable=self._retryable)
        vectors = [[0.5] * self._vector_length for _ in texts]
        return vectors[:-1] if self._drop_one else vectors


def _service(provider: EmbeddingProvider, **kwargs) -> EmbeddingService:
    kwargs.setdefault("backoff_seconds", 0)
    return EmbeddingService(provider, **kwargs)


# ── Tests ────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_transient_failures_are_retried_until_success():
    provider = FakeProvider(failures=2)
    service = _service(provider, max_attempts=3)

    vectors = await service.embed_texts(["a", "b"])

    assert len(provider.calls) == 3
    assert vectors == [[0.5] * 4, [0.5] * 4]


@pytest.mark.asyncio
async def test_gives_up_after_max_attempts():
    provider = FakeProvider(failures=10)
    service = _service(provider, max_attempts=3)

    with pytest.raises(UpstreamUnavailableError):
        await service.embed_texts(["a"])

    assert len(provider.calls) == 3


@pytest.mark.asyncio
async def test_non_retryable_failure_is_raised_immediately():
    provider = FakeProvider(failures=1, retryable=False)
    service = _service(provider, max_attempts=5)

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await service.embed_query("question")

    assert exc_info.value.retryable is False
    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_slow_provider_times_out_as_upstream_unavailable():
    provider = FakeProvider(delay=1.0)
    service = _service(provider, timeout_seconds=0.01, max_attempts=2)

    with pytest.raises(UpstreamUnavailableError):
        await service.embed_texts(["a"])

    assert len(provider.calls) == 2


@pytest.mark.asyncio
async def test_wrong_vector_dimension_is_fatal():
    provider = FakeProvider(dims=4, vector_length=3)
    service = _service(provider, max_attempts=3)

    with pytest.raises(DimensionMismatchError) as exc_info:
        await service.embed_texts(["a"])

    assert exc_info.value.expected == 4
    assert exc_info.value.actual == 3
    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_missing_vectors_are_reported():
    provider = FakeProvider(drop_one=True)
    service = _service(provider)

    with pytest.raises(UpstreamUnavailableError):
        await service.embed_texts(["a", "b"])


@pytest.mark.asyncio
async def test_large_inputs_are_split_into_batches():
    provider = FakeProvider()
    service = _service(provider, batch_size=2)

    vectors = await service.embed_texts(["a", "b", "c", "d", "e"])

    assert len(vectors) == 5
    assert provider.calls == [["a", "b"], ["c", "d"], ["e"]]


@pytest.mark.asyncio
async def test_empty_input_makes_no_calls():
    provider = FakeProvider()

    assert await _service(provider).embed_texts([]) == []
    assert provider.calls == []


@pytest.mark.asyncio
async def test_embed_query_returns_single_vector():
    provider = FakeProvider(dims=3)
    service = _service(provider)

    vector = await service.embed_query("how much is tuition?")

    assert vector == [0.5, 0.5, 0.5]
    assert service.dimensions == 3
    assert service.model_name == "fake/model"


@pytest.mark.asyncio
async def test_retry_waits_grow_exponentially(caplog):
    provider = FakeProvider(failures=2)
    service = _service(provider, max_attempts=3, backoff_seconds=0.01)

    with caplog.at_level(logging.WARNING, logger="admissions_rag.application.services.embedding_service"):
        await service.embed_texts(["a"])

    waits = [r.getMessage().rsplit(" ", 1)[-1] for r in caplog.records if "retrying" in r.getMessage()]
    assert waits == ["0.01s", "0.02s"]


@pytest.mark.asyncio
async def test_timeout_is_retried_before_giving_up():
    provider = FakeProvider(delay=1.0)
    service = _service(provider, timeout_seconds=0.01, max_attempts=3)

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await service.embed_query("question")

    assert exc_info.value.retryable is True
    assert exc_info.value.service == "embedding"
