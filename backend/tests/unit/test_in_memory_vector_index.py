"""Unit tests for the in-memory VectorIndex and cosine similarity."""

import pytest

from admissions_rag.domain.entities import DocumentChunk
from admissions_rag.domain.exceptions import DimensionMismatchError, ValidationError
from admissions_rag.infrastructure.vector import InMemoryVectorIndex, cosine_similarity


# ── Helpers ──


def _chunk(document_id: str, index: int, vector: list[float], content: str = "") -> DocumentChunk:
    return DocumentChunk(
        document_id=document_id,
        chunk_index=index,
        content=content or f"{document_id} chunk {index}",
        embedding=vector,
        embedding_model="test",
    )


# ── cosine_similarity ──


def test_cosine_of_vector_with_itself_is_one():
    assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)


def test_cosine_of_opposite_vectors_is_minus_one():
    assert cosine_similarity([1.0, 2.0, 3.0], [-1.0, -2.0, -3.0]) == pytest.approx(-1.0)


def test_cosine_with_zero_vector_is_zero():
    assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 0.0, 0.0]) == 0.0


def test_cosine_rejects_different_lengths():
    with pytest.raises(DimensionMismatchError):
        cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])


# ── InMemoryVectorIndex ──


@pytest.mark.asyncio
async def test_search_on_empty_index_returns_nothing():
    index = InMemoryVectorIndex(3)

    assert await index.search([1.0, 0.0, 0.0], top_k=5) == []


@pytest.mark.asyncio
async def test_search_orders_by_descending_similarity():
    index = InMemoryVectorIndex(3)
    await index.upsert_many([
        _chunk("doc-a", 0, [0.0, 1.0, 0.0]),
        _chunk("doc-a", 1, [1.0, 0.0, 0.0]),
        _chunk("doc-b", 0, [1.0, 1.0, 0.0]),
        _chunk("doc-b", 1, [-1.0, 0.0, 0.0]),
    ])

    results = await index.search([1.0, 0.0, 0.0], top_k=4)

    assert [r.chunk_id for r in results] == ["doc-a:1", "doc-b:0", "doc-a:0", "doc-b:1"]
    similarities = [r.similarity for r in results]
    assert similarities == sorted(similarities, reverse=True)
    assert results[0].similarity == pytest.approx(1.0)
    assert results[-1].similarity == pytest.approx(-1.0)


@pytest.mark.asyncio
async def test_search_returns_at_most_top_k():
    index = InMemoryVectorIndex(2)
    await index.upsert_many([_chunk("doc", i, [1.0, float(i)]) for i in range(6)])

    assert len(await index.search([1.0, 0.0], top_k=3)) == 3
    assert len(await index.search([1.0, 0.0], top_k=50)) == 6


@pytest.mark.asyncio
async def test_equal_similarities_keep_insertion_order():
    index = InMemoryVectorIndex(2)
    await index.upsert_many([_chunk("first", 0, [1.0, 0.0])])
    await index.upsert_many([_chunk("second", 0, [2.0, 0.0])])
    await index.upsert_many([_chunk("third", 0, [3.0, 0.0])])

    results = await index.search([1.0, 0.0], top_k=3)

    assert [r.document_id for r in results] == ["first", "second", "third"]


@pytest.mark.asyncio
async def test_upsert_replaces_existing_chunk_in_place():
    index = InMemoryVectorIndex(2)
    await index.upsert_many([_chunk("doc", 0, [1.0, 0.0]), _chunk("doc", 1, [1.0, 0.0])])

    await index.upsert(
        "doc:0",
        [1.0, 0.0],
        {"document_id": "doc", "chunk_index": 0, "content": "rewritten"},
    )

    assert await index.count() == 2
    results = await index.search([1.0, 0.0], top_k=2)
    assert results[0].chunk_id == "doc:0"
    assert results[0].content == "rewritten"


@pytest.mark.asyncio
async def test_upsert_requires_payload_fields():
    index = InMemoryVectorIndex(2)

    with pytest.raises(ValidationError):
        await index.upsert("doc:0", [1.0, 0.0], {"document_id": "doc"})


@pytest.mark.asyncio
async def test_remove_deletes_all_chunks_of_a_document():
    index = InMemoryVectorIndex(2)
    await index.upsert_many([_chunk("keep", 0, [1.0, 0.0])])
    await index.upsert_many([_chunk("drop", i, [0.0, 1.0]) for i in range(3)])

    removed = await index.remove("drop")

    assert removed == 3
    assert await index.count() == 1
    assert await index.remove("drop") == 0
    assert [r.document_id for r in await index.search([0.0, 1.0], top_k=5)] == ["keep"]


@pytest.mark.asyncio
async def test_batch_with_wrong_dimension_stores_nothing():
    index = InMemoryVectorIndex(3)

    with pytest.raises(DimensionMismatchError):
        await index.upsert_many([
            _chunk("doc", 0, [1.0, 0.0, 0.0]),
            _chunk("doc", 1, [1.0, 0.0]),
        ])

    assert await index.count() == 0


@pytest.mark.asyncio
async def test_query_with_wrong_dimension_is_rejected():
    index = InMemoryVectorIndex(3)
    await index.upsert_many([_chunk("doc", 0, [1.0, 0.0, 0.0])])

    with pytest.raises(DimensionMismatchError):
        await index.search([1.0, 0.0], top_k=1)


@pytest.mark.asyncio
@pytest.mark.parametrize("top_k", [0, -1])
async def test_non_positive_top_k_is_rejected(top_k):
    index = InMemoryVectorIndex(2)

    with pytest.raises(ValidationError):
        await index.search([1.0, 0.0], top_k=top_k)
