"""Unit tests for the RecommendationService with a fake program catalog."""

import pytest

from admissions_rag.application.interfaces import ProgramCatalog
from admissions_rag.application.services import RecommendationService
from admissions_rag.domain.entities import Program, StudentProfile
from admissions_rag.domain.exceptions import EntityNotFoundError


# ── Fakes ────────────────────────────────────────────────────────────


class FakeCatalog(ProgramCatalog):
    def __init__(self, programs: list[Program]):
        self._programs = programs
        self.list_calls = 0

    async def list_programs(self) -> list[Program]:
        self.list_calls += 1
        return list(self._programs)

    async def get_program(self, program_id: str) -> Program | None:
        return next((p for p in self._programs if p.id == program_id), None)


CS = Program(
    id="1",
    name="Bachelor of Computer Science",
    description="Programming, algorithms and artificial intelligence.",
    minimum_cgpa=3.0,
    required_subjects=("Mathematics",),
    keywords=("programming", "software", "ai"),
)
PSYCHOLOGY = Program(
    id="5",
    name="Bachelor of Psychology",
    description="Human behaviour and mental processes.",
    minimum_cgpa=2.7,
    required_subjects=("Biology",),
    keywords=("behaviour", "counselling", "mind"),
)


# ── Tests ────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_recommendations_use_catalog_when_no_candidates_given():
    catalog = FakeCatalog([PSYCHOLOGY, CS])
    service = RecommendationService(catalog)
    profile = StudentProfile(cgpa=3.4, subjects=("Mathematics",), interests=("programming",))

    matches = await service.get_recommendations(profile)

    assert catalog.list_calls == 1
    assert [m.program.id for m in matches] == ["1", "5"]
    assert matches[0].eligible is True


@pytest.mark.asyncio
async def test_explicit_candidates_bypass_catalog():
    catalog = FakeCatalog([CS])
    service = RecommendationService(catalog)

    matches = await service.get_recommendations(StudentProfile(cgpa=3.0), [PSYCHOLOGY])

    assert catalog.list_calls == 0
    assert [m.program.id for m in matches] == ["5"]


@pytest.mark.asyncio
async def test_empty_candidate_list_gives_no_recommendations():
    service = RecommendationService(FakeCatalog([CS]))

    assert await service.get_recommendations(StudentProfile(cgpa=3.0), []) == []


@pytest.mark.asyncio
async def test_eligibility_by_catalog_id():
    service = RecommendationService(FakeCatalog([CS, PSYCHOLOGY]))
    profile = StudentProfile(cgpa=3.9, subjects=("Mathematics",))

    result = await service.calculate_eligibility(profile, "1")

    assert result.program_id == "1"
    assert result.eligible is True
    assert result.scholarship.name == "Presidential Scholarship"


@pytest.mark.asyncio
async def test_eligibility_for_inline_program():
    service = RecommendationService(FakeCatalog([]))

    result = await service.calculate_eligibility(StudentProfile(cgpa=2.0), PSYCHOLOGY)

    assert result.program_id == "5"
    assert result.eligible is False


@pytest.mark.asyncio
async def test_eligibility_for_unknown_program_raises():
    service = RecommendationService(FakeCatalog([CS]))

    with pytest.raises(EntityNotFoundError):
        await service.calculate_eligibility(StudentProfile(cgpa=3.0), "missing")
