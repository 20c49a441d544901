"""Application service for degree recommendations and eligibility checks."""

import logging

from admissions_rag.application.interfaces.program_catalog import ProgramCatalog
from admissions_rag.application.services.match_scorer import MatchScorer
from admissions_rag.domain.entities import (
    EligibilityResult,
    Program,
    ProgramMatch,
    StudentProfile,
)
from admissions_rag.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class RecommendationService:
    """Orchestrates program matching. Depends on the catalog port (DI)."""

    def __init__(self, catalog: ProgramCatalog, scorer: MatchScorer | None = None):
        self._catalog = catalog
        self._scorer = scorer or MatchScorer()

    async def list_programs(self) -> list[Program]:
        return await self._catalog.list_programs()

    async def get_recommendations(
        self,
        profile: StudentProfile,
        candidates: list[Program] | None = None,
    ) -> list[ProgramMatch]:
        """Rank ``candidates`` (or the whole catalog) for ``profile``."""
        programs = candidates if candidates is not None else await self._catalog.list_programs()
        matches = self._scorer.rank(profile, programs)
        logger.info(
            "Recommended %d of %d programs (top=%s)",
            len(matches),
            len(programs),
            matches[0].program.id if matches else None,
        )
        return matches

    async def calculate_eligibility(
        self,
        profile: StudentProfile,
        candidate: Program | str,
    ) -> EligibilityResult:
        """Eligibility of ``profile`` for a program object or catalog id."""
        if isinstance(candidate, Program):
            program = candidate
        else:
            program = await self._catalog.get_program(candidate)
            if program is None:
                raise EntityNotFoundError("Program", candidate)
        return self._scorer.calculate_eligibility(profile, program)
