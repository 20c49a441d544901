"""Match scorer — weighted academic and interest scoring of degree programs.

Two related scores are produced for a (profile, program) pair:

* Eligibility (0–100): CGPA credit + required-subject credit. ``eligible``
  needs full credit on both axes.
* Match score (0–100): average of an academic score and an interest score,
  used to rank recommendations. A missing CGPA is treated as unknown, so
  the academic score is then based on subjects alone.

All weights live in ``ScoringPolicy`` so policy can be tuned without
touching the algorithm.
"""

import logging
from dataclasses import dataclass, field

from admissions_rag.domain.entities import (
    EligibilityResult,
    Program,
    ProgramMatch,
    ScholarshipEligibility,
    StudentProfile,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScholarshipTier:
    """A scholarship awarded from ``minimum_cgpa`` upwards."""

    minimum_cgpa: float
    percentage: int
    name: str


DEFAULT_SCHOLARSHIP_TIERS: tuple[ScholarshipTier, ...] = (
    ScholarshipTier(3.8, 100, "Presidential Scholarship"),
    ScholarshipTier(3.5, 75, "Dean's Scholarship"),
    ScholarshipTier(3.2, 50, "Merit Scholarship"),
    ScholarshipTier(3.0, 25, "Achievement Scholarship"),
)


@dataclass(frozen=True)
class ScoringPolicy:
    """Named weights of the scoring model, with their default values."""

    academic_cgpa_weight: float = 60.0      # CGPA share of eligibility / academic score
    academic_subject_weight: float = 40.0   # required-subject share
    interest_keyword_weight: float = 70.0   # interest hits on program keywords
    interest_text_weight: float = 30.0      # interest hits on name/description
    match_academic_share: float = 0.5
    match_interest_share: float = 0.5
    neutral_interest_score: float = 50.0    # used when no interests are given
    recommendation_limit: int = 5
    scholarship_tiers: tuple[ScholarshipTier, ...] = field(
        default=DEFAULT_SCHOLARSHIP_TIERS
    )


class MatchScorer:
    """Pure scoring logic; holds no state besides its policy."""

    def __init__(self, policy: ScoringPolicy | None = None):
        self._policy = policy or ScoringPolicy()
        # Highest breakpoint first so the best applicable tier wins.
        self._tiers = tuple(
            sorted(self._policy.scholarship_tiers, key=lambda t: t.minimum_cgpa, reverse=True)
        )

    @property
    def policy(self) -> ScoringPolicy:
        return self._policy

    # ── Eligibility ─────────────────────────────────────────────────

    def calculate_eligibility(self, profile: StudentProfile, program: Program) -> EligibilityResult:
        meets_minimum = profile.cgpa is not None and profile.cgpa >= program.minimum_cgpa
        matched, required = self._subject_matches(profile, program)
        has_subjects = matched == required

        academic = self._cgpa_credit(profile, program)
        categorical = self._subject_credit(matched, required)

        return EligibilityResult(
            program_id=program.id,
            program_name=program.name,
            eligible=meets_minimum and has_subjects,
            eligibility_percentage=round(academic + categorical, 2),
            academic_component=round(academic, 2),
            categorical_component=round(categorical, 2),
            meets_minimum_cgpa=meets_minimum,
            has_required_subjects=has_subjects,
            scholarship=self.scholarship_for(profile.cgpa),
        )

    def scholarship_for(self, cgpa: float | None) -> ScholarshipEligibility:
        """Highest scholarship tier whose breakpoint ``cgpa`` reaches."""
        if cgpa is None:
            return ScholarshipEligibility()
        for tier in self._tiers:
            if cgpa >= tier.minimum_cgpa:
                return ScholarshipEligibility(
                    eligible=True, percentage=tier.percentage, name=tier.name
                )
        return ScholarshipEligibility()

    # ── Match score & ranking ───────────────────────────────────────

    def score(self, profile: StudentProfile, program: Program) -> ProgramMatch:
        policy = self._policy
        academic = self.academic_score(profile, program)
        interest = self.interest_score(profile, program)
        total = policy.match_academic_share * academic + policy.match_interest_share * interest

        matched, required = self._subject_matches(profile, program)
        eligible = (
            profile.cgpa is not None
            and profile.cgpa >= program.minimum_cgpa
            and matched == required
        )
        return ProgramMatch(
            program=program,
            match_score=round(_clamp(total, 0.0, 100.0), 2),
            eligible=eligible,
            academic_score=round(academic, 2),
            interest_score=round(interest, 2),
        )

    def rank(self, profile: StudentProfile, programs: list[Program]) -> list[ProgramMatch]:
        """Score every program; best first, ties by program id ascending."""
        matches = [self.score(profile, program) for program in programs]
        matches.sort(key=lambda m: (-m.match_score, m.program.id))
        logger.debug("Ranked %d programs", len(matches))
        return matches[: self._policy.recommendation_limit]

    def academic_score(self, profile: StudentProfile, program: Program) -> float:
        """Academic fit on a 0–100 scale.

        Without a CGPA the CGPA weight is left out of the denominator, so the
        subject credit alone is rescaled to 0–100.
        """
        policy = self._policy
        matched, required = self._subject_matches(profile, program)
        subject = self._subject_credit(matched, required)

        if profile.cgpa is None:
            if policy.academic_subject_weight <= 0:
                return 0.0
            return _clamp(subject / policy.academic_subject_weight * 100.0, 0.0, 100.0)

        total_weight = policy.academic_cgpa_weight + policy.academic_subject_weight
        if total_weight <= 0:
            return 0.0
        raw = self._cgpa_credit(profile, program) + subject
        return _clamp(raw / total_weight * 100.0, 0.0, 100.0)

    def interest_score(self, profile: StudentProfile, program: Program) -> float:
        policy = self._policy
        if not profile.interests:
            return policy.neutral_interest_score

        interests = [i.lower() for i in profile.interests]
        keywords = [k.lower() for k in program.keywords]
        name = program.name.lower()
        description = program.description.lower()

        keyword_hits = sum(
            1 for interest in interests
            if any(keyword in interest or interest in keyword for keyword in keywords)
        )
        text_hits = sum(
            1 for interest in interests
            if interest in name or interest in description
        )

        score = (
            keyword_hits / len(interests) * policy.interest_keyword_weight
            + text_hits / len(interests) * policy.interest_text_weight
        )
        return min(score, 100.0)

    # ── Internals ───────────────────────────────────────────────────

    def _cgpa_credit(self, profile: StudentProfile, program: Program) -> float:
        weight = self._policy.academic_cgpa_weight
        if profile.cgpa is None:
            return 0.0
        if profile.cgpa >= program.minimum_cgpa:
            return weight
        # minimum_cgpa > cgpa >= 0 here, so the division is safe.
        return _clamp(weight * (profile.cgpa / program.minimum_cgpa), 0.0, weight)

    def _subject_credit(self, matched: int, required: int) -> float:
        weight = self._policy.academic_subject_weight
        if required == 0:
            return weight
        return weight * matched / required

    @staticmethod
    def _subject_matches(profile: StudentProfile, program: Program) -> tuple[int, int]:
        """Count required subjects found (case-insensitive substring) in the profile."""
        subjects = [s.lower() for s in profile.subjects]
        matched = sum(
            1 for required in program.required_subjects
            if any(required.lower() in subject for subject in subjects)
        )
        return matched, len(program.required_subjects)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))
