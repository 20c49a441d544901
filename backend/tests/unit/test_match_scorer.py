"""Unit tests for the MatchScorer — eligibility, match score, ranking and scholarships."""

import pytest

from admissions_rag.application.services import MatchScorer, ScoringPolicy
from admissions_rag.domain.entities import Program, StudentProfile
from admissions_rag.domain.exceptions import ValidationError


ENGINEERING = Program(
    id="4",
    name="Bachelor of Electrical Engineering",
    description="Circuits, power systems and electronics.",
    minimum_cgpa=3.0,
    required_subjects=("Mathematics", "Physics"),
    keywords=("electronics", "circuits", "engineering"),
)


# ── Eligibility ──


def test_eligible_profile_gets_full_components():
    profile = StudentProfile(cgpa=3.2, subjects=("mathematics", "physics", "chemistry"))

    result = MatchScorer().calculate_eligibility(profile, ENGINEERING)

    assert result.eligible is True
    assert result.academic_component == pytest.approx(60)
    assert result.categorical_component == pytest.approx(40)
    assert result.eligibility_percentage == pytest.approx(100)
    assert result.meets_minimum_cgpa is True
    assert result.has_required_subjects is True


def test_below_minimum_profile_gets_partial_components():
    profile = StudentProfile(cgpa=2.4, subjects=("mathematics",))

    result = MatchScorer().calculate_eligibility(profile, ENGINEERING)

    assert result.eligible is False
    assert result.academic_component == pytest.approx(48)
    assert result.categorical_component == pytest.approx(20)
    assert result.eligibility_percentage == pytest.approx(68)
    assert result.meets_minimum_cgpa is False
    assert result.has_required_subjects is False


def test_subject_match_is_case_insensitive_substring():
    profile = StudentProfile(cgpa=3.5, subjects=("A-Level Mathematics", "PHYSICS (HL)"))

    result = MatchScorer().calculate_eligibility(profile, ENGINEERING)

    assert result.has_required_subjects is True


def test_missing_cgpa_is_never_eligible():
    profile = StudentProfile(cgpa=None, subjects=("mathematics", "physics"))

    result = MatchScorer().calculate_eligibility(profile, ENGINEERING)

    assert result.eligible is False
    assert result.academic_component == 0
    assert result.categorical_component == pytest.approx(40)
    assert result.scholarship.eligible is False


def test_program_without_required_subjects_gives_full_subject_credit():
    program = Program(id="9", name="Open Studies", minimum_cgpa=2.0)

    result = MatchScorer().calculate_eligibility(StudentProfile(cgpa=2.5), program)

    assert result.eligible is True
    assert result.categorical_component == pytest.approx(40)


# ── Scholarships ──


@pytest.mark.parametrize(
    "cgpa, percentage, name",
    [
        (3.9, 100, "Presidential Scholarship"),
        (3.8, 100, "Presidential Scholarship"),
        (3.6, 75, "Dean's Scholarship"),
        (3.2, 50, "Merit Scholarship"),
        (3.0, 25, "Achievement Scholarship"),
    ],
)
def test_scholarship_tiers(cgpa, percentage, name):
    scholarship = MatchScorer().scholarship_for(cgpa)

    assert scholarship.eligible is True
    assert scholarship.percentage == percentage
    assert scholarship.name == name


def test_no_scholarship_below_lowest_tier():
    scholarship = MatchScorer().scholarship_for(2.9)

    assert scholarship.eligible is False
    assert scholarship.percentage == 0
    assert scholarship.name is None


# ── Match score ──


def test_no_interests_gives_neutral_interest_score():
    match = MatchScorer().score(StudentProfile(cgpa=3.2), ENGINEERING)

    assert match.interest_score == 50
    # Academic 60% CGPA credit only (no subjects listed): 60/100.
    assert match.academic_score == pytest.approx(60)
    assert match.match_score == pytest.approx(55)


def test_interest_hits_on_keywords_and_text():
    profile = StudentProfile(
        cgpa=3.2,
        subjects=("mathematics", "physics"),
        interests=("electronics", "cooking"),
    )

    match = MatchScorer().score(profile, ENGINEERING)

    # "electronics" hits a keyword (70) and the description (30); "cooking" hits nothing.
    assert match.interest_score == pytest.approx(50)
    assert match.academic_score == pytest.approx(100)
    assert match.match_score == pytest.approx(75)
    assert match.eligible is True


def test_missing_cgpa_rescales_subject_credit():
    profile = StudentProfile(cgpa=None, subjects=("mathematics",))

    match = MatchScorer().score(profile, ENGINEERING)

    assert match.academic_score == pytest.approx(50)
    assert match.eligible is False


def test_scores_stay_within_bounds():
    profile = StudentProfile(
        cgpa=4.0,
        subjects=("mathematics", "physics"),
        interests=("engineering", "electrical engineering", "circuits"),
    )

    match = MatchScorer().score(profile, ENGINEERING)

    assert 0 <= match.interest_score <= 100
    assert 0 <= match.match_score <= 100


def test_custom_policy_weights_are_used():
    policy = ScoringPolicy(match_academic_share=1.0, match_interest_share=0.0)

    match = MatchScorer(policy).score(StudentProfile(cgpa=1.5), ENGINEERING)

    assert match.match_score == pytest.approx(match.academic_score)


# ── Ranking ──


def test_equal_scores_are_ordered_by_program_id():
    b = Program(id="b", name="Program Beta", minimum_cgpa=2.0)
    a = Program(id="a", name="Program Alpha", minimum_cgpa=2.0)

    ranked = MatchScorer().rank(StudentProfile(cgpa=3.0), [b, a])

    assert [m.program.id for m in ranked] == ["a", "b"]
    assert ranked[0].match_score == ranked[1].match_score


def test_rank_returns_best_first_and_respects_limit():
    programs = [
        Program(id=str(i), name=f"Program {i}", minimum_cgpa=float(i))
        for i in range(1, 8)
    ]

    ranked = MatchScorer().rank(StudentProfile(cgpa=3.0), programs)

    assert len(ranked) == 5
    scores = [m.match_score for m in ranked]
    assert scores == sorted(scores, reverse=True)


# ── Profile validation ──


@pytest.mark.parametrize("cgpa", [-0.1, float("nan"), float("inf"), True, "3.0"])
def test_invalid_cgpa_is_rejected(cgpa):
    with pytest.raises(ValidationError):
        StudentProfile(cgpa=cgpa)


def test_profile_terms_are_trimmed():
    profile = StudentProfile(subjects=(" Mathematics ", "", "  "), interests=("AI",))

    assert profile.subjects == ("Mathematics",)
    assert profile.interests == ("AI",)
