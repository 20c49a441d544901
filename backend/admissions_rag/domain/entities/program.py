"""Domain entities for degree programs and the results of matching a profile against them."""

from dataclasses import dataclass, field

from admissions_rag.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Program:
    """A catalog entry a student can be matched against."""

    id: str
    name: str
    description: str = ""
    faculty: str = ""
    duration: str = ""
    minimum_cgpa: float = 0.0
    required_subjects: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.id or not str(self.id).strip():
            raise ValidationError("program.id", "must not be empty")
        if not self.name or not self.name.strip():
            raise ValidationError("program.name", "must not be empty")
        if self.minimum_cgpa < 0:
            raise ValidationError("program.minimum_cgpa", "must not be negative")
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "required_subjects", tuple(self.required_subjects))
        object.__setattr__(self, "keywords", tuple(self.keywords))


@dataclass(frozen=True)
class ScholarshipEligibility:
    """Scholarship tier a CGPA qualifies for."""

    eligible: bool = False
    percentage: int = 0
    name: str | None = None


@dataclass(frozen=True)
class ProgramMatch:
    """A program scored against a profile — transient, never persisted."""

    program: Program
    match_score: float  # 0 – 100
    eligible: bool
    academic_score: float  # 0 – 100
    interest_score: float  # 0 – 100


@dataclass(frozen=True)
class EligibilityResult:
    """Eligibility breakdown of a profile for a single program."""

    program_id: str
    program_name: str
    eligible: bool
    eligibility_percentage: float
    academic_component: float
    categorical_component: float
    meets_minimum_cgpa: bool
    has_required_subjects: bool
    scholarship: ScholarshipEligibility = field(default_factory=ScholarshipEligibility)
