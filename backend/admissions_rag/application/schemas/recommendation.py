"""Pydantic schemas for program recommendation and eligibility endpoints."""

from pydantic import BaseModel, Field, model_validator

from admissions_rag.domain.entities import (
    EligibilityResult,
    Program,
    ProgramMatch,
    StudentProfile,
)


# ── Request Schemas ──────────────────────────────────────────────────


class StudentProfileSchema(BaseModel):
    """Academic profile supplied by the caller (e.g. extracted from a transcript)."""

    cgpa: float | None = Field(default=None, ge=0, description="Null when unknown")
    subjects: list[str] = []
    interests: list[str] = []
    student_name: str = ""
    institution_name: str = ""
    qualification_name: str = ""

    def to_entity(self) -> StudentProfile:
        return StudentProfile(
            cgpa=self.cgpa,
            subjects=tuple(self.subjects),
            interests=tuple(self.interests),
            student_name=self.student_name,
            institution_name=self.institution_name,
            qualification_name=self.qualification_name,
        )


class ProgramSchema(BaseModel):
    """A degree program — used both as input candidate and in responses."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = ""
    faculty: str = ""
    duration: str = ""
    minimum_cgpa: float = Field(default=0.0, ge=0)
    required_subjects: list[str] = []
    keywords: list[str] = []

    @classmethod
    def from_entity(cls, program: Program) -> "ProgramSchema":
        return cls(
            id=program.id,
            name=program.name,
            description=program.description,
            faculty=program.faculty,
            duration=program.duration,
            minimum_cgpa=program.minimum_cgpa,
            required_subjects=list(program.required_subjects),
            keywords=list(program.keywords),
        )

    def to_entity(self) -> Program:
        return Program(
            id=self.id,
            name=self.name,
            description=self.description,
            faculty=self.faculty,
            duration=self.duration,
            minimum_cgpa=self.minimum_cgpa,
            required_subjects=tuple(self.required_subjects),
            keywords=tuple(self.keywords),
        )


class RecommendationRequest(BaseModel):
    """Profile plus optional candidates; the catalog is used when omitted."""

    profile: StudentProfileSchema
    candidates: list[ProgramSchema] | None = None


class EligibilityRequest(BaseModel):
    """Profile plus exactly one of ``program_id`` or ``program``."""

    profile: StudentProfileSchema
    program_id: str | None = None
    program: ProgramSchema | None = None

    @model_validator(mode="after")
    def _one_program(self) -> "EligibilityRequest":
        if (self.program_id is None) == (self.program is None):
            raise ValueError("Provide exactly one of 'program_id' or 'program'")
        return self


# ── Response Schemas ─────────────────────────────────────────────────


class ProgramMatchSchema(BaseModel):
    """A recommended program with its scores."""

    program: ProgramSchema
    match_score: float
    eligible: bool
    academic_score: float
    interest_score: float

    @classmethod
    def from_entity(cls, match: ProgramMatch) -> "ProgramMatchSchema":
        return cls(
            program=ProgramSchema.from_entity(match.program),
            match_score=match.match_score,
            eligible=match.eligible,
            academic_score=match.academic_score,
            interest_score=match.interest_score,
        )


class RecommendationResponse(BaseModel):
    success: bool = True
    recommendations: list[ProgramMatchSchema] = []


class ScholarshipSchema(BaseModel):
    eligible: bool
    percentage: int
    name: str | None = None


class EligibilityResponse(BaseModel):
    """Eligibility breakdown for one program."""

    program_id: str
    program_name: str
    eligible: bool
    eligibility_percentage: float
    academic_component: float
    categorical_component: float
    meets_minimum_cgpa: bool
    has_required_subjects: bool
    scholarship: ScholarshipSchema

    @classmethod
    def from_entity(cls, result: EligibilityResult) -> "EligibilityResponse":
        return cls(
            program_id=result.program_id,
            program_name=result.program_name,
            eligible=result.eligible,
            eligibility_percentage=result.eligibility_percentage,
            academic_component=result.academic_component,
            categorical_component=result.categorical_component,
            meets_minimum_cgpa=result.meets_minimum_cgpa,
            has_required_subjects=result.has_required_subjects,
            scholarship=ScholarshipSchema(
                eligible=result.scholarship.eligible,
                percentage=result.scholarship.percentage,
                name=result.scholarship.name,
            ),
        )
