"""Domain entity for a requester's academic profile."""

import math
from dataclasses import dataclass, field

from admissions_rag.domain.exceptions import ValidationError


@dataclass(frozen=True)
class StudentProfile:
    """Academic attributes of a student, validated once at construction.

    ``cgpa`` is nullable: ``None`` means the score is unknown, which the
    scorer treats differently from a low score.
    """

    cgpa: float | None = None
    subjects: tuple[str, ...] = ()
    interests: tuple[str, ...] = ()
    student_name: str = ""
    institution_name: str = ""
    qualification_name: str = ""

    def __post_init__(self) -> None:
        if self.cgpa is not None:
            if isinstance(self.cgpa, bool) or not isinstance(self.cgpa, (int, float)):
                raise ValidationError("cgpa", "must be a number or null")
            if not math.isfinite(self.cgpa) or self.cgpa < 0:
                raise ValidationError("cgpa", "must be a finite, non-negative number")
            object.__setattr__(self, "cgpa", float(self.cgpa))

        object.__setattr__(self, "subjects", _clean_terms("subjects", self.subjects))
        object.__setattr__(self, "interests", _clean_terms("interests", self.interests))


def _clean_terms(field_name: str, values) -> tuple[str, ...]:
    """Strip whitespace, drop blanks, and reject non-string entries."""
    if isinstance(values, str):
        raise ValidationError(field_name, "must be a list of strings, not a string")
    cleaned: list[str] = []
    for value in values or ():
        if not isinstance(value, str):
            raise ValidationError(field_name, f"entry {value!r} is not a string")
        if value.strip():
            cleaned.append(value.strip())
    return tuple(cleaned)
