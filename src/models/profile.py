"""
Candidate profile models for ResumeCraft

Defines the taxonomy used to tailor an interview:
- Experience bands
- Candidate profile (role, scores, resume skills)
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class OrdinalEnum(str, Enum):
    """
    String enum whose members compare by declaration order.

    Members keep their wire value (``"1-3"``, ``"deep"``) while
    ``<`` / ``>`` follow the order they are declared in. Plain strings are
    coerced to members first, so ``ExperienceLevel.SENIOR > "fresher"``;
    a string that names no member raises ValueError.
    """

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def _coerce(self, other: object):
        if isinstance(other, type(self)):
            return other
        if isinstance(other, str) and not isinstance(other, Enum):
            return type(self)(other)
        return None

    def __lt__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank >= other.rank


class ExperienceLevel(OrdinalEnum):
    """Years of professional experience, lowest band first."""

    FRESHER = "fresher"
    JUNIOR = "1-3"
    MID = "3-5"
    SENIOR = "5+"

    @property
    def display_name(self) -> str:
        """Human-readable band label."""
        names = {
            "fresher": "Fresher",
            "1-3": "1-3 years",
            "3-5": "3-5 years",
            "5+": "5+ years",
        }
        return names.get(self.value, self.value)


# Scores are percentages
SCORE_MIN = 0.0
SCORE_MAX = 100.0


class CandidateProfile(BaseModel):
    """Everything the interviewer knows about the candidate up front."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    role: str = Field(..., description="Target role, free text (e.g. 'Backend')")
    experience_level: ExperienceLevel = Field(
        ...,
        description="Experience band"
    )

    # Scores
    technical_score: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    communication_score: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX)
    confidence_score: float = Field(..., ge=SCORE_MIN, le=SCORE_MAX)

    # Skills in the order they were extracted from the resume
    resume_skills: list[str] = Field(default_factory=list)

    @field_validator("role")
    @classmethod
    def _role_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("role must not be empty")
        return value

    @field_validator("resume_skills")
    @classmethod
    def _drop_blank_skills(cls, value: list[str]) -> list[str]:
        return [skill.strip() for skill in value if skill and skill.strip()]
