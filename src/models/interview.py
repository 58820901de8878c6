"""
Interview flow models for ResumeCraft
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models.question import InterviewQuestion


class InterviewPhase(str, Enum):
    """Stages of a single interview."""

    OPENING = "opening"          # Rapport, tell me about yourself
    PROGRESSION = "progression"  # Behavioral + technical mix
    DEPTH = "depth"              # Advanced technical
    CLOSING = "closing"          # Questions for us


class Recommendation(BaseModel):
    """Next question picked for a candidate, with where the interview stands."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question: InterviewQuestion | None = None
    phase: InterviewPhase | None = None
    question_number: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=1)

    @property
    def complete(self) -> bool:
        return self.question is None
