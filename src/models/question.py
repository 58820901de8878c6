"""
Question models for ResumeCraft
"""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.models.profile import OrdinalEnum


class QuestionType(str, Enum):
    """Types of interview questions."""

    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"          # Tell me about a time...
    CODING = "coding"                  # Write working code
    SYSTEM_DESIGN = "system-design"    # Design a system for X
    MANAGERIAL = "managerial"


class QuestionDifficulty(OrdinalEnum):
    """Question depth, shallowest first."""

    INTRO = "intro"
    CORE = "core"
    DEEP = "deep"


class InterviewQuestion(BaseModel):
    """A single interview question. Immutable once built."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    # Identification
    id: str = Field(
        default_factory=lambda: str(uuid4()),
        min_length=1,
        description="Unique question ID"
    )

    # Content
    prompt: str = Field(..., min_length=1, description="The question text")
    context: str = Field(default="", description="Scenario the question sits in")

    # Classification
    type: QuestionType = Field(..., description="Type of question")
    difficulty: QuestionDifficulty = Field(..., description="Difficulty level")
    focuses: list[str] = Field(
        default_factory=list,
        description="Topic tags the question covers"
    )

    # Coding
    requires_coding: bool | None = None
    languages: list[str] | None = Field(
        default=None,
        description="Accepted languages, only for coding questions"
    )
    constraints: list[str] | None = Field(
        default=None,
        description="Limits such as time or complexity bounds"
    )

    @field_validator("focuses")
    @classmethod
    def _unique_focuses(cls, value: list[str]) -> list[str]:
        # Set semantics, first occurrence wins
        return list(dict.fromkeys(value))

    @model_validator(mode="after")
    def _check_coding_fields(self) -> "InterviewQuestion":
        if self.requires_coding:
            if not self.languages:
                raise ValueError("languages must be non-empty when requiresCoding is true")
        elif self.languages or self.constraints:
            raise ValueError("languages and constraints require requiresCoding to be true")
        return self

    def with_difficulty(self, difficulty: QuestionDifficulty) -> "InterviewQuestion":
        """Return a copy at another difficulty."""
        return self.model_copy(update={"difficulty": difficulty})
