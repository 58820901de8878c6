"""
Metadata API endpoints

Provides reference data for:
- Experience levels
- Question types and difficulties
- Roles
"""

from fastapi import APIRouter
from pydantic import BaseModel

from src.models.profile import ExperienceLevel
from src.models.question import QuestionDifficulty, QuestionType
from src.prompts.interviewer import ROLE_CONTEXTS

router = APIRouter()


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class OptionInfo(BaseModel):
    """One value of a closed set."""
    id: str
    name: str
    rank: int | None = None


class RoleInfo(BaseModel):
    """Information about a role."""
    id: str
    skills: list[str]
    themes: list[str]


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get("/experience-levels")
async def get_experience_levels() -> list[OptionInfo]:
    """Experience bands, lowest first."""
    return [
        OptionInfo(id=level.value, name=level.display_name, rank=level.rank)
        for level in ExperienceLevel
    ]


@router.get("/question-types")
async def get_question_types() -> list[OptionInfo]:
    return [
        OptionInfo(id=question_type.value, name=question_type.value.replace("-", " ").title())
        for question_type in QuestionType
    ]


@router.get("/difficulties")
async def get_difficulties() -> list[OptionInfo]:
    """Difficulty levels, shallowest first."""
    return [
        OptionInfo(id=difficulty.value, name=difficulty.value.title(), rank=difficulty.rank)
        for difficulty in QuestionDifficulty
    ]


@router.get("/roles")
async def get_roles() -> list[RoleInfo]:
    """Roles with a tailored question context."""
    return [
        RoleInfo(id=key, skills=context.skills, themes=context.patterns)
        for key, context in ROLE_CONTEXTS.items()
    ]
