"""
Dashboard endpoints

Every route here sits behind the session guard: requests without a valid
``token`` cookie are redirected to the login page.
"""

from typing import Any

from fastapi import APIRouter, Depends

from src.api.dependencies import get_dashboard_user
from src.models.auth import User

router = APIRouter()


def _user_summary(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
    }


@router.get("")
async def dashboard_home(user: User = Depends(get_dashboard_user)) -> dict[str, Any]:
    """Dashboard landing data for the signed-in user."""
    return {
        "user": _user_summary(user),
        "sections": ["resumes", "interviews", "ats"],
    }


@router.get("/{section:path}")
async def dashboard_section(section: str, user: User = Depends(get_dashboard_user)) -> dict[str, Any]:
    """Guarded sub-pages (resumes, interviews, ...)."""
    return {
        "user": _user_summary(user),
        "section": section,
    }
