"""
API Dependencies

Provides dependency injection for API endpoints.
Manages singleton instances of core components.
"""

import logging
from typing import Callable

from fastapi import Depends, HTTPException, Request, status

from src.config.settings import Settings, get_settings
from src.core.question_generator import QuestionGenerator
from src.core.security import (
    SESSION_COOKIE,
    AuthorizationError,
    UserRepository,
    get_user_from_token,
    require_admin,
    seed_admin,
    token_from_request,
)
from src.core.worker import enqueue_video_job
from src.models.auth import User
from src.models.report import VideoJob

logger = logging.getLogger(__name__)


class LoginRedirect(Exception):
    """Raised by guards to send the browser to the login page."""

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

_generator: QuestionGenerator | None = None
_users: UserRepository | None = None


def get_question_generator() -> QuestionGenerator:
    """Get the question generator singleton."""
    global _generator

    if _generator is None:
        settings = get_settings()
        _generator = QuestionGenerator(
            question_budget=settings.question_budget,
            max_attempts=settings.max_generation_attempts,
        )

    return _generator


def get_user_repository() -> UserRepository:
    """Get the user repository singleton."""
    global _users

    if _users is None:
        _users = UserRepository()
        seed_admin(_users, get_settings())

    return _users


def get_video_enqueuer() -> Callable[[VideoJob], str]:
    """Get the function that queues recordings for analysis."""
    return enqueue_video_job


# ============================================================================
# AUTH GUARDS
# ============================================================================

def get_dashboard_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Dashboard guard.

    Resolves the ``token`` cookie to a user, or redirects to the login
    page before any protected content is built.
    """
    user = get_user_from_token(request.cookies.get(SESSION_COOKIE), users, settings)
    if user is None:
        logger.info(f"No valid session for {request.url.path}, redirecting to login")
        raise LoginRedirect(settings.login_path)
    return user


def get_admin_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Admin API guard, reading the Authorization header or the session cookie.

    Raises:
        AuthorizationError: When the caller is not an admin
    """
    user = get_user_from_token(token_from_request(request), users, settings)
    return require_admin(user)


def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """
    API guard for any signed-in user.

    Raises:
        HTTPException: 401 when the request carries no valid session
    """
    user = get_user_from_token(token_from_request(request), users, settings)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user


async def cleanup():
    """Cleanup resources on shutdown."""
    global _generator, _users

    _generator = None
    _users = None


__all__ = [
    "AuthorizationError",
    "LoginRedirect",
    "cleanup",
    "get_admin_user",
    "get_current_user",
    "get_dashboard_user",
    "get_question_generator",
    "get_user_repository",
    "get_video_enqueuer",
]
