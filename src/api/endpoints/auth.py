"""
Auth API endpoints

Handles:
- Account registration
- Email/password login, issuing the ``token`` session cookie
- Logout
- Current session lookup
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from src.api.dependencies import get_user_repository
from src.config.settings import Settings, get_settings
from src.core.security import (
    SESSION_COOKIE,
    UserRepository,
    authenticate_user,
    create_access_token,
    get_user_from_token,
    hash_password,
    token_from_request,
)
from src.models.auth import User

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class RegisterRequest(BaseModel):
    """Request to create an account."""
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    # bcrypt only reads the first 72 bytes
    password: str = Field(..., min_length=8, max_length=72)
    name: str | None = Field(default=None, max_length=100)


class LoginRequest(BaseModel):
    """Email/password credentials."""
    email: str
    password: str


def user_payload(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
    }


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    users: UserRepository = Depends(get_user_repository),
) -> dict[str, Any]:
    """Create a regular account."""
    if users.find_by_email(body.email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    user = users.add(User(
        email=body.email.strip().lower(),
        name=body.name,
        hashed_password=hash_password(body.password),
    ))
    logger.info(f"Registered account {user.id}")

    return {"ok": True, "user": user_payload(user)}


@router.post("/login")
async def login(
    body: LoginRequest,
    settings: Settings = Depends(get_settings),
    users: UserRepository = Depends(get_user_repository),
) -> JSONResponse:
    """
    Check credentials and start a session.

    The session token is set as the ``token`` cookie and also returned in
    the body for API clients that send it as a Bearer header.
    """
    user = authenticate_user(users, body.email, body.password)
    if user is None:
        logger.info("Rejected login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    token = create_access_token(user.id, settings, extra_claims={"role": user.role.value})

    response = JSONResponse({"ok": True, "token": token, "user": user_payload(user)})
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        max_age=settings.token_ttl_minutes * 60,
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="lax",
    )
    logger.info(f"User {user.id} signed in")
    return response


@router.post("/logout")
async def logout() -> JSONResponse:
    """End the session by clearing the cookie."""
    response = JSONResponse({"ok": True})
    response.delete_cookie(SESSION_COOKIE, path="/")
    return response


@router.get("/session")
async def get_session(
    request: Request,
    settings: Settings = Depends(get_settings),
    users: UserRepository = Depends(get_user_repository),
) -> dict[str, Any]:
    """Current user, or an empty object when signed out."""
    user = get_user_from_token(token_from_request(request), users, settings)
    if user is None:
        return {}
    return {"user": user_payload(user)}
