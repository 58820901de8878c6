"""
Security API endpoints

- CSRF token issuance (double-submit cookie)
- Auth debugging echo, disabled unless DEBUG_AUTH=true
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.config.settings import Settings, get_settings
from src.core.security import generate_csrf_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/csrf")
async def issue_csrf_token(settings: Settings = Depends(get_settings)) -> JSONResponse:
    """
    Issue a fresh CSRF token.

    The token is returned in the body and set as a script-readable
    cookie; clients echo it back on state-changing requests.
    """
    token = generate_csrf_token()

    response = JSONResponse({"ok": True, "csrfToken": token})
    response.set_cookie(
        key=settings.csrf_cookie_name,
        value=token,
        max_age=settings.csrf_cookie_max_age,
        path="/",
        secure=settings.is_production,
        httponly=False,
        samesite="lax",
    )
    return response


@router.get("/debug/cookies")
async def debug_cookies(request: Request, settings: Settings = Depends(get_settings)) -> JSONResponse:
    """Echo the raw Cookie and Authorization headers."""
    if not settings.debug_auth_enabled:
        return JSONResponse({"error": "Debug endpoint disabled"}, status_code=404)

    logger.warning("Auth debug endpoint called")

    return JSONResponse({
        "cookieHeader": request.headers.get("cookie") or None,
        "authHeader": request.headers.get("authorization") or None,
    })
