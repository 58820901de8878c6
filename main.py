"""
ResumeCraft - Resume builder with AI-assisted mock interviews

Main application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from src.config.settings import get_settings
from src.api.router import api_router
from src.api.endpoints import dashboard
from src.api.dependencies import AuthorizationError, LoginRedirect, cleanup, get_user_repository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting ResumeCraft...")
    settings = get_settings()
    logger.info(f"Running in {'production' if settings.is_production else 'development'} mode")
    if settings.debug_auth_enabled:
        logger.warning("DEBUG_AUTH is enabled; /api/debug/cookies echoes credentials")

    users = get_user_repository()
    logger.info(f"User store ready with {len(users)} account(s)")

    yield

    # Shutdown
    logger.info("Shutting down ResumeCraft...")
    await cleanup()


# Create FastAPI application
settings = get_settings()

app = FastAPI(
    title="ResumeCraft",
    description="Resume builder with AI-assisted mock interviews",
    version=settings.app_version,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount API routes
app.include_router(api_router, prefix="/api")

# Guarded dashboard
app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])


# ============================================================================
# ERROR HANDLERS
# ============================================================================

@app.exception_handler(LoginRedirect)
async def login_redirect_handler(request: Request, exc: LoginRedirect):
    """Send unauthenticated browsers to the login page."""
    return RedirectResponse(url=exc.location)


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    return JSONResponse({"error": str(exc)}, status_code=403)


# ============================================================================
# ROOT ROUTES
# ============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
