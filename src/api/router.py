"""
Main API router for ResumeCraft

Aggregates all API routes and provides the main application router.
"""

from fastapi import APIRouter

from src.api.endpoints import admin, auth, interview, metadata, security

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    security.router,
    tags=["Security"]
)

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Auth"]
)

api_router.include_router(
    interview.router,
    prefix="/interview",
    tags=["Interview"]
)

api_router.include_router(
    metadata.router,
    prefix="/metadata",
    tags=["Metadata"]
)

api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["Admin"]
)
