"""
API layer for ResumeCraft

Contains FastAPI routers for:
- CSRF and auth debugging
- Interview question flow
- Reference metadata
- Admin
- The guarded dashboard
"""

from src.api.router import api_router

__all__ = ["api_router"]
