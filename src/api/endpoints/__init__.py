"""
API endpoint modules for ResumeCraft
"""

from src.api.endpoints import admin, auth, dashboard, interview, metadata, security

__all__ = ["admin", "auth", "dashboard", "interview", "metadata", "security"]
