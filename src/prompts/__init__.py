"""
Interviewer prompt patterns for ResumeCraft

Contains the template pools for:
- Opening and closing questions
- Technical, behavioral, system design, coding and managerial questions
- Role-specific scenarios
"""

from src.prompts.interviewer import DEFAULT_ROLE, ROLE_CONTEXTS, RoleContext

__all__ = [
    "DEFAULT_ROLE",
    "ROLE_CONTEXTS",
    "RoleContext",
]
