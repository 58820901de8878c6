"""
User models for ResumeCraft
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Account roles."""

    USER = "USER"
    ADMIN = "ADMIN"


class User(BaseModel):
    """An account that can sign in to the dashboard."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    email: str
    name: str | None = None
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    # bcrypt hash; never serialized
    hashed_password: str | None = Field(default=None, exclude=True, repr=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
