"""
Admin API endpoints
"""

from typing import Any

from fastapi import APIRouter, Depends

from src.api.dependencies import get_admin_user, get_user_repository
from src.core.security import UserRepository
from src.models.auth import User

router = APIRouter()


@router.get("/users")
async def list_users(
    admin: User = Depends(get_admin_user),
    users: UserRepository = Depends(get_user_repository),
) -> list[dict[str, Any]]:
    """List all accounts. Admins only."""
    return [
        {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role.value,
            "createdAt": user.created_at.isoformat(),
        }
        for user in users.all()
    ]
