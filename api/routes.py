"""
User API routes — every endpoint here requires a Bearer token.

Route prefix: /api/user
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from auth.dependencies import get_current_user
from auth.models import UserRecord

router = APIRouter(tags=["user"])


@router.get("/profile")
async def profile(user: UserRecord = Depends(get_current_user)) -> Dict[str, Any]:
    return {
        "success": True,
        "user": {
            **user.public(),
            "createdAt": user.created_at,
        },
    }


@router.get("/dashboard")
async def dashboard(user: UserRecord = Depends(get_current_user)) -> Dict[str, Any]:
    """Example protected route."""
    return {
        "success": True,
        "message": f"Welcome to your dashboard, {user.name or user.unique_key}!",
        "data": {
            "userId": user.id,
            "email": user.unique_key,
            "memberSince": user.created_at,
        },
    }
