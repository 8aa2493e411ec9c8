"""
Value types shared by the auth core: user records, error kinds and results.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field


class UserRecord(BaseModel):
    """A stored user.  ``password_hash`` never leaves the core."""

    model_config = {"frozen": True}

    id: str
    unique_key: str
    name: Optional[str] = None
    created_at: Optional[datetime] = None
    password_hash: str = Field(..., repr=False, exclude=True)

    def public(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.unique_key}


class AuthError(str, Enum):
    DUPLICATE_KEY = "duplicate_key"
    INVALID_CREDENTIALS = "invalid_credentials"
    MALFORMED = "malformed"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
    UNAUTHORIZED = "unauthorized"


class Success(BaseModel):
    model_config = {"frozen": True}

    ok: Literal[True] = True
    value: Any = None


class Failure(BaseModel):
    """
    An expected failure.

    ``error`` is the caller-facing kind; ``reason`` keeps the more specific
    kind when several were collapsed into one (e.g. ``EXPIRED`` behind
    ``UNAUTHORIZED``).
    """

    model_config = {"frozen": True}

    ok: Literal[False] = False
    error: AuthError
    reason: Optional[AuthError] = None


AuthResult = Union[Success, Failure]
