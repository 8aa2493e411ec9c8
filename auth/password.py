"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  Inputs longer than bcrypt's
72-byte window are first reduced to a base64 SHA-256 digest so every
byte of a long password still counts.
"""

from __future__ import annotations

import base64
import hashlib

import bcrypt

# bcrypt only looks at the first 72 bytes of its input.
MAX_BCRYPT_BYTES = 72


def _bcrypt_input(password: str) -> bytes:
    raw = password.encode()
    if len(raw) <= MAX_BCRYPT_BYTES:
        return raw
    return base64.b64encode(hashlib.sha256(raw).digest())


class PasswordHasher:
    def __init__(self, rounds: int = 12):
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds out of range: {rounds}")
        self._rounds = rounds
        # Verified against when the user does not exist, so both login paths do bcrypt work.
        self._dummy_hash = self.hash("not-a-real-password")

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a password of any length with bcrypt (fresh salt on every call)."""
        return bcrypt.hashpw(
            _bcrypt_input(password), bcrypt.gensalt(rounds=self._rounds)
        ).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(_bcrypt_input(password), password_hash.encode())
        except (ValueError, TypeError, AttributeError):
            return False

    def burn(self, password: str) -> bool:
        """Spend one verification worth of time; always ``False``."""
        self.verify(password, self._dummy_hash)
        return False
