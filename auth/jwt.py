"""
JWT-style token creation and verification.

Tokens are a URL-safe base64 JSON payload (``sub``, ``iat``, ``exp``)
followed by ``.`` and a hex HMAC-SHA256 signature over the encoded payload.
The secret, TTL and clock are passed in explicitly so tests can pin them.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Callable

from auth.models import AuthError, AuthResult, Failure, Success

Clock = Callable[[], float]


class TokenService:
    def __init__(self, secret: str, ttl_seconds: int, clock: Clock = time.time):
        if not secret:
            raise ValueError("token secret must not be empty")
        if ttl_seconds <= 0:
            raise ValueError("token TTL must be positive")
        self._secret = secret.encode()
        self._ttl = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def _sign(self, body: bytes) -> str:
        return hmac.new(self._secret, body, hashlib.sha256).hexdigest()

    def issue(self, subject_id: str) -> str:
        """Create a signed token for ``subject_id`` expiring after the TTL."""
        now = int(self._clock())
        payload = {"sub": subject_id, "iat": now, "exp": now + self._ttl}
        body = urlsafe_b64encode(
            json.dumps(payload, separators=(",", ":")).encode()
        )
        return body.decode() + "." + self._sign(body)

    def verify(self, token: str) -> AuthResult:
        """
        Check signature then expiry.

        Returns ``Success(sub)`` or a ``Failure`` with ``MALFORMED``,
        ``INVALID_SIGNATURE`` or ``EXPIRED``.
        """
        if not isinstance(token, str):
            return Failure(error=AuthError.MALFORMED)
        parts = token.split(".")
        if len(parts) != 2 or not all(parts):
            return Failure(error=AuthError.MALFORMED)
        body, sig = parts

        try:
            body_bytes = body.encode("ascii")
        except UnicodeEncodeError:
            return Failure(error=AuthError.MALFORMED)
        if not hmac.compare_digest(sig.encode(), self._sign(body_bytes).encode()):
            return Failure(error=AuthError.INVALID_SIGNATURE)

        try:
            payload = json.loads(urlsafe_b64decode(body_bytes))
        except (binascii.Error, ValueError):
            return Failure(error=AuthError.MALFORMED)
        if not isinstance(payload, dict):
            return Failure(error=AuthError.MALFORMED)
        subject, exp = payload.get("sub"), payload.get("exp")
        if not isinstance(subject, str) or not isinstance(exp, (int, float)):
            return Failure(error=AuthError.MALFORMED)

        if self._clock() > exp:
            return Failure(error=AuthError.EXPIRED)
        return Success(value=subject)
