"""
AuthService — register, login and token authentication.

Expected failures come back as ``Failure`` results; only store faults
(``StoreUnavailable``) propagate as exceptions.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
import time
from typing import Optional

from auth.jwt import Clock, TokenService
from auth.models import AuthError, AuthResult, Failure, Success, UserRecord
from auth.password import PasswordHasher
from auth.store import DuplicateKeyError, InMemoryUserStore, UserStore

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenService):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    async def register(
        self,
        unique_key: str,
        password: str,
        name: Optional[str] = None,
    ) -> AuthResult:
        """Create a user.  ``Success(UserRecord)`` or ``Failure(DUPLICATE_KEY)``."""
        if await self.store.find_by_key(unique_key) is not None:
            logger.info("Registration rejected: key already taken")
            return Failure(error=AuthError.DUPLICATE_KEY)

        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        try:
            record = await self.store.create(unique_key, password_hash, name=name)
        except DuplicateKeyError:
            # Lost the race against a concurrent registration.
            logger.info("Registration rejected: key taken concurrently")
            return Failure(error=AuthError.DUPLICATE_KEY)

        logger.info("Registered user %s", record.id)
        return Success(value=record)

    async def login(self, unique_key: str, password: str) -> AuthResult:
        """``Success(token)`` or ``Failure(INVALID_CREDENTIALS)``; never says which check failed."""
        record = await self.store.find_by_key(unique_key)
        if record is None:
            await asyncio.to_thread(self.hasher.burn, password)
            verified = False
        else:
            verified = await asyncio.to_thread(
                self.hasher.verify, password, record.password_hash
            )

        if not verified:
            logger.info("Login failed")
            return Failure(error=AuthError.INVALID_CREDENTIALS)

        logger.info("Login: %s", record.id)
        return Success(value=self.tokens.issue(record.id))

    def authenticate(self, token: str) -> AuthResult:
        """``Success(subject_id)`` or ``Failure(UNAUTHORIZED, reason=<specific kind>)``."""
        result = self.tokens.verify(token)
        if result.ok:
            return result
        logger.info("Token rejected: %s", result.error.value)
        return Failure(error=AuthError.UNAUTHORIZED, reason=result.error)

    async def current_user(self, token: str) -> AuthResult:
        """Authenticate, then resolve the subject to a stored user."""
        result = self.authenticate(token)
        if not result.ok:
            return result
        record = await self.store.find_by_id(result.value)
        if record is None:
            logger.info("Token subject %s no longer exists", result.value)
            return Failure(error=AuthError.UNAUTHORIZED)
        return Success(value=record)

    def issue_token(self, record: UserRecord) -> str:
        return self.tokens.issue(record.id)


def build_auth_service(settings, store: Optional[UserStore] = None, clock: Optional[Clock] = None) -> AuthService:
    """Wire an ``AuthService`` from ``Settings``; nothing below reads config directly."""
    secret = settings.jwt_secret
    if not secret:
        logger.warning(
            "JWT_SECRET not set — using a random per-process secret; "
            "issued tokens will not survive a restart."
        )
        secret = secrets.token_urlsafe(32)

    if store is None:
        if settings.user_store == "memory":
            store = InMemoryUserStore()
        else:
            from database.session import async_session_factory
            from database.user_store import SqlUserStore

            store = SqlUserStore(async_session_factory)
    logger.info("User store: %s", type(store).__name__)

    tokens = TokenService(secret, settings.jwt_expiry_seconds, clock or time.time)
    return AuthService(store, PasswordHasher(settings.bcrypt_rounds), tokens)
