"""
SqlUserStore — ``UserStore`` backed by the ``users`` table.

Uniqueness of ``email`` is enforced by the table's unique index; a losing
concurrent insert surfaces as ``IntegrityError`` and is reported as
``DuplicateKeyError``.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from auth.models import UserRecord
from auth.store import DuplicateKeyError, StoreUnavailable, UserStore
from database.models import User

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return None


def _to_record(user: User) -> UserRecord:
    return UserRecord(
        id=str(user.user_id),
        unique_key=user.email,
        name=user.name,
        created_at=user.created_at,
        password_hash=user.password_hash,
    )


class SqlUserStore(UserStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def find_by_key(self, unique_key: str) -> Optional[UserRecord]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(User).where(User.email == unique_key)
                )
                user = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("User lookup by key failed")
            raise StoreUnavailable(str(exc)) from exc
        return _to_record(user) if user is not None else None

    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        uid = _to_uuid(user_id)
        if uid is None:
            return None
        try:
            async with self._session_factory() as session:
                user = await session.get(User, uid)
        except SQLAlchemyError as exc:
            logger.exception("User lookup by id failed")
            raise StoreUnavailable(str(exc)) from exc
        return _to_record(user) if user is not None else None

    async def create(
        self,
        unique_key: str,
        password_hash: str,
        name: Optional[str] = None,
    ) -> UserRecord:
        user = User(
            user_id=uuid.uuid4(),
            email=unique_key,
            name=name,
            password_hash=password_hash,
        )
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(user)
        except IntegrityError as exc:
            raise DuplicateKeyError(unique_key) from exc
        except SQLAlchemyError as exc:
            logger.exception("User insert failed")
            raise StoreUnavailable(str(exc)) from exc
        return _to_record(user)
