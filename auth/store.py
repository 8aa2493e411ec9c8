"""
UserStore — the persistence port the auth core talks to.

Two implementations exist: ``InMemoryUserStore`` below and
``database.user_store.SqlUserStore``.  Both must reject a second ``create``
for the same key rather than overwrite it.
"""

from __future__ import annotations

import asyncio
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional

from auth.models import UserRecord


class DuplicateKeyError(Exception):
    """A record with this unique key already exists."""

    def __init__(self, unique_key: str):
        super().__init__(f"User already exists: {unique_key}")
        self.unique_key = unique_key


class StoreUnavailable(RuntimeError):
    """The backing store could not be reached or failed unexpectedly."""


class UserStore(ABC):
    @abstractmethod
    async def find_by_key(self, unique_key: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    async def create(
        self,
        unique_key: str,
        password_hash: str,
        name: Optional[str] = None,
    ) -> UserRecord:
        """
        Persist a new user.

        Raises
        ------
        DuplicateKeyError – ``unique_key`` already taken
        StoreUnavailable  – infrastructure failure
        """
        ...


class InMemoryUserStore(UserStore):
    """Process-local store; records vanish on restart."""

    def __init__(self):
        self._by_key: Dict[str, UserRecord] = {}
        self._by_id: Dict[str, UserRecord] = {}
        self._lock = asyncio.Lock()

    async def find_by_key(self, unique_key: str) -> Optional[UserRecord]:
        return self._by_key.get(unique_key)

    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self._by_id.get(user_id)

    async def create(
        self,
        unique_key: str,
        password_hash: str,
        name: Optional[str] = None,
    ) -> UserRecord:
        async with self._lock:
            if unique_key in self._by_key:
                raise DuplicateKeyError(unique_key)
            record = UserRecord(
                id=str(uuid.uuid4()),
                unique_key=unique_key,
                name=name,
                created_at=datetime.now(timezone.utc),
                password_hash=password_hash,
            )
            self._by_key[unique_key] = record
            self._by_id[record.id] = record
        return record

    def __len__(self) -> int:
        return len(self._by_key)
