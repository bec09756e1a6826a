from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Generic, Mapping, Sequence, TypeVar

R = TypeVar("R")


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class IdGenerator(ABC):
    @abstractmethod
    def new_id(self) -> str: ...


class RecordStore(ABC, Generic[R]):
    """
    Owner-scoped CRUD over one collection.

    Every call takes the requesting owner; rows of other owners are never
    returned and never touched.
    """

    @abstractmethod
    async def list_for_owner(self, user_id: str) -> Sequence[R]:
        """All rows of the owner, newest first."""

    @abstractmethod
    async def insert(self, user_id: str, fields: Mapping[str, Any]) -> R:
        """Insert with the owner attached; returns the created row."""

    @abstractmethod
    async def update(self, user_id: str, record_id: str, fields: Mapping[str, Any]) -> None: ...

    @abstractmethod
    async def delete(self, user_id: str, record_id: str) -> None: ...
