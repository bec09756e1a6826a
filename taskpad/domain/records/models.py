from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from taskpad.constants import PRIORITY_MEDIUM, STATUS_NOT_STARTED


class Record(Protocol):
    """Shape shared by every owner-scoped record kind."""

    @property
    def id(self) -> str: ...

    @property
    def user_id(self) -> str: ...

    @property
    def title(self) -> str: ...

    @property
    def created_at(self) -> str: ...


# Assigned by the store once, never patched by the client.
IMMUTABLE_FIELDS = frozenset({"id", "user_id", "created_at"})


@dataclass(frozen=True)
class Task:
    id: str
    user_id: str
    title: str
    created_at: str  # ISO datetime, UTC
    description: Optional[str] = None
    status: str = STATUS_NOT_STARTED
    priority: str = PRIORITY_MEDIUM
    due_date: Optional[str] = None  # YYYY-MM-DD
    task_type: Optional[str] = None
    effort_level: Optional[str] = None
    assignee: Optional[str] = None


@dataclass(frozen=True)
class Note:
    id: str
    user_id: str
    title: str
    created_at: str
    content: Optional[str] = None
