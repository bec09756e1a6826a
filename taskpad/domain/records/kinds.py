"""
Record kind descriptors.

A kind ties one record dataclass to its table name, its editable fields,
draft defaults, and validation predicate, so the sync layer stays generic.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Type, TypeVar

from taskpad.constants import PRIORITY_MEDIUM, STATUS_NOT_STARTED
from taskpad.domain.records.models import Note, Task
from taskpad.domain.records.rules import validate_note_fields, validate_task_fields

R = TypeVar("R")


@dataclass(frozen=True)
class RecordKind(Generic[R]):
    name: str
    label: str
    record_type: Type[R]
    mutable_fields: tuple[str, ...]
    defaults: Mapping[str, Any] = field(default_factory=dict)
    validate: Callable[[Mapping[str, Any]], None] = lambda fields: None

    def editable(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Keep only the fields a client may write."""
        return {k: v for k, v in fields.items() if k in self.mutable_fields}

    def draft_from(self, record: R) -> dict[str, Any]:
        return {name: getattr(record, name) for name in self.mutable_fields}


TASK_KIND: RecordKind[Task] = RecordKind(
    name="tasks",
    label="Task",
    record_type=Task,
    mutable_fields=(
        "title",
        "description",
        "status",
        "priority",
        "due_date",
        "task_type",
        "effort_level",
        "assignee",
    ),
    defaults={
        "title": "",
        "description": "",
        "status": STATUS_NOT_STARTED,
        "priority": PRIORITY_MEDIUM,
        "due_date": None,
        "task_type": None,
        "effort_level": None,
        "assignee": None,
    },
    validate=validate_task_fields,
)

NOTE_KIND: RecordKind[Note] = RecordKind(
    name="notes",
    label="Note",
    record_type=Note,
    mutable_fields=("title", "content"),
    defaults={"title": "", "content": ""},
    validate=validate_note_fields,
)
