from __future__ import annotations

from typing import Any, Mapping, Optional

from taskpad.constants import (
    EFFORT_OPTIONS,
    PRIORITY_OPTIONS,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_NOT_STARTED,
    STATUS_OPTIONS,
    TAB_ALL,
    TAB_STATUS,
)
from taskpad.domain.common.errors import ValidationError
from taskpad.domain.common.time import parse_due_date


_STATUS_CYCLE = {
    STATUS_NOT_STARTED: STATUS_IN_PROGRESS,
    STATUS_IN_PROGRESS: STATUS_COMPLETED,
    STATUS_COMPLETED: STATUS_NOT_STARTED,
}


def validate_title(title: Optional[str], label: str = "Title") -> None:
    if not title or not title.strip():
        raise ValidationError(f"{label} is required.")


def validate_status(status: Any) -> None:
    if status not in STATUS_OPTIONS:
        raise ValidationError(f"Unknown status: {status!r}.")


def validate_task_fields(fields: Mapping[str, Any]) -> None:
    validate_title(fields.get("title"), "Task title")
    if "status" in fields:
        validate_status(fields["status"])
    if "priority" in fields and fields["priority"] not in PRIORITY_OPTIONS:
        raise ValidationError(f"Unknown priority: {fields['priority']!r}.")
    effort = fields.get("effort_level")
    if effort is not None and effort not in EFFORT_OPTIONS:
        raise ValidationError(f"Unknown effort level: {effort!r}.")
    due = fields.get("due_date")
    if due:
        try:
            parse_due_date(due)
        except ValueError:
            raise ValidationError("Due date must be YYYY-MM-DD.") from None


def validate_note_fields(fields: Mapping[str, Any]) -> None:
    validate_title(fields.get("title"), "Note title")


def next_status(current: str) -> str:
    """Not started -> In progress -> Completed -> Not started."""
    return _STATUS_CYCLE.get(current, STATUS_IN_PROGRESS)


def next_status_for_tab(tab: str, current: str) -> str:
    """
    On a status tab every row has the tab's status, so the step is fixed by
    the tab itself rather than the row value.
    """
    if tab == TAB_ALL or tab not in TAB_STATUS:
        return next_status(current)
    return _STATUS_CYCLE[TAB_STATUS[tab]]


def matches_query(query: str, *values: Optional[str]) -> bool:
    """Case-insensitive substring match on any of the values; empty query matches all."""
    needle = (query or "").strip().lower()
    if not needle:
        return True
    return any(v and needle in v.lower() for v in values)
