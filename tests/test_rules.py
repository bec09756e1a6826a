import pytest

from taskpad.domain.common.errors import ValidationError
from taskpad.domain.common.time import format_day, parse_due_date
from taskpad.domain.records.rules import (
    matches_query,
    next_status,
    next_status_for_tab,
    validate_note_fields,
    validate_task_fields,
)


def test_status_cycle():
    assert next_status("Not started") == "In progress"
    assert next_status("In progress") == "Completed"
    assert next_status("Completed") == "Not started"


def test_tab_short_circuits_to_natural_next_state():
    assert next_status_for_tab("not-started", "Not started") == "In progress"
    assert next_status_for_tab("in-progress", "In progress") == "Completed"
    assert next_status_for_tab("completed", "Completed") == "Not started"
    assert next_status_for_tab("all", "Completed") == "Not started"


def test_task_validation():
    validate_task_fields({"title": "ok", "status": "Completed", "priority": "Low", "effort_level": None})
    for bad in (
        {"title": ""},
        {"title": None},
        {"title": "ok", "priority": "Urgent"},
        {"title": "ok", "effort_level": "Huge"},
        {"title": "ok", "status": "Done"},
        {"title": "ok", "due_date": "next friday"},
    ):
        with pytest.raises(ValidationError):
            validate_task_fields(bad)


def test_note_validation_only_needs_title():
    validate_note_fields({"title": "x", "content": None})
    with pytest.raises(ValidationError):
        validate_note_fields({"content": "body"})


def test_matches_query():
    assert matches_query("", "anything")
    assert matches_query("MILK", "buy milk", None)
    assert not matches_query("tea", "buy milk", None)


def test_dates():
    assert parse_due_date(" 2024-03-05 ") == "2024-03-05"
    assert parse_due_date("") is None
    assert format_day("2024-03-05") == "Mar 05, 2024"
    assert format_day("2024-03-05T10:00:00+00:00", with_year=False) == "Mar 05"
    assert format_day(None) == ""
