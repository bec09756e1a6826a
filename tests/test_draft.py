from __future__ import annotations

import asyncio

import pytest

from taskpad.domain.common.errors import ConflictError, ValidationError
from taskpad.domain.records.kinds import NOTE_KIND, TASK_KIND
from taskpad.domain.records.models import Task
from taskpad.domain.sync.draft import DraftSession


def test_begin_without_record_seeds_task_defaults():
    draft = DraftSession(TASK_KIND)
    draft.begin()
    assert draft.is_active
    assert not draft.is_editing
    assert draft.fields["status"] == "Not started"
    assert draft.fields["priority"] == "Medium"
    assert draft.fields["title"] == ""


def test_begin_without_record_seeds_note_defaults():
    draft = DraftSession(NOTE_KIND)
    draft.begin()
    assert draft.fields == {"title": "", "content": ""}


def test_begin_with_record_copies_mutable_fields():
    task = Task(id="7", user_id="u1", title="Write docs", created_at="c", priority="High")
    draft = DraftSession(TASK_KIND)
    draft.begin(task)
    assert draft.is_editing
    assert draft.editing_id == "7"
    assert "id" not in draft.fields

    draft.set_field("title", "Changed")
    assert task.title == "Write docs"
    assert draft.fields["title"] == "Changed"


def test_set_field_rejects_unknown_names():
    draft = DraftSession(NOTE_KIND)
    draft.begin()
    with pytest.raises(ValidationError):
        draft.set_field("status", "Completed")


def test_validate_for_submit_requires_title():
    draft = DraftSession(TASK_KIND)
    draft.begin()
    with pytest.raises(ValidationError):
        draft.validate_for_submit()

    draft.set_field("title", "   ")
    with pytest.raises(ValidationError):
        draft.validate_for_submit()

    draft.set_field("title", "Ship it")
    draft.validate_for_submit()


def test_discard_closes_the_session():
    draft = DraftSession(NOTE_KIND)
    draft.begin()
    draft.discard()
    assert not draft.is_active
    with pytest.raises(ValidationError):
        draft.set_field("title", "x")


def test_submitting_rejects_a_second_submit():
    draft = DraftSession(NOTE_KIND)
    draft.begin()

    async def run():
        async with draft.submitting():
            assert draft.is_submitting
            with pytest.raises(ConflictError):
                async with draft.submitting():
                    pass
        assert not draft.is_submitting

    asyncio.run(run())
