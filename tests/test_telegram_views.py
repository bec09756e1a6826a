"""
Rendering and keyboards of the Telegram views; no network involved.
"""
from __future__ import annotations

from types import SimpleNamespace

from taskpad.domain.records.models import Note, Task
from taskpad.ui.telegram.keyboards.common import choice_kb
from taskpad.ui.telegram.keyboards.notes import notes_view_kb
from taskpad.ui.telegram.keyboards.tasks import task_draft_kb, tasks_view_kb
from taskpad.ui.telegram.middlewares.auth import current_identity
from taskpad.ui.telegram.texts.notes import render_notes_view
from taskpad.ui.telegram.texts.tasks import render_kanban, render_task_draft, render_tasks_view
from taskpad.utils import parse_callback_data


def _task(id: str, title: str, status: str = "Not started", **kw) -> Task:
    return Task(id=id, user_id="1", title=title, created_at="2024-03-05T10:00:00+00:00", status=status, **kw)


def _callbacks(markup) -> list[str]:
    return [b.callback_data for row in markup.inline_keyboard for b in row]


def test_task_list_escapes_html_and_shows_details():
    text = render_tasks_view("all", [_task("a", "<b>x</b>", priority="High", due_date="2024-04-01")])
    assert "&lt;b&gt;x&lt;/b&gt;" in text
    assert "High" in text
    assert "Apr 01, 2024" in text


def test_empty_tab_message_names_the_status():
    assert 'No tasks found with "Completed" status.' in render_tasks_view("completed", [])
    assert "Create your first task" in render_tasks_view("all", [])


def test_task_rows_carry_tab_and_id():
    markup = tasks_view_kb("in-progress", [_task("abc", "A", "In progress")])
    data = _callbacks(markup)
    assert "tk:st:in-progress:abc" in data
    assert "tk:edit:abc" in data
    assert "tk:del:in-progress:abc" in data
    assert "tk:new" in data
    assert all(len(d.encode()) <= 64 for d in data)


def test_kanban_lists_every_column():
    text = render_kanban([("Not started", []), ("In progress", [_task("1", "Doing")]), ("Completed", [])])
    assert "Not started</b> (0)" in text
    assert "In progress</b> (1)" in text
    assert "Doing" in text


def test_draft_form_labels_follow_mode():
    create = render_task_draft({"title": "", "status": "Not started"}, editing=False)
    assert "Create New Task" in create
    edit_kb = task_draft_kb(editing=True)
    texts = [b.text for row in edit_kb.inline_keyboard for b in row]
    assert "Update Task" in texts
    assert "tdf:cancel" in _callbacks(edit_kb)


def test_choice_keyboard_indexes_options():
    data = _callbacks(choice_kb("tdf", "effort_level", ("Small", "Medium", "Large"), allow_none=True))
    assert data == [
        "tdf:val:effort_level:0",
        "tdf:val:effort_level:1",
        "tdf:val:effort_level:2",
        "tdf:val:effort_level:none",
        "tdf:form",
    ]
    assert parse_callback_data(data[0], 4) == ("tdf", "val", "effort_level", "0")


def test_notes_view_search_hint_and_clear_button():
    assert "Try a different search term" in render_notes_view([], "zzz")
    assert "Create your first note" in render_notes_view([], "")

    note = Note(id="n1", user_id="1", title="Idea", created_at="2024-03-05T10:00:00+00:00", content="x" * 500)
    text = render_notes_view([note], "")
    assert "Mar 05, 2024" in text
    assert "x" * 500 not in text
    assert "nt:clear" in _callbacks(notes_view_kb([note], "idea"))
    assert "nt:clear" not in _callbacks(notes_view_kb([note], ""))


def test_current_identity():
    event = SimpleNamespace(from_user=SimpleNamespace(id=42))
    assert current_identity(event, frozenset()) == "42"
    assert current_identity(event, frozenset({"42"})) == "42"
    assert current_identity(event, frozenset({"7"})) is None
    assert current_identity(SimpleNamespace(from_user=None), frozenset()) is None
