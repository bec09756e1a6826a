from __future__ import annotations

from aiogram.types import InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from taskpad.constants import TAB_KANBAN, TABS
from taskpad.domain.records.models import Task
from taskpad.ui.telegram.texts.tasks import MAX_ROWS, TAB_TITLES, status_icon

DRAFT_PREFIX = "tdf"

# field -> button text; choice fields are handled by choice_kb
DRAFT_BUTTONS = (
    ("title", "Title"),
    ("description", "Description"),
    ("status", "Status"),
    ("priority", "Priority"),
    ("due_date", "Due date"),
    ("assignee", "Assignee"),
    ("task_type", "Task type"),
    ("effort_level", "Effort"),
)


def _tabs_row(kb: InlineKeyboardBuilder, current: str) -> None:
    for tab in TABS:
        label = TAB_TITLES[tab]
        if tab == current:
            label = f"· {label} ·"
        kb.button(text=label, callback_data=f"tk:tab:{tab}")


def tasks_view_kb(tab: str, tasks: list[Task]) -> InlineKeyboardMarkup:
    """
    Per task row: status toggle, title (edit), delete.

    callback_data:
      - tk:st:{tab}:{task_id}
      - tk:edit:{task_id}
      - tk:del:{tab}:{task_id}
    """
    kb = InlineKeyboardBuilder()
    _tabs_row(kb, tab)
    sizes = [3, 2]

    for task in tasks[:MAX_ROWS]:
        if tab == TAB_KANBAN:
            kb.button(text=f"{status_icon(task.status)} {task.title}", callback_data=f"tk:edit:{task.id}")
            sizes.append(1)
            continue
        kb.button(text=status_icon(task.status), callback_data=f"tk:st:{tab}:{task.id}")
        kb.button(text=task.title, callback_data=f"tk:edit:{task.id}")
        kb.button(text="🗑️", callback_data=f"tk:del:{tab}:{task.id}")
        sizes.append(3)

    kb.button(text="➕ New task", callback_data="tk:new")
    sizes.append(1)
    kb.adjust(*sizes)
    return kb.as_markup()


def task_draft_kb(editing: bool) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    for field, text in DRAFT_BUTTONS:
        kb.button(text=text, callback_data=f"{DRAFT_PREFIX}:field:{field}")
    kb.button(text="Update Task" if editing else "Create Task", callback_data=f"{DRAFT_PREFIX}:save")
    kb.button(text="Cancel", callback_data=f"{DRAFT_PREFIX}:cancel")
    kb.adjust(2, 2, 2, 2, 2)
    return kb.as_markup()
