from __future__ import annotations

from typing import Any, Iterable, Mapping

from aiogram import html

from taskpad.constants import (
    PRIORITY_HIGH,
    PRIORITY_MEDIUM,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_NOT_STARTED,
    TAB_ALL,
    TAB_COMPLETED,
    TAB_IN_PROGRESS,
    TAB_KANBAN,
    TAB_NOT_STARTED,
)
from taskpad.domain.common.time import format_day
from taskpad.domain.records.models import Task

MAX_ROWS = 40

TAB_TITLES = {
    TAB_ALL: "All tasks",
    TAB_NOT_STARTED: "Not started",
    TAB_IN_PROGRESS: "In progress",
    TAB_COMPLETED: "Completed",
    TAB_KANBAN: "Kanban",
}

KANBAN_HINTS = {
    STATUS_NOT_STARTED: "Tasks that need to be started",
    STATUS_IN_PROGRESS: "Tasks currently being worked on",
    STATUS_COMPLETED: "Tasks that have been completed",
}

FIELD_LABELS = {
    "title": "title",
    "description": "description",
    "status": "status",
    "priority": "priority",
    "due_date": "due date",
    "task_type": "task type",
    "effort_level": "effort level",
    "assignee": "assignee",
}

CREATED = "Task created successfully"
UPDATED = "Task updated successfully"
DELETED = "Task deleted successfully"


def status_icon(status: str) -> str:
    if status == STATUS_COMPLETED:
        return "✅"
    if status == STATUS_IN_PROGRESS:
        return "🔵"
    return "⚪"


def priority_mark(priority: str) -> str:
    if priority == PRIORITY_HIGH:
        return "🔴 High"
    if priority == PRIORITY_MEDIUM:
        return "🟠 Medium"
    return priority or ""


def render_task_line(task: Task) -> str:
    parts = [f"{status_icon(task.status)} {html.bold(html.quote(task.title))}"]
    if task.priority:
        parts.append(priority_mark(task.priority))
    if task.due_date:
        parts.append(f"📅 {format_day(task.due_date)}")
    if task.task_type:
        parts.append(html.quote(task.task_type))
    if task.effort_level:
        parts.append(f"effort {task.effort_level}")
    return " · ".join(parts)


def render_tasks_view(tab: str, tasks: list[Task]) -> str:
    title = TAB_TITLES.get(tab, tab)
    if not tasks:
        if tab == TAB_ALL:
            return f"{html.bold(title)}\n\nNo tasks found. Create your first task to get started."
        return f"{html.bold(title)}\n\nNo tasks found with \"{title}\" status."

    lines = [f"{html.bold(title)} ({len(tasks)})", ""]
    for task in tasks[:MAX_ROWS]:
        lines.append(render_task_line(task))
    if len(tasks) > MAX_ROWS:
        lines.append(f"… and {len(tasks) - MAX_ROWS} more")
    return "\n".join(lines)


def render_kanban(columns: Iterable[tuple[str, list[Task]]]) -> str:
    lines = [html.bold(TAB_TITLES[TAB_KANBAN])]
    for status, tasks in columns:
        lines.append("")
        lines.append(f"{status_icon(status)} {html.bold(status)} ({len(tasks)})")
        lines.append(html.italic(KANBAN_HINTS.get(status, "")))
        if not tasks:
            lines.append("  No tasks")
            continue
        for task in tasks[:MAX_ROWS]:
            due = f" · {format_day(task.due_date, with_year=False)}" if task.due_date else ""
            lines.append(f"  • {html.quote(task.title)} · {task.priority}{due}")
    return "\n".join(lines)


def render_task_draft(fields: Mapping[str, Any], editing: bool) -> str:
    header = "Edit Task" if editing else "Create New Task"

    def show(name: str) -> str:
        value = fields.get(name)
        if not value:
            return "—"
        if name == "due_date":
            return format_day(value)
        return html.quote(str(value))

    return "\n".join(
        [
            html.bold(header),
            "",
            f"Title: {show('title')}",
            f"Description: {show('description')}",
            f"Status: {show('status')}",
            f"Priority: {show('priority')}",
            f"Due date: {show('due_date')}",
            f"Assignee: {show('assignee')}",
            f"Task type: {show('task_type')}",
            f"Effort level: {show('effort_level')}",
        ]
    )
