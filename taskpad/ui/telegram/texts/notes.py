from __future__ import annotations

from typing import Any, Mapping

from aiogram import html

from taskpad.domain.common.time import format_day
from taskpad.domain.records.models import Note

MAX_ROWS = 30
PREVIEW_CHARS = 120

FIELD_LABELS = {"title": "title", "content": "content"}

CREATED = "Note created successfully"
UPDATED = "Note updated successfully"
DELETED = "Note deleted successfully"
ASK_SEARCH = "Send a search term. Send '-' to show all notes."


def _preview(content: str | None) -> str:
    if not content:
        return ""
    text = " ".join(content.split())
    if len(text) > PREVIEW_CHARS:
        text = text[: PREVIEW_CHARS - 1] + "…"
    return text


def render_notes_view(notes: list[Note], query: str = "") -> str:
    header = html.bold("Notes")
    if query:
        header += f" · search: {html.quote(query)}"

    if not notes:
        hint = "Try a different search term" if query else "Create your first note to get started"
        return f"{header}\n\nNo notes found.\n{hint}"

    lines = [f"{header} ({len(notes)})", ""]
    for note in notes[:MAX_ROWS]:
        lines.append(f"📝 {html.bold(html.quote(note.title))} · {format_day(note.created_at)}")
        preview = _preview(note.content)
        if preview:
            lines.append(f"   {html.quote(preview)}")
    if len(notes) > MAX_ROWS:
        lines.append(f"… and {len(notes) - MAX_ROWS} more")
    return "\n".join(lines)


def render_note_draft(fields: Mapping[str, Any], editing: bool) -> str:
    header = "Edit Note" if editing else "Create New Note"
    title = html.quote(fields.get("title") or "") or "—"
    content = html.quote(fields.get("content") or "") or "—"
    return f"{html.bold(header)}\n\nTitle: {title}\n\n{content}"
