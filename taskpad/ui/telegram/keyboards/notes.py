from __future__ import annotations

from aiogram.types import InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from taskpad.domain.records.models import Note
from taskpad.ui.telegram.texts.notes import MAX_ROWS

DRAFT_PREFIX = "ndf"


def notes_view_kb(notes: list[Note], query: str = "") -> InlineKeyboardMarkup:
    """
    callback_data:
      - nt:edit:{note_id}
      - nt:del:{note_id}
      - nt:new | nt:search | nt:clear
    """
    kb = InlineKeyboardBuilder()
    sizes: list[int] = []
    for note in notes[:MAX_ROWS]:
        kb.button(text=note.title, callback_data=f"nt:edit:{note.id}")
        kb.button(text="🗑️", callback_data=f"nt:del:{note.id}")
        sizes.append(2)

    kb.button(text="➕ New note", callback_data="nt:new")
    kb.button(text="🔍 Search", callback_data="nt:search")
    if query:
        kb.button(text="Show all", callback_data="nt:clear")
        sizes.append(3)
    else:
        sizes.append(2)
    kb.adjust(*sizes)
    return kb.as_markup()


def note_draft_kb(editing: bool) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.button(text="Title", callback_data=f"{DRAFT_PREFIX}:field:title")
    kb.button(text="Content", callback_data=f"{DRAFT_PREFIX}:field:content")
    kb.button(text="Update Note" if editing else "Create Note", callback_data=f"{DRAFT_PREFIX}:save")
    kb.button(text="Cancel", callback_data=f"{DRAFT_PREFIX}:cancel")
    kb.adjust(2, 2)
    return kb.as_markup()
