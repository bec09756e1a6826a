from __future__ import annotations

from typing import Sequence

from aiogram.types import InlineKeyboardMarkup, ReplyKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder, ReplyKeyboardBuilder

BTN_TASKS = "Tasks"
BTN_NOTES = "Notes"
BTN_NEW_TASK = "New task"
BTN_NEW_NOTE = "New note"
MENU_BUTTONS = (BTN_TASKS, BTN_NOTES, BTN_NEW_TASK, BTN_NEW_NOTE)


def main_menu_kb() -> ReplyKeyboardMarkup:
    kb = ReplyKeyboardBuilder()

    kb.button(text=BTN_TASKS)
    kb.button(text=BTN_NOTES)
    kb.button(text=BTN_NEW_TASK)
    kb.button(text=BTN_NEW_NOTE)

    # 2x2 grid
    kb.adjust(2, 2)

    return kb.as_markup(resize_keyboard=True, one_time_keyboard=False)


def choice_kb(prefix: str, field: str, options: Sequence[str], allow_none: bool) -> InlineKeyboardMarkup:
    """
    callback_data:
      - f"{prefix}:val:{field}:{index}"
      - f"{prefix}:val:{field}:none"
      - f"{prefix}:form"  (back to the draft form)
    """
    kb = InlineKeyboardBuilder()
    for i, option in enumerate(options):
        kb.button(text=option, callback_data=f"{prefix}:val:{field}:{i}")
    if allow_none:
        kb.button(text="— None", callback_data=f"{prefix}:val:{field}:none")
    kb.button(text="Back", callback_data=f"{prefix}:form")
    kb.adjust(3)
    return kb.as_markup()
