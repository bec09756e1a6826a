from __future__ import annotations

from aiogram.exceptions import TelegramBadRequest
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from taskpad.ui.telegram.keyboards.common import main_menu_kb
from taskpad.ui.telegram.texts.common import MENU


async def go_to_main_menu(
    message: Message,
    state: FSMContext | None = None,
    text: str = MENU,
) -> None:
    """
    Clears FSM state (if provided) and returns user to the main menu.
    Safe to call from anywhere.
    """
    if state is not None:
        await state.clear()

    await message.answer(text, reply_markup=main_menu_kb())


def command_args(message: Message) -> str:
    text = (message.text or "").strip()
    parts = text.split(maxsplit=1)
    if len(parts) < 2:
        return ""
    return parts[1].strip()


def text_value(raw: str | None) -> str | None:
    """'-' or blank clears a field."""
    value = (raw or "").strip()
    if not value or value == "-":
        return None
    return value


async def edit_or_answer(message: Message, text: str, reply_markup=None) -> None:
    """Edit the message in place; fall back to a new message if Telegram refuses."""
    try:
        await message.edit_text(text, reply_markup=reply_markup)
    except TelegramBadRequest:
        # old message, identical content, etc.
        await message.answer(text, reply_markup=reply_markup)
