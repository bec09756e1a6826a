from __future__ import annotations

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from taskpad.domain.sync.workspace import Workspace
from taskpad.ui.telegram.texts.common import CANCELLED
from taskpad.ui.telegram.utils.navigation import go_to_main_menu

router = Router()

CANCEL_WORDS = {"cancel", "stop"}


async def _cancel(message: Message, state: FSMContext, workspace: Workspace) -> None:
    workspace.task_draft.discard()
    workspace.note_draft.discard()
    await go_to_main_menu(message, state, text=CANCELLED)


@router.message(Command("cancel"))
async def cancel_cmd(message: Message, state: FSMContext, workspace: Workspace):
    await _cancel(message, state, workspace)


@router.message(F.text.casefold().in_(CANCEL_WORDS))
async def cancel_text(message: Message, state: FSMContext, workspace: Workspace):
    await _cancel(message, state, workspace)
