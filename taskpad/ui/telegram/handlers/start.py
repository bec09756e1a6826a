from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from taskpad.ui.telegram.texts.common import WELCOME
from taskpad.ui.telegram.utils.navigation import go_to_main_menu

router = Router()


@router.message(CommandStart())
async def start_cmd(message: Message, state: FSMContext):
    await go_to_main_menu(message, state, text=WELCOME)


@router.message(Command("menu"))
async def menu_cmd(message: Message, state: FSMContext):
    await go_to_main_menu(message, state)
