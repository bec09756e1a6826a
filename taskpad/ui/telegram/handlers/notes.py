"""
Notes list, search, and the note draft form.

ROUTER MAP:
- /notes, "Notes"            -> list (current search applied)
- /search [term]             -> set the search term
- /new_note [title], "New note"
- nt:*                       -> edit, delete, new, search, clear search
- ndf:*                      -> draft form fields, save, cancel
"""
from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from taskpad.domain.common.errors import DomainError, NotFoundError, ValidationError
from taskpad.domain.sync.workspace import Workspace
from taskpad.ui.telegram.keyboards.common import BTN_NEW_NOTE, BTN_NOTES, MENU_BUTTONS
from taskpad.ui.telegram.keyboards.notes import DRAFT_PREFIX, note_draft_kb, notes_view_kb
from taskpad.ui.telegram.states.drafts import CtxKeys, DraftFlow
from taskpad.ui.telegram.texts import common as common_texts
from taskpad.ui.telegram.texts import notes as texts
from taskpad.ui.telegram.utils.navigation import command_args, edit_or_answer, text_value
from taskpad.ui.telegram.utils.notify import notify_error

router = Router()

_TEXT_INPUT = (F.text, ~F.text.startswith("/"), ~F.text.in_(MENU_BUTTONS))


async def _current_query(state: FSMContext) -> str:
    data = await state.get_data()
    return data.get(CtxKeys.note_query) or ""


async def show_notes(target: Message, workspace: Workspace, query: str, prefer_edit: bool) -> None:
    notes = workspace.notes.search(query).to_list()
    text = texts.render_notes_view(notes, query)
    markup = notes_view_kb(notes, query)
    if prefer_edit:
        await edit_or_answer(target, text, reply_markup=markup)
    else:
        await target.answer(text, reply_markup=markup)


async def show_draft(target: Message, workspace: Workspace, prefer_edit: bool = False) -> None:
    draft = workspace.note_draft
    text = texts.render_note_draft(draft.fields, draft.is_editing)
    markup = note_draft_kb(draft.is_editing)
    if prefer_edit:
        await edit_or_answer(target, text, reply_markup=markup)
    else:
        await target.answer(text, reply_markup=markup)


async def _ask_field(target: Message, state: FSMContext, field: str) -> None:
    await state.update_data({CtxKeys.field: field})
    await state.set_state(DraftFlow.note_field)
    await target.answer(common_texts.ENTER_VALUE.format(label=texts.FIELD_LABELS.get(field, field)))


@router.message(Command("notes"))
@router.message(F.text == BTN_NOTES)
async def notes_cmd(message: Message, state: FSMContext, workspace: Workspace):
    await state.set_state(None)
    await show_notes(message, workspace, await _current_query(state), prefer_edit=False)


@router.message(Command("search"))
async def search_cmd(message: Message, state: FSMContext, workspace: Workspace):
    query = command_args(message)
    if not query:
        await state.set_state(DraftFlow.note_search)
        await message.answer(texts.ASK_SEARCH)
        return
    await state.update_data({CtxKeys.note_query: query})
    await show_notes(message, workspace, query, prefer_edit=False)


@router.message(DraftFlow.note_search, *_TEXT_INPUT)
async def search_text(message: Message, state: FSMContext, workspace: Workspace):
    query = text_value(message.text) or ""
    await state.update_data({CtxKeys.note_query: query})
    await state.set_state(None)
    await show_notes(message, workspace, query, prefer_edit=False)


@router.message(Command("new_note"))
@router.message(F.text == BTN_NEW_NOTE)
async def new_note_cmd(message: Message, state: FSMContext, workspace: Workspace):
    title = command_args(message) if message.text and message.text.startswith("/") else ""

    workspace.note_draft.begin()
    if title:
        workspace.note_draft.set_field("title", title)
        await show_draft(message, workspace)
        await _ask_field(message, state, "content")
        return

    await show_draft(message, workspace)
    await _ask_field(message, state, "title")


@router.callback_query(F.data == "nt:new")
async def cb_new(cb: CallbackQuery, workspace: Workspace):
    workspace.note_draft.begin()
    await cb.answer()
    if cb.message:
        await show_draft(cb.message, workspace)


@router.callback_query(F.data == "nt:search")
async def cb_search(cb: CallbackQuery, state: FSMContext):
    await state.set_state(DraftFlow.note_search)
    await cb.answer()
    if cb.message:
        await cb.message.answer(texts.ASK_SEARCH)


@router.callback_query(F.data == "nt:clear")
async def cb_clear_search(cb: CallbackQuery, state: FSMContext, workspace: Workspace):
    await state.update_data({CtxKeys.note_query: ""})
    await cb.answer()
    if cb.message:
        await show_notes(cb.message, workspace, "", prefer_edit=True)


@router.callback_query(F.data.startswith("nt:edit:"))
async def cb_edit(cb: CallbackQuery, workspace: Workspace):
    note_id = cb.data.split(":", 2)[-1]
    note = workspace.notes.mirror.get(note_id)
    if note is None:
        await notify_error(cb, NotFoundError("Note not found."))
        return

    workspace.note_draft.begin(note)
    await cb.answer()
    if cb.message:
        await show_draft(cb.message, workspace)


@router.callback_query(F.data.startswith("nt:del:"))
async def cb_delete(cb: CallbackQuery, state: FSMContext, workspace: Workspace):
    note_id = cb.data.split(":", 2)[-1]
    try:
        await workspace.notes.delete(note_id)
    except DomainError as e:
        await notify_error(cb, e)
        return

    await cb.answer(texts.DELETED)
    if cb.message:
        await show_notes(cb.message, workspace, await _current_query(state), prefer_edit=True)


@router.callback_query(F.data.startswith(f"{DRAFT_PREFIX}:field:"))
async def cb_draft_field(cb: CallbackQuery, state: FSMContext, workspace: Workspace):
    if not workspace.note_draft.is_active:
        await notify_error(cb, ValidationError("No draft is open."))
        return
    await cb.answer()
    if cb.message:
        await _ask_field(cb.message, state, cb.data.split(":", 2)[-1])


@router.callback_query(F.data == f"{DRAFT_PREFIX}:save")
async def cb_draft_save(cb: CallbackQuery, state: FSMContext, workspace: Workspace):
    draft = workspace.note_draft
    editing = draft.is_editing

    try:
        await workspace.notes.submit(draft)
    except DomainError as e:
        await notify_error(cb, e)
        return

    await state.set_state(None)
    await cb.answer(texts.UPDATED if editing else texts.CREATED)
    if cb.message:
        await show_notes(cb.message, workspace, await _current_query(state), prefer_edit=True)


@router.callback_query(F.data == f"{DRAFT_PREFIX}:cancel")
async def cb_draft_cancel(cb: CallbackQuery, state: FSMContext, workspace: Workspace):
    workspace.note_draft.discard()
    await state.set_state(None)
    await cb.answer(common_texts.CANCELLED)
    if cb.message:
        await show_notes(cb.message, workspace, await _current_query(state), prefer_edit=True)


@router.message(DraftFlow.note_field, *_TEXT_INPUT)
async def draft_text_field(message: Message, state: FSMContext, workspace: Workspace):
    data = await state.get_data()
    field = data.get(CtxKeys.field)

    await state.set_state(None)
    try:
        workspace.note_draft.set_field(field, text_value(message.text))
    except DomainError as e:
        await notify_error(message, e)
        return

    await show_draft(message, workspace)
