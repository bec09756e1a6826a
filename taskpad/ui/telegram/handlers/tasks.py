"""
Task views and the task draft form.

ROUTER MAP:
- /tasks, "Tasks"            -> list in the current tab
- /new_task [title]          -> quick add, or open the draft form
- tk:tab / tk:st / tk:del    -> switch tab, toggle status, delete
- tk:new / tk:edit           -> open the draft form
- tdf:*                      -> draft form fields, save, cancel
"""
from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from taskpad.constants import (
    EFFORT_OPTIONS,
    PRIORITY_OPTIONS,
    STATUS_OPTIONS,
    TAB_ALL,
    TAB_KANBAN,
    TABS,
    TASK_TYPE_OPTIONS,
)
from taskpad.domain.common.errors import DomainError, NotFoundError, ValidationError
from taskpad.domain.sync.workspace import Workspace
from taskpad.ui.telegram.keyboards.common import BTN_NEW_TASK, BTN_TASKS, MENU_BUTTONS, choice_kb
from taskpad.ui.telegram.keyboards.tasks import DRAFT_PREFIX, task_draft_kb, tasks_view_kb
from taskpad.ui.telegram.states.drafts import CtxKeys, DraftFlow
from taskpad.ui.telegram.texts import common as common_texts
from taskpad.ui.telegram.texts import tasks as texts
from taskpad.ui.telegram.utils.navigation import command_args, edit_or_answer, text_value
from taskpad.ui.telegram.utils.notify import notify_error
from taskpad.utils import parse_callback_data

router = Router()

# field -> (options, optional)
CHOICE_FIELDS = {
    "status": (STATUS_OPTIONS, False),
    "priority": (PRIORITY_OPTIONS, False),
    "task_type": (TASK_TYPE_OPTIONS, True),
    "effort_level": (EFFORT_OPTIONS, True),
}


async def _current_tab(state: FSMContext) -> str:
    data = await state.get_data()
    tab = data.get(CtxKeys.task_tab, TAB_ALL)
    return tab if tab in TABS else TAB_ALL


def _render_view(workspace: Workspace, tab: str):
    if tab == TAB_KANBAN:
        columns = workspace.tasks.kanban()
        tasks = [t for _, column in columns for t in column]
        return texts.render_kanban(columns), tasks_view_kb(tab, tasks)
    tasks = workspace.tasks.view(tab).to_list()
    return texts.render_tasks_view(tab, tasks), tasks_view_kb(tab, tasks)


async def show_tasks(target: Message, workspace: Workspace, tab: str, prefer_edit: bool) -> None:
    """
    prefer_edit=True: update the list message in place (callback UX).
    prefer_edit=False: send a new list message (command UX).
    """
    text, markup = _render_view(workspace, tab)
    if prefer_edit:
        await edit_or_answer(target, text, reply_markup=markup)
    else:
        await target.answer(text, reply_markup=markup)


async def show_draft(target: Message, workspace: Workspace, prefer_edit: bool = False) -> None:
    draft = workspace.task_draft
    text = texts.render_task_draft(draft.fields, draft.is_editing)
    markup = task_draft_kb(draft.is_editing)
    if prefer_edit:
        await edit_or_answer(target, text, reply_markup=markup)
    else:
        await target.answer(text, reply_markup=markup)


@router.message(Command("tasks"))
@router.message(F.text == BTN_TASKS)
async def tasks_cmd(message: Message, state: FSMContext, workspace: Workspace):
    await state.set_state(None)
    await show_tasks(message, workspace, await _current_tab(state), prefer_edit=False)


@router.message(Command("new_task"))
@router.message(F.text == BTN_NEW_TASK)
async def new_task_cmd(message: Message, state: FSMContext, workspace: Workspace):
    title = command_args(message) if message.text and message.text.startswith("/") else ""

    # /new_task <title> -> add directly, leaving any open draft alone
    if title:
        draft = workspace.tasks.new_draft()
        draft.begin()
        draft.set_field("title", title)
        try:
            await workspace.tasks.submit(draft)
        except DomainError as e:
            await notify_error(message, e)
            return
        await message.answer(texts.CREATED)
        await show_tasks(message, workspace, await _current_tab(state), prefer_edit=False)
        return

    workspace.task_draft.begin()
    await state.update_data({CtxKeys.field: "title"})
    await state.set_state(DraftFlow.task_field)
    await show_draft(message, workspace)
    await message.answer(common_texts.ENTER_VALUE.format(label=texts.FIELD_LABELS["title"]))


@router.callback_query(F.data.startswith("tk:tab:"))
async def cb_tab(cb: CallbackQuery, state: FSMContext, workspace: Workspace):
    parts = parse_callback_data(cb.data, 3)
    tab = parts[2] if parts and parts[2] in TABS else TAB_ALL
    await state.update_data({CtxKeys.task_tab: tab})
    await cb.answer()
    if cb.message:
        await show_tasks(cb.message, workspace, tab, prefer_edit=True)


@router.callback_query(F.data.startswith("tk:st:"))
async def cb_toggle_status(cb: CallbackQuery, workspace: Workspace):
    parts = parse_callback_data(cb.data, 4)
    if not parts:
        await cb.answer()
        return
    _, _, tab, task_id = parts

    try:
        new_status = await workspace.tasks.toggle_status(task_id, tab)
    except DomainError as e:
        await notify_error(cb, e)
        return

    await cb.answer(f"{texts.status_icon(new_status)} {new_status}")
    if cb.message:
        await show_tasks(cb.message, workspace, tab, prefer_edit=True)


@router.callback_query(F.data.startswith("tk:del:"))
async def cb_delete(cb: CallbackQuery, workspace: Workspace):
    parts = parse_callback_data(cb.data, 4)
    if not parts:
        await cb.answer()
        return
    _, _, tab, task_id = parts

    try:
        await workspace.tasks.delete(task_id)
    except DomainError as e:
        await notify_error(cb, e)
        return

    await cb.answer(texts.DELETED)
    if cb.message:
        await show_tasks(cb.message, workspace, tab, prefer_edit=True)


@router.callback_query(F.data == "tk:new")
async def cb_new(cb: CallbackQuery, workspace: Workspace):
    workspace.task_draft.begin()
    await cb.answer()
    if cb.message:
        await show_draft(cb.message, workspace)


@router.callback_query(F.data.startswith("tk:edit:"))
async def cb_edit(cb: CallbackQuery, workspace: Workspace):
    task_id = cb.data.split(":", 2)[-1]
    task = workspace.tasks.mirror.get(task_id)
    if task is None:
        await notify_error(cb, NotFoundError("Task not found."))
        return

    workspace.task_draft.begin(task)
    await cb.answer()
    if cb.message:
        await show_draft(cb.message, workspace)


@router.callback_query(F.data.startswith(f"{DRAFT_PREFIX}:field:"))
async def cb_draft_field(cb: CallbackQuery, state: FSMContext, workspace: Workspace):
    field = cb.data.split(":", 2)[-1]
    if not workspace.task_draft.is_active:
        await notify_error(cb, ValidationError("No draft is open."))
        return

    label = texts.FIELD_LABELS.get(field, field)
    await cb.answer()
    if not cb.message:
        return

    if field in CHOICE_FIELDS:
        options, optional = CHOICE_FIELDS[field]
        await edit_or_answer(
            cb.message,
            common_texts.CHOOSE_VALUE.format(label=label),
            reply_markup=choice_kb(DRAFT_PREFIX, field, options, allow_none=optional),
        )
        return

    await state.update_data({CtxKeys.field: field})
    await state.set_state(DraftFlow.task_field)
    prompt = common_texts.ENTER_DUE_DATE if field == "due_date" else common_texts.ENTER_VALUE.format(label=label)
    await cb.message.answer(prompt)


@router.callback_query(F.data.startswith(f"{DRAFT_PREFIX}:val:"))
async def cb_draft_value(cb: CallbackQuery, workspace: Workspace):
    parts = parse_callback_data(cb.data, 4)
    if not parts or parts[2] not in CHOICE_FIELDS:
        await cb.answer()
        return
    _, _, field, raw = parts
    options, optional = CHOICE_FIELDS[field]

    if raw == "none" and optional:
        value = None
    elif raw.isdigit() and int(raw) < len(options):
        value = options[int(raw)]
    else:
        await cb.answer()
        return

    try:
        workspace.task_draft.set_field(field, value)
    except DomainError as e:
        await notify_error(cb, e)
        return

    await cb.answer()
    if cb.message:
        await show_draft(cb.message, workspace, prefer_edit=True)


@router.callback_query(F.data == f"{DRAFT_PREFIX}:form")
async def cb_draft_form(cb: CallbackQuery, workspace: Workspace):
    await cb.answer()
    if cb.message:
        await show_draft(cb.message, workspace, prefer_edit=True)


@router.callback_query(F.data == f"{DRAFT_PREFIX}:save")
async def cb_draft_save(cb: CallbackQuery, state: FSMContext, workspace: Workspace):
    draft = workspace.task_draft
    editing = draft.is_editing

    try:
        await workspace.tasks.submit(draft)
    except DomainError as e:
        # draft stays open for another try
        await notify_error(cb, e)
        return

    await state.set_state(None)
    await cb.answer(texts.UPDATED if editing else texts.CREATED)
    if cb.message:
        await show_tasks(cb.message, workspace, await _current_tab(state), prefer_edit=True)


@router.callback_query(F.data == f"{DRAFT_PREFIX}:cancel")
async def cb_draft_cancel(cb: CallbackQuery, state: FSMContext, workspace: Workspace):
    workspace.task_draft.discard()
    await state.set_state(None)
    await cb.answer(common_texts.CANCELLED)
    if cb.message:
        await show_tasks(cb.message, workspace, await _current_tab(state), prefer_edit=True)


@router.message(
    DraftFlow.task_field,
    F.text,
    ~F.text.startswith("/"),
    ~F.text.in_(MENU_BUTTONS),
)
async def draft_text_field(message: Message, state: FSMContext, workspace: Workspace):
    data = await state.get_data()
    field = data.get(CtxKeys.field)

    try:
        workspace.task_draft.set_field(field, text_value(message.text))
    except DomainError as e:
        await state.set_state(None)
        await notify_error(message, e)
        return

    await state.set_state(None)
    await show_draft(message, workspace)
