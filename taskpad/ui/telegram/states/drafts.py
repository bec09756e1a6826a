from aiogram.fsm.state import StatesGroup, State


class DraftFlow(StatesGroup):
    # free-text field of the open draft; field name kept in FSM data
    task_field = State()
    note_field = State()

    # notes search term
    note_search = State()


class CtxKeys:
    """Keys for FSM context data"""
    field = "draft_field"
    task_tab = "task_tab"
    note_query = "note_query"
