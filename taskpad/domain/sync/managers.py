from __future__ import annotations

from typing import Optional

from taskpad.constants import STATUS_OPTIONS, TAB_ALL, TAB_STATUS
from taskpad.domain.common.errors import NotFoundError, ValidationError
from taskpad.domain.records.kinds import NOTE_KIND, TASK_KIND
from taskpad.domain.records.models import Note, Task
from taskpad.domain.records.ports import RecordStore
from taskpad.domain.records.rules import matches_query, next_status_for_tab, validate_status
from taskpad.domain.sync.mirror import FilteredView
from taskpad.domain.sync.operations import RecordManager, sync_operation


class TaskManager(RecordManager[Task]):
    def __init__(
        self,
        store: Optional[RecordStore[Task]],
        user_id: Optional[str],
        *,
        reject_concurrent_edits: bool = False,
    ) -> None:
        super().__init__(store, user_id, TASK_KIND, reject_concurrent_edits=reject_concurrent_edits)

    async def change_status(self, task_id: str, status: str) -> None:
        """Update only the status column."""
        validate_status(status)
        store = self._remote()
        patch = {"status": status}
        with self._editing(task_id):
            await sync_operation(
                lambda: store.update(self._user_id, task_id, patch),
                lambda _: self.mirror.apply_update(task_id, patch),
                op=self._op("status", task_id),
            )

    async def toggle_status(self, task_id: str, tab: str = TAB_ALL) -> str:
        """One click on the status icon. Returns the status that was saved."""
        task = self.mirror.get(task_id)
        if task is None:
            raise NotFoundError("Task not found.")
        new_status = next_status_for_tab(tab, task.status)
        await self.change_status(task_id, new_status)
        return new_status

    def view(self, tab: str = TAB_ALL) -> FilteredView[Task]:
        if tab == TAB_ALL:
            return self.mirror.filter(lambda t: True)
        if tab not in TAB_STATUS:
            raise ValidationError(f"Unknown view: {tab!r}.")
        status = TAB_STATUS[tab]
        return self.mirror.filter(lambda t: t.status == status)

    def kanban(self) -> list[tuple[str, list[Task]]]:
        """Columns in fixed status order; every column present even when empty."""
        return [
            (status, self.mirror.filter(lambda t, s=status: t.status == s).to_list())
            for status in STATUS_OPTIONS
        ]


class NoteManager(RecordManager[Note]):
    def __init__(
        self,
        store: Optional[RecordStore[Note]],
        user_id: Optional[str],
        *,
        reject_concurrent_edits: bool = False,
    ) -> None:
        super().__init__(store, user_id, NOTE_KIND, reject_concurrent_edits=reject_concurrent_edits)

    def search(self, query: str = "") -> FilteredView[Note]:
        return self.mirror.filter(lambda n: matches_query(query, n.title, n.content))
