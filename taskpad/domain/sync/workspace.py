"""
Per-owner workspaces.

A workspace is what one signed-in user has open: the task and note mirrors
plus the two drafts. It is mounted (initial List of both collections) on
first use and stays in the registry until it is evicted.
"""
from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from typing import Optional

from taskpad.domain.records.models import Note, Task
from taskpad.domain.records.ports import RecordStore
from taskpad.domain.sync.draft import DraftSession
from taskpad.domain.sync.managers import NoteManager, TaskManager

logger = logging.getLogger(__name__)


class Workspace:
    def __init__(
        self,
        user_id: str,
        task_store: Optional[RecordStore[Task]],
        note_store: Optional[RecordStore[Note]],
        *,
        reject_concurrent_edits: bool = False,
    ) -> None:
        self.user_id = user_id
        self.tasks = TaskManager(task_store, user_id, reject_concurrent_edits=reject_concurrent_edits)
        self.notes = NoteManager(note_store, user_id, reject_concurrent_edits=reject_concurrent_edits)
        self.task_draft: DraftSession[Task] = self.tasks.new_draft()
        self.note_draft: DraftSession[Note] = self.notes.new_draft()
        self._mounted = False
        self._lock = asyncio.Lock()

    @property
    def mounted(self) -> bool:
        return self._mounted

    async def mount(self) -> None:
        """Initial List of both collections. Retried on the next update until it succeeds."""
        async with self._lock:
            if self._mounted:
                return
            await self.tasks.refresh()
            await self.notes.refresh()
            self._mounted = self.tasks.loaded and self.notes.loaded
            if not self._mounted:
                logger.warning("Workspace mount incomplete user=%s; will retry", self.user_id)
                return
            logger.info(
                "Workspace mounted user=%s tasks=%s notes=%s",
                self.user_id,
                len(self.tasks.mirror),
                len(self.notes.mirror),
            )


class WorkspaceRegistry:
    """
    Owner id -> Workspace. The store handles are shared by every workspace.

    At most `max_workspaces` are kept; the least recently used one is dropped
    (drafts included) and mounted again from the store if its owner returns.
    """

    def __init__(
        self,
        task_store: Optional[RecordStore[Task]],
        note_store: Optional[RecordStore[Note]],
        *,
        reject_concurrent_edits: bool = False,
        max_workspaces: int = 1000,
    ) -> None:
        self._task_store = task_store
        self._note_store = note_store
        self._reject = reject_concurrent_edits
        self._max = max(1, max_workspaces)
        self._workspaces: OrderedDict[str, Workspace] = OrderedDict()

    async def get(self, user_id: str) -> Workspace:
        ws = self._workspaces.get(user_id)
        if ws is None:
            ws = Workspace(
                user_id,
                self._task_store,
                self._note_store,
                reject_concurrent_edits=self._reject,
            )
            self._workspaces[user_id] = ws
            while len(self._workspaces) > self._max:
                evicted, _ = self._workspaces.popitem(last=False)
                logger.info("Workspace evicted user=%s", evicted)
        else:
            self._workspaces.move_to_end(user_id)
        await ws.mount()
        return ws

    def __len__(self) -> int:
        return len(self._workspaces)
