"""
SQLite stores: owner scoping, ordering, returned rows.

Uses a temporary DB file (in-memory SQLite would use a new DB per connection).
Run with: python -m pytest tests/test_sqlite_stores.py -v
"""
from __future__ import annotations

import asyncio
import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest

from taskpad.domain.records.kinds import TASK_KIND
from taskpad.domain.records.ports import Clock
from taskpad.domain.sync.managers import NoteManager, TaskManager
from taskpad.domain.sync.workspace import WorkspaceRegistry
from taskpad.infra.db.connection import Database
from taskpad.infra.db.repo.base import SqliteRecordStore
from taskpad.infra.db.repo.notes_sqlite import NotesSqliteStore
from taskpad.infra.db.repo.tasks_sqlite import TasksSqliteStore
from taskpad.infra.db.schema_version import apply_migrations
from taskpad.infra.ids.uuid_gen import UuidGenerator


class StepClock(Clock):
    """Each call is one second later than the previous one."""

    def __init__(self) -> None:
        self._now = datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


def _temp_db_path() -> str:
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    return path


async def _run_with_db(test_fn):
    path = _temp_db_path()
    try:
        db = Database(path)
        await apply_migrations(db, now_iso="2024-03-05T12:00:00+00:00")
        clock = StepClock()
        ids = UuidGenerator()
        await test_fn(db, TasksSqliteStore(db, clock, ids), NotesSqliteStore(db, clock, ids))
    finally:
        for suffix in ("", "-wal", "-shm"):
            if os.path.exists(path + suffix):
                os.unlink(path + suffix)


def test_migrations_are_applied_once():
    async def run(db, tasks, notes):
        again = await apply_migrations(db, now_iso="2024-03-06T12:00:00+00:00")
        assert again == []
        row = await db.fetchone("SELECT COUNT(*) AS n FROM schema_migrations;")
        assert row["n"] == 1

    asyncio.run(_run_with_db(run))


def test_insert_returns_created_row_with_store_fields():
    async def run(db, tasks, notes):
        task = await tasks.insert("u1", {"title": "Write report", "priority": "High", "due_date": "2024-04-01"})
        assert task.id and len(task.id) == 32
        assert task.user_id == "u1"
        assert task.created_at.startswith("2024-03-05T12:00:01")
        assert task.status == "Not started"
        assert task.priority == "High"
        assert task.due_date == "2024-04-01"

    asyncio.run(_run_with_db(run))


def test_list_is_owner_scoped_and_newest_first():
    async def run(db, tasks, notes):
        a = await tasks.insert("u1", {"title": "A"})
        await tasks.insert("u2", {"title": "other"})
        b = await tasks.insert("u1", {"title": "B"})

        mine = await tasks.list_for_owner("u1")
        assert [t.id for t in mine] == [b.id, a.id]
        assert all(t.user_id == "u1" for t in mine)

    asyncio.run(_run_with_db(run))


def test_cross_owner_update_and_delete_do_nothing():
    async def run(db, tasks, notes):
        note = await notes.insert("u1", {"title": "Private", "content": "secret"})

        await notes.update("u2", note.id, {"title": "hacked"})
        await notes.delete("u2", note.id)

        rows = await notes.list_for_owner("u1")
        assert [(n.id, n.title) for n in rows] == [(note.id, "Private")]
        assert await notes.list_for_owner("u2") == []

    asyncio.run(_run_with_db(run))


def test_update_ignores_store_assigned_fields():
    async def run(db, tasks, notes):
        task = await tasks.insert("u1", {"title": "A"})
        await tasks.update("u1", task.id, {"status": "Completed", "created_at": "1999", "user_id": "u2"})
        (stored,) = await tasks.list_for_owner("u1")
        assert stored.status == "Completed"
        assert stored.created_at == task.created_at

    asyncio.run(_run_with_db(run))


def test_managers_round_trip_through_sqlite():
    async def run(db, tasks, notes):
        mgr = TaskManager(tasks, "u1")
        await mgr.refresh()
        created = await mgr.create({"title": "Plan sprint", "task_type": "Meeting"})
        await mgr.toggle_status(created.id)
        await mgr.update(created.id, {"title": "Plan sprint 12", "assignee": "Sam"})

        fresh = TaskManager(tasks, "u1")
        await fresh.refresh()
        assert fresh.mirror.snapshot() == mgr.mirror.snapshot()
        assert fresh.mirror.get(created.id).status == "In progress"

        note_mgr = NoteManager(notes, "u1")
        note = await note_mgr.create({"title": "Idea", "content": "Use SQLite"})
        await note_mgr.delete(note.id)
        assert await notes.list_for_owner("u1") == []

    asyncio.run(_run_with_db(run))


def test_registry_mounts_one_workspace_per_owner():
    async def run(db, tasks, notes):
        await tasks.insert("u1", {"title": "A"})
        await notes.insert("u2", {"title": "N"})
        registry = WorkspaceRegistry(tasks, notes)

        ws1 = await registry.get("u1")
        ws2 = await registry.get("u2")
        assert ws1 is await registry.get("u1")
        assert len(registry) == 2
        assert [t.title for t in ws1.tasks.mirror] == ["A"]
        assert len(ws1.notes.mirror) == 0
        assert [n.title for n in ws2.notes.mirror] == ["N"]
        assert ws1.mounted

    asyncio.run(_run_with_db(run))


def test_base_store_requires_a_row_mapper():
    db = Database(_temp_db_path())
    try:
        with pytest.raises(TypeError):
            SqliteRecordStore(db, TASK_KIND, StepClock(), UuidGenerator())
    finally:
        os.unlink(db.path)
