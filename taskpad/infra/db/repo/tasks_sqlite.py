from __future__ import annotations

from taskpad.domain.records.kinds import TASK_KIND
from taskpad.domain.records.models import Task
from taskpad.domain.records.ports import Clock, IdGenerator
from taskpad.infra.db.connection import Database
from taskpad.infra.db.repo.base import SqliteRecordStore


class TasksSqliteStore(SqliteRecordStore[Task]):
    def __init__(self, db: Database, clock: Clock, ids: IdGenerator) -> None:
        super().__init__(db, TASK_KIND, clock, ids)

    def _row_to_record(self, row) -> Task:
        return Task(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            created_at=row["created_at"],
            description=row["description"],
            status=row["status"],
            priority=row["priority"],
            due_date=row["due_date"],
            task_type=row["task_type"],
            effort_level=row["effort_level"],
            assignee=row["assignee"],
        )
