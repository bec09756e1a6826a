from __future__ import annotations

from taskpad.domain.records.kinds import NOTE_KIND
from taskpad.domain.records.models import Note
from taskpad.domain.records.ports import Clock, IdGenerator
from taskpad.infra.db.connection import Database
from taskpad.infra.db.repo.base import SqliteRecordStore


class NotesSqliteStore(SqliteRecordStore[Note]):
    def __init__(self, db: Database, clock: Clock, ids: IdGenerator) -> None:
        super().__init__(db, NOTE_KIND, clock, ids)

    def _row_to_record(self, row) -> Note:
        return Note(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            created_at=row["created_at"],
            content=row["content"],
        )
