# -*- coding: utf-8 -*-
"""Shared owner-scoped CRUD for the SQLite record stores."""
from __future__ import annotations

import logging
from abc import abstractmethod
from datetime import timezone
from typing import Any, Generic, Mapping, Sequence, TypeVar

from taskpad.domain.common.time import to_iso
from taskpad.domain.records.kinds import RecordKind
from taskpad.domain.records.ports import Clock, IdGenerator, RecordStore
from taskpad.infra.db.connection import Database

logger = logging.getLogger(__name__)

R = TypeVar("R")


class SqliteRecordStore(RecordStore[R], Generic[R]):
    """
    Every statement filters by user_id. Updates and deletes aimed at rows the
    caller does not own match nothing and succeed without effect.
    """

    def __init__(self, db: Database, kind: RecordKind[R], clock: Clock, ids: IdGenerator) -> None:
        self._db = db
        self._kind = kind
        self._clock = clock
        self._ids = ids

    @property
    def table(self) -> str:
        return self._kind.name

    def _now_iso(self) -> str:
        return to_iso(self._clock.now().astimezone(timezone.utc))

    @abstractmethod
    def _row_to_record(self, row) -> R:
        ...

    async def list_for_owner(self, user_id: str) -> Sequence[R]:
        rows = await self._db.fetchall(
            f"""
            SELECT *
            FROM {self.table}
            WHERE user_id = ?
            ORDER BY created_at DESC, rowid DESC;
            """,
            (user_id,),
        )
        return [self._row_to_record(r) for r in rows]

    async def get(self, user_id: str, record_id: str) -> R | None:
        row = await self._db.fetchone(
            f"SELECT * FROM {self.table} WHERE id = ? AND user_id = ?;",
            (record_id, user_id),
        )
        return self._row_to_record(row) if row else None

    async def insert(self, user_id: str, fields: Mapping[str, Any]) -> R:
        if not user_id:
            raise ValueError("user_id is required")
        values = self._kind.editable(fields)
        record_id = self._ids.new_id()
        created_at = self._now_iso()

        columns = ["id", "user_id", "created_at", *values.keys()]
        params = [record_id, user_id, created_at, *values.values()]
        placeholders = ", ".join("?" for _ in columns)
        await self._db.execute(
            f"INSERT INTO {self.table}({', '.join(columns)}) VALUES ({placeholders});",
            params,
        )
        logger.debug("%s insert id=%s user=%s", self.table, record_id, user_id)

        row = await self.get(user_id, record_id)
        if row is None:
            raise RuntimeError(f"{self.table} insert did not return the created row")
        return row

    async def update(self, user_id: str, record_id: str, fields: Mapping[str, Any]) -> None:
        values = self._kind.editable(fields)
        if not values:
            return
        assignments = ", ".join(f"{name} = ?" for name in values)
        changed = await self._db.execute(
            f"UPDATE {self.table} SET {assignments} WHERE id = ? AND user_id = ?;",
            (*values.values(), record_id, user_id),
        )
        if changed == 0:
            logger.debug("%s update matched no row id=%s user=%s", self.table, record_id, user_id)

    async def delete(self, user_id: str, record_id: str) -> None:
        changed = await self._db.execute(
            f"DELETE FROM {self.table} WHERE id = ? AND user_id = ?;",
            (record_id, user_id),
        )
        if changed == 0:
            logger.debug("%s delete matched no row id=%s user=%s", self.table, record_id, user_id)
