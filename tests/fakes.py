"""In-memory RecordStore with call recording, injected failures, and held updates."""
from __future__ import annotations

import asyncio
from typing import Any, Generic, Mapping, Optional, Sequence, TypeVar

from taskpad.domain.records.kinds import RecordKind
from taskpad.domain.records.ports import RecordStore

R = TypeVar("R")


class FakeStore(RecordStore[R], Generic[R]):
    def __init__(self, kind: RecordKind[R], rows: Sequence[R] = ()) -> None:
        self._kind = kind
        self.rows: list[R] = list(rows)
        self.calls: list[tuple[str, Any]] = []
        self.fail_with: Optional[Exception] = None
        self.hold_updates = False
        self.pending: list[asyncio.Future] = []
        self._seq = 100

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def list_for_owner(self, user_id: str) -> Sequence[R]:
        self.calls.append(("list", user_id))
        self._maybe_fail()
        mine = [r for r in self.rows if r.user_id == user_id]
        return sorted(mine, key=lambda r: r.created_at, reverse=True)

    async def insert(self, user_id: str, fields: Mapping[str, Any]) -> R:
        self.calls.append(("insert", dict(fields)))
        self._maybe_fail()
        self._seq += 1
        row = self._kind.record_type(
            id=str(self._seq),
            user_id=user_id,
            created_at=f"2024-05-01T10:00:{self._seq % 60:02d}+00:00",
            **self._kind.editable(fields),
        )
        self.rows.append(row)
        return row

    async def update(self, user_id: str, record_id: str, fields: Mapping[str, Any]) -> None:
        self.calls.append(("update", (record_id, dict(fields))))
        if self.hold_updates:
            fut = asyncio.get_running_loop().create_future()
            self.pending.append(fut)
            await fut
        self._maybe_fail()

    async def delete(self, user_id: str, record_id: str) -> None:
        self.calls.append(("delete", record_id))
        self._maybe_fail()
        self.rows = [r for r in self.rows if not (r.id == record_id and r.user_id == user_id)]

    def release(self, index: int) -> None:
        self.pending[index].set_result(None)

    def remote_calls(self) -> list[str]:
        return [name for name, _ in self.calls]
