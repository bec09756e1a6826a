"""
Sync operations: remote call first, then a deterministic patch of the mirror.

On success the mirror is patched in place. On failure the mirror is left
untouched and the error propagates to the caller, which notifies the user.
There is no retry and no refetch.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Generic, Iterator, Mapping, Optional, TypeVar

from taskpad.domain.common.errors import (
    ConflictError,
    DomainError,
    NotAuthenticated,
    RemoteUnavailable,
    StoreError,
)
from taskpad.domain.records.kinds import RecordKind
from taskpad.domain.records.ports import RecordStore
from taskpad.domain.sync.draft import DraftSession
from taskpad.domain.sync.mirror import LocalMirror

logger = logging.getLogger(__name__)

R = TypeVar("R")
T = TypeVar("T")


async def sync_operation(
    call: Callable[[], Awaitable[T]],
    on_success: Callable[[T], None],
    *,
    op: str,
) -> T:
    """
    Run `call`; apply `on_success(result)` only if it did not raise.

    Anything that is not already a DomainError is reported as StoreError.
    """
    try:
        result = await call()
    except DomainError as e:
        logger.warning("%s failed: %s", op, e)
        raise
    except Exception as e:
        logger.warning("%s failed: %r", op, e)
        raise StoreError(str(e) or f"{op} failed") from e
    on_success(result)
    return result


class RecordManager(Generic[R]):
    """
    Mirror + sync operations for one owner and one record kind.

    The store handle is injected once and shared by every operation.
    """

    def __init__(
        self,
        store: Optional[RecordStore[R]],
        user_id: Optional[str],
        kind: RecordKind[R],
        *,
        reject_concurrent_edits: bool = False,
    ) -> None:
        self._store = store
        self._user_id = user_id
        self._kind = kind
        self._reject_concurrent_edits = reject_concurrent_edits
        self._in_flight: set[str] = set()
        self._loaded = False
        self.mirror: LocalMirror[R] = LocalMirror()

    @property
    def loaded(self) -> bool:
        """True when the last List reached the store."""
        return self._loaded

    @property
    def kind(self) -> RecordKind[R]:
        return self._kind

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    def new_draft(self) -> DraftSession[R]:
        return DraftSession(self._kind)

    def is_in_flight(self, record_id: str) -> bool:
        return record_id in self._in_flight

    def _remote(self) -> RecordStore[R]:
        if self._store is None:
            raise RemoteUnavailable("Database connection not available.")
        if not self._user_id:
            raise NotAuthenticated("Not signed in.")
        return self._store

    def _op(self, name: str, record_id: Optional[str] = None) -> str:
        if record_id is None:
            return f"{self._kind.name}.{name} user={self._user_id}"
        return f"{self._kind.name}.{name} user={self._user_id} id={record_id}"

    def _payload(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        payload = self._kind.editable(fields)
        if isinstance(payload.get("title"), str):
            payload["title"] = payload["title"].strip()
        return payload

    @contextmanager
    def _editing(self, record_id: str) -> Iterator[None]:
        if not self._reject_concurrent_edits:
            yield
            return
        if record_id in self._in_flight:
            raise ConflictError(f"{self._kind.label} is still being saved.")
        self._in_flight.add(record_id)
        try:
            yield
        finally:
            self._in_flight.discard(record_id)

    async def refresh(self) -> list[R]:
        """List: reload the mirror. Failures leave an empty mirror, not an error."""
        try:
            store = self._remote()
            rows = await store.list_for_owner(self._user_id)
        except Exception:
            logger.exception("%s failed; showing empty list", self._op("list"))
            rows = []
            self._loaded = False
        else:
            self._loaded = True
        self.mirror.initialize(rows)
        return self.mirror.snapshot()

    async def create(self, fields: Mapping[str, Any]) -> R:
        payload = {**self._kind.defaults, **self._payload(fields)}
        self._kind.validate(payload)
        store = self._remote()
        created = await sync_operation(
            lambda: store.insert(self._user_id, payload),
            self.mirror.apply_create,
            op=self._op("create"),
        )
        logger.debug("%s ok", self._op("create", getattr(created, "id", None)))
        return created

    async def update(self, record_id: str, fields: Mapping[str, Any]) -> None:
        payload = self._payload(fields)
        self._kind.validate({**self._current_fields(record_id), **payload})
        store = self._remote()
        with self._editing(record_id):
            await sync_operation(
                lambda: store.update(self._user_id, record_id, payload),
                lambda _: self.mirror.apply_update(record_id, payload),
                op=self._op("update", record_id),
            )

    async def delete(self, record_id: str) -> None:
        store = self._remote()
        with self._editing(record_id):
            await sync_operation(
                lambda: store.delete(self._user_id, record_id),
                lambda _: self.mirror.apply_delete(record_id),
                op=self._op("delete", record_id),
            )

    async def submit(self, draft: DraftSession[R]) -> Optional[R]:
        """
        Validate and persist the draft. Discards it on success; on any error the
        draft stays open for another try.

        Returns the created record in create mode, None in edit mode.
        """
        draft.validate_for_submit()
        async with draft.submitting():
            if draft.is_editing:
                await self.update(draft.editing_id, draft.fields)
                created = None
            else:
                created = await self.create(draft.fields)
        draft.discard()
        return created

    def _current_fields(self, record_id: str) -> dict[str, Any]:
        current = self.mirror.get(record_id)
        if current is None:
            return {}
        return self._kind.draft_from(current)
