"""
Local mirror: the session's last-known copy of one owner's records.

Order is newest-first. The mirror never talks to the store; sync operations
patch it after a successful remote call.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Generic, Iterable, Iterator, Mapping, Optional, TypeVar

from taskpad.domain.records.models import IMMUTABLE_FIELDS

R = TypeVar("R")


def apply_patch(collection: Iterable[R], record_id: str, patch: Mapping[str, Any]) -> list[R]:
    """
    Return a new list where the record with `record_id` is merged with `patch`.

    Store-assigned fields and names the record does not have are dropped from
    the patch. Unknown ids leave the list as it was.
    """
    out: list[R] = []
    for item in collection:
        if getattr(item, "id") == record_id:
            known = {f.name for f in dataclasses.fields(item)} - IMMUTABLE_FIELDS
            clean = {k: v for k, v in patch.items() if k in known}
            if clean:
                item = dataclasses.replace(item, **clean)
        out.append(item)
    return out


class FilteredView(Generic[R]):
    """Derived list: re-evaluated on every iteration, never copies the mirror."""

    def __init__(self, source: "LocalMirror[R]", predicate: Callable[[R], bool]) -> None:
        self._source = source
        self._predicate = predicate

    def __iter__(self) -> Iterator[R]:
        return (r for r in self._source if self._predicate(r))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def to_list(self) -> list[R]:
        return list(self)


class LocalMirror(Generic[R]):
    def __init__(self, records: Iterable[R] = ()) -> None:
        self._items: list[R] = list(records)

    def initialize(self, records: Iterable[R]) -> None:
        self._items = list(records)

    def filter(self, predicate: Callable[[R], bool]) -> FilteredView[R]:
        return FilteredView(self, predicate)

    def apply_create(self, record: R) -> None:
        # always prepend, whatever its created_at says
        self._items.insert(0, record)

    def apply_update(self, record_id: str, patch: Mapping[str, Any]) -> None:
        self._items = apply_patch(self._items, record_id, patch)

    def apply_delete(self, record_id: str) -> None:
        self._items = [r for r in self._items if getattr(r, "id") != record_id]

    def get(self, record_id: str) -> Optional[R]:
        for r in self._items:
            if getattr(r, "id") == record_id:
                return r
        return None

    def ids(self) -> list[str]:
        return [getattr(r, "id") for r in self._items]

    def snapshot(self) -> list[R]:
        return list(self._items)

    def __iter__(self) -> Iterator[R]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, record_id: object) -> bool:
        return any(getattr(r, "id") == record_id for r in self._items)
