from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Generic, Optional, TypeVar

from taskpad.domain.common.errors import ConflictError, ValidationError
from taskpad.domain.records.kinds import RecordKind

R = TypeVar("R")


class DraftSession(Generic[R]):
    """
    One record being created or edited, held outside the mirror until submit.

    Create mode: `editing_id` is None. Edit mode: `editing_id` is the target id.
    """

    def __init__(self, kind: RecordKind[R]) -> None:
        self._kind = kind
        self._fields: Optional[dict[str, Any]] = None
        self._editing_id: Optional[str] = None
        self._submitting = False

    @property
    def kind(self) -> RecordKind[R]:
        return self._kind

    @property
    def is_active(self) -> bool:
        return self._fields is not None

    @property
    def is_editing(self) -> bool:
        return self._editing_id is not None

    @property
    def editing_id(self) -> Optional[str]:
        return self._editing_id

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def fields(self) -> dict[str, Any]:
        return dict(self._fields or {})

    def begin(self, existing: Optional[R] = None) -> None:
        if existing is None:
            self._fields = dict(self._kind.defaults)
            self._editing_id = None
        else:
            self._fields = self._kind.draft_from(existing)
            self._editing_id = getattr(existing, "id")

    def set_field(self, name: str, value: Any) -> None:
        if self._fields is None:
            raise ValidationError("No draft is open.")
        if name not in self._kind.mutable_fields:
            raise ValidationError(f"{self._kind.label} has no field {name!r}.")
        self._fields[name] = value

    def validate_for_submit(self) -> None:
        if self._fields is None:
            raise ValidationError("No draft is open.")
        self._kind.validate(self._fields)

    def discard(self) -> None:
        self._fields = None
        self._editing_id = None

    @asynccontextmanager
    async def submitting(self) -> AsyncIterator[None]:
        """Loading flag: rejects a second submit while one is outstanding."""
        if self._submitting:
            raise ConflictError("Already saving, please wait.")
        self._submitting = True
        try:
            yield
        finally:
            self._submitting = False
