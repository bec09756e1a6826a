from __future__ import annotations

import uuid

from taskpad.domain.records.ports import IdGenerator


class UuidGenerator(IdGenerator):
    def new_id(self) -> str:
        # hex keeps callback_data short
        return uuid.uuid4().hex
