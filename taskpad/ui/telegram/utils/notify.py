from __future__ import annotations

import logging
from typing import Union

from aiogram.types import CallbackQuery, Message

from taskpad.domain.common.errors import DomainError

logger = logging.getLogger(__name__)


async def notify(event: Union[Message, CallbackQuery], text: str, alert: bool = False) -> None:
    """Transient notification: a toast for callbacks, a short message otherwise."""
    if isinstance(event, CallbackQuery):
        await event.answer(text, show_alert=alert)
    else:
        await event.answer(text)


async def notify_error(event: Union[Message, CallbackQuery], err: DomainError) -> None:
    logger.info("User %s notified of %s: %s", event.from_user.id, type(err).__name__, err)
    await notify(event, f"⚠️ {err}", alert=True)
