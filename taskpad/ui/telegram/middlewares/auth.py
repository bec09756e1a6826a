from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject

from taskpad.ui.telegram.texts.common import NOT_AUTHORIZED

logger = logging.getLogger(__name__)


def current_identity(event: TelegramObject, allowed: frozenset[str]) -> Optional[str]:
    """
    Owner identity for the event's sender, or None when unauthenticated.

    An empty allow-list lets every Telegram user in as their own tenant.
    """
    user = getattr(event, "from_user", None)
    if user is None:
        return None
    user_id = str(user.id)
    if allowed and user_id not in allowed:
        return None
    return user_id


class SessionMiddleware(BaseMiddleware):
    def __init__(self, allowed_user_ids: frozenset[str] = frozenset()) -> None:
        self._allowed = allowed_user_ids

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        user_id = current_identity(event, self._allowed)

        if user_id is None:
            sender = getattr(getattr(event, "from_user", None), "id", None)
            logger.warning("Blocked unauthenticated update from user_id=%s", sender)
            if isinstance(event, Message):
                await event.answer(NOT_AUTHORIZED)
            elif isinstance(event, CallbackQuery):
                await event.answer(NOT_AUTHORIZED, show_alert=True)
            return None

        data["user_id"] = user_id
        return await handler(event, data)
