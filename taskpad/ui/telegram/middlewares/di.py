from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from taskpad.domain.sync.workspace import WorkspaceRegistry


class DIMiddleware(BaseMiddleware):
    """
    Inject the caller's workspace to handlers via `data` dict.

    Must run after SessionMiddleware, which puts `user_id` in data.
    Handlers can request args by name, e.g.
      async def handler(message: Message, workspace: Workspace): ...
    """

    def __init__(self, registry: WorkspaceRegistry) -> None:
        self._registry = registry

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        data["registry"] = self._registry
        data["workspace"] = await self._registry.get(data["user_id"])
        return await handler(event, data)
