from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import ExceptionTypeFilter
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import ErrorEvent

from taskpad.config import Settings, load_settings
from taskpad.domain.common.errors import DomainError
from taskpad.domain.common.time import to_iso
from taskpad.domain.sync.workspace import WorkspaceRegistry
from taskpad.infra.clock.system_clock import SystemClock
from taskpad.infra.db.connection import Database
from taskpad.infra.db.repo.notes_sqlite import NotesSqliteStore
from taskpad.infra.db.repo.tasks_sqlite import TasksSqliteStore
from taskpad.infra.db.schema_version import apply_migrations
from taskpad.infra.ids.uuid_gen import UuidGenerator
from taskpad.ui.telegram.handlers.cancel import router as cancel_router
from taskpad.ui.telegram.handlers.notes import router as notes_router
from taskpad.ui.telegram.handlers.start import router as start_router
from taskpad.ui.telegram.handlers.tasks import router as tasks_router
from taskpad.ui.telegram.middlewares.auth import SessionMiddleware
from taskpad.ui.telegram.middlewares.di import DIMiddleware
from taskpad.ui.telegram.utils.notify import notify_error

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s",
    )


async def build_registry(settings: Settings) -> WorkspaceRegistry:
    """Open the database, migrate it, and wire the stores into a registry."""
    db_path = settings.db_path
    if not db_path.is_absolute():
        db_path = Path.cwd() / db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("DB_PATH: %s", db_path)

    db = Database(str(db_path))
    clock = SystemClock(settings.timezone)
    ids = UuidGenerator()

    await apply_migrations(db=db, now_iso=to_iso(clock.now()))

    return WorkspaceRegistry(
        TasksSqliteStore(db, clock, ids),
        NotesSqliteStore(db, clock, ids),
        reject_concurrent_edits=settings.reject_concurrent_edits,
    )


def build_dispatcher(registry: WorkspaceRegistry, settings: Settings) -> Dispatcher:
    dp = Dispatcher(storage=MemoryStorage())

    # --- middlewares: session first, then the workspace it resolves ---
    for observer in (dp.message, dp.callback_query):
        observer.middleware(SessionMiddleware(settings.allowed_user_ids))
        observer.middleware(DIMiddleware(registry))

    # --- routers ---
    dp.include_router(start_router)
    dp.include_router(cancel_router)
    dp.include_router(tasks_router)
    dp.include_router(notes_router)

    @dp.error(ExceptionTypeFilter(TelegramBadRequest))
    async def handle_old_callback_query(event: ErrorEvent) -> None:
        """Ignore TelegramBadRequest for old/invalid callback queries (e.g. after bot restart)."""
        msg = str(event.exception).lower()
        if "query is too old" in msg or "query id is invalid" in msg or "response timeout expired" in msg:
            logger.debug("Ignoring old/invalid callback query: %s", event.exception)
            return
        raise event.exception

    @dp.error(ExceptionTypeFilter(DomainError))
    async def handle_domain_error(event: ErrorEvent) -> None:
        """Anything a handler did not catch still ends as a notification, not a crash."""
        update = event.update
        target = update.callback_query or update.message
        if target is None:
            logger.warning("Unhandled %r outside a message/callback", event.exception)
            return
        await notify_error(target, event.exception)

    return dp


async def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    pid = os.getpid()

    logger.info("Bot starting - PID: %s", pid)
    logger.warning("Only run ONE polling instance per bot token (TelegramConflictError otherwise)")

    registry = await build_registry(settings)
    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = build_dispatcher(registry, settings)

    try:
        logger.info("Starting polling - PID: %s", pid)
        await dp.start_polling(bot)
    except Exception:
        logger.error("Bot crashed - PID: %s", pid, exc_info=True)
        raise
    finally:
        await bot.session.close()
        logger.info("Bot shutdown complete - PID: %s", pid)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
