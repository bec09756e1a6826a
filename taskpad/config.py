from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv


_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    bot_token: str
    timezone: str
    db_path: Path
    allowed_user_ids: frozenset[str]
    reject_concurrent_edits: bool
    log_level: str


def _parse_user_ids(raw: str) -> frozenset[str]:
    ids = set()
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.lstrip("-").isdigit():
            raise RuntimeError(f"ALLOWED_USER_IDS contains a non-numeric id: {part!r}")
        ids.add(part)
    return frozenset(ids)


def load_settings(dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv()

    bot_token = os.getenv("BOT_TOKEN", "").strip()
    tz = os.getenv("TZ", "UTC").strip() or "UTC"
    db_raw = os.getenv("DB_PATH", "data/taskpad.db").strip()
    allowed = _parse_user_ids(os.getenv("ALLOWED_USER_IDS", ""))
    reject = os.getenv("REJECT_CONCURRENT_EDITS", "").strip().lower() in _TRUE
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    if not bot_token:
        raise RuntimeError("BOT_TOKEN missing in .env")
    if not db_raw:
        raise RuntimeError("DB_PATH is empty")

    return Settings(
        bot_token=bot_token,
        timezone=tz,
        db_path=Path(db_raw),
        allowed_user_ids=allowed,
        reject_concurrent_edits=reject,
        log_level=log_level,
    )
