"""Small helpers shared by the ProjectKit commands."""

import asyncio
import logging
import os
from datetime import datetime
from pathlib import Path


logger = logging.getLogger(__name__)

_INTERVALS = [
    (31536000, "years"),
    (2592000, "months"),
    (86400, "days"),
    (3600, "hours"),
    (60, "minutes"),
]


def get_date_string(date: datetime) -> str:
    """Format a timestamp for commit messages, e.g. ``2024/10/04 01:23:45 UTC+08:00``."""
    local = date.astimezone()
    return local.strftime("%Y/%m/%d %H:%M:%S %Z").strip()


def time_since(date: datetime, now: datetime | None = None) -> str:
    """Human readable age of ``date``, e.g. ``3 days``."""
    now = now or datetime.now(tz=date.tzinfo)
    seconds = int((now - date).total_seconds())

    for length, unit in _INTERVALS:
        interval = seconds / length
        if interval > 1:
            return f"{int(interval)} {unit}"
    return f"{seconds} seconds"


async def make_dir(path: str | os.PathLike) -> bool:
    """Create ``path`` and its parents. Returns False instead of raising."""
    try:
        await asyncio.to_thread(Path(path).mkdir, parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Failed to create directory {path}: {e}")
        return False
    return True


async def stat_path(path: str | os.PathLike) -> os.stat_result | None:
    """``os.stat`` off the event loop. Returns None when the path is missing."""
    try:
        return await asyncio.to_thread(os.stat, path)
    except OSError:
        return None
