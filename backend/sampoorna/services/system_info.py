"""Runtime facts reported to administrators."""

from __future__ import annotations

import platform
import time

from ..config import get_settings
from .centers import count_centers, count_users

_STARTED_AT = time.monotonic()


async def collect_system_info() -> dict[str, object]:
    settings = get_settings()
    return {
        "version": settings.app_version,
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "userCount": await count_users(),
        "centerCount": await count_centers(),
        "pythonVersion": platform.python_version(),
        "platform": platform.system().lower(),
    }
