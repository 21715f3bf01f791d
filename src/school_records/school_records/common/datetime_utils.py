from __future__ import annotations

import re
import threading
import time
from datetime import datetime, timezone

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

_last_id = 0
_id_lock = threading.Lock()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def now_iso() -> str:
    """Current UTC instant as an ISO-8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_month(value: str) -> bool:
    return bool(value) and bool(_MONTH_RE.match(value))


def year_of(month: str) -> str:
    return month.split("-")[0]


def generate_id() -> str:
    """Timestamp-derived identifier (epoch milliseconds).

    Strictly increasing within a process so records created in the same
    millisecond never share an id.
    """
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
    return str(candidate)
