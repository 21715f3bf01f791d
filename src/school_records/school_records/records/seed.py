"""Seed fixture loading.

The fixture is a JSON object mapping entity kinds to lists of records, in
insertion order. String values may be time placeholders resolved at load
time: ``{{now}}``, ``{{today}}``, ``{{now-2d}}``, ``{{today-1d}}``.
"""
from __future__ import annotations

import json
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..core.enums import EntityKind
from ..core.exceptions import ValidationError

if TYPE_CHECKING:
    from .repository import Record, RecordStore

SeedFixture = Dict[EntityKind, List["Record"]]

_PLACEHOLDER = re.compile(r"\{\{(now|today)(?:-(\d+)d)?\}\}")


def _iso_instant(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _resolve(value: Any, now: datetime) -> Any:
    if isinstance(value, str):
        m = _PLACEHOLDER.fullmatch(value)
        if not m:
            return value
        moment = now - timedelta(days=int(m.group(2) or 0))
        return moment.date().isoformat() if m.group(1) == "today" else _iso_instant(moment)
    if isinstance(value, list):
        return [_resolve(v, now) for v in value]
    if isinstance(value, dict):
        return {k: _resolve(v, now) for k, v in value.items()}
    return value


def parse_seed_fixture(data: Dict[str, Any], *, now: Optional[datetime] = None) -> SeedFixture:
    now = now or datetime.now(timezone.utc)
    fixture: SeedFixture = {}
    for key, records in data.items():
        try:
            kind = EntityKind(key)
        except ValueError:
            raise ValidationError(f"Unknown entity kind in seed fixture: {key}")
        if not isinstance(records, list):
            raise ValidationError(f"Seed entry {key} must be a list")
        fixture[kind] = [_resolve(dict(r), now) for r in records]
    return fixture


def load_seed_fixture(path: str | Path, *, now: Optional[datetime] = None) -> SeedFixture:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return parse_seed_fixture(data, now=now)


async def push_fixture(store: "RecordStore", fixture: SeedFixture) -> int:
    """Add every fixture record through the store; returns the record count."""
    count = 0
    for kind, records in fixture.items():
        repo = store.collection(kind)
        for record in records:
            await repo.add(record)
            count += 1
    return count
