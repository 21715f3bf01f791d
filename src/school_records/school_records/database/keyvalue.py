"""Key-value substrate for the local record store.

Values are opaque strings (the record store keeps JSON arrays in them), the
same contract browsers give ``localStorage``: string keys, string values and
a per-origin quota.
"""
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..core.exceptions import StorageError


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        """Store ``value``; raises StorageError when the write cannot happen."""

        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


def _usage(items: Dict[str, str]) -> int:
    return sum(len(k.encode("utf-8")) + len(v.encode("utf-8")) for k, v in items.items())


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, *, quota_bytes: Optional[int] = None, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})
        self._quota_bytes = quota_bytes

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        candidate = dict(self._items)
        candidate[key] = value
        if self._quota_bytes is not None and _usage(candidate) > self._quota_bytes:
            raise StorageError(f"Quota exceeded while writing {key!r}")
        self._items = candidate

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> list[str]:
        return list(self._items)


class JsonFileKeyValueStore(KeyValueStore):
    """All keys live in one JSON document, replaced atomically on every write."""

    def __init__(self, path: str | Path, *, quota_bytes: Optional[int] = None):
        self._path = Path(path)
        self._quota_bytes = quota_bytes
        self._items: Optional[Dict[str, str]] = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        if self._items is None:
            if self._path.exists():
                try:
                    raw = json.loads(self._path.read_text(encoding="utf-8") or "{}")
                except (OSError, ValueError) as e:
                    raise StorageError(f"Cannot read local store {self._path}: {e}") from e
                self._items = {str(k): str(v) for k, v in dict(raw).items()}
            else:
                self._items = {}
        return self._items

    def _flush(self, items: Dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".kv-", suffix=".json", dir=str(self._path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(items, f, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write local store {self._path}: {e}") from e
        self._items = items

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        candidate = dict(self._load())
        candidate[key] = value
        if self._quota_bytes is not None and _usage(candidate) > self._quota_bytes:
            raise StorageError(f"Quota exceeded while writing {key!r}")
        self._flush(candidate)

    def remove(self, key: str) -> None:
        items = self._load()
        if key in items:
            candidate = dict(items)
            del candidate[key]
            self._flush(candidate)

    def clear(self) -> None:
        self._flush({})
