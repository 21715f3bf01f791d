from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.constants import SEED_SENTINEL_KEY
from ..core.enums import EntityKind
from ..core.exceptions import StorageError
from ..database.keyvalue import KeyValueStore
from .repository import Record, RecordRepository, RecordStore
from .seed import SeedFixture, push_fixture

logger = logging.getLogger(__name__)


class LocalRecordRepository(RecordRepository):
    """One entity kind kept as a JSON array under a single key."""

    def __init__(self, kv: KeyValueStore, kind: EntityKind):
        self._kv = kv
        self.kind = kind

    def _read(self) -> list[Record]:
        try:
            raw = self._kv.get(self.kind.value)
            if raw is None:
                return []
            data = json.loads(raw)
        except (StorageError, ValueError) as e:
            logger.error("Cannot read %s from local store: %s", self.kind.value, e)
            return []
        if not isinstance(data, list):
            logger.error("Local store key %s does not hold a list", self.kind.value)
            return []
        return [dict(r) for r in data if isinstance(r, dict)]

    def _write(self, records: Sequence[Record]) -> None:
        try:
            self._kv.set(self.kind.value, json.dumps(list(records), ensure_ascii=False))
        except StorageError as e:
            logger.error("Cannot write %s to local store: %s", self.kind.value, e)
            raise

    async def list(self) -> Sequence[Record]:
        return self._read()

    async def get(self, record_id: str) -> Optional[Record]:
        for r in self._read():
            if r.get("id") == record_id:
                return r
        return None

    async def add(self, record: Mapping[str, Any]) -> None:
        records = self._read()
        records.append(dict(record))
        self._write(records)

    async def update(self, record_id: str, partial: Mapping[str, Any]) -> None:
        records = self._read()
        for index, r in enumerate(records):
            if r.get("id") == record_id:
                records[index] = {**r, **dict(partial)}
                self._write(records)
                return

    async def delete(self, record_id: str) -> None:
        records = self._read()
        kept = [r for r in records if r.get("id") != record_id]
        if len(kept) != len(records):
            self._write(kept)


class LocalRecordStore(RecordStore):
    backend_name = "local"

    def __init__(self, kv: KeyValueStore, *, seed: Optional[SeedFixture] = None):
        self._kv = kv
        self._seed = seed
        self._collections: Dict[EntityKind, LocalRecordRepository] = {}

    def collection(self, kind: EntityKind) -> LocalRecordRepository:
        kind = EntityKind(kind)
        repo = self._collections.get(kind)
        if repo is None:
            repo = LocalRecordRepository(self._kv, kind)
            self._collections[kind] = repo
        return repo

    def is_initialized(self) -> bool:
        return self._kv.get(SEED_SENTINEL_KEY) is not None

    async def initialize(self) -> bool:
        if self.is_initialized():
            logger.debug("Local store already initialized")
            return False

        logger.info("Initializing local store with default data...")
        self._kv.clear()
        self._kv.set(SEED_SENTINEL_KEY, "true")
        if self._seed:
            count = await push_fixture(self, self._seed)
            logger.info("Default data initialized (%d records)", count)
        return True
