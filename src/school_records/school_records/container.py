from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Optional

from .attachments.service import AttachmentService
from .core.constants import DEFAULT_LOCAL_STORE_PATH, DEFAULT_LOCAL_STORE_QUOTA_BYTES
from .database.connection import DBConfig, DatabaseConnection
from .database.keyvalue import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from .messaging.service import MessagingService
from .payroll.calculator.standard_calculator import StandardSalaryCalculator
from .payroll.service import PayrollService
from .records.local_repository import LocalRecordStore
from .records.mysql_repository import MySQLRecordStore
from .records.repository import RecordStore
from .records.seed import SeedFixture, load_seed_fixture

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class Container:
    store: RecordStore

    payroll_service: PayrollService
    attachment_service: AttachmentService
    messaging_service: MessagingService


def _resolve_path(value: str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else PROJECT_ROOT / path


def _load_seed(settings: ModuleType) -> Optional[SeedFixture]:
    seed_path = getattr(settings, "SEED_FIXTURE_PATH", "")
    if not seed_path:
        return None
    path = _resolve_path(seed_path)
    if not path.exists():
        logger.warning("Seed fixture %s not found, local store starts empty", path)
        return None
    return load_seed_fixture(path)


def build_local_store(settings: ModuleType) -> LocalRecordStore:
    quota = getattr(settings, "LOCAL_STORE_QUOTA_BYTES", DEFAULT_LOCAL_STORE_QUOTA_BYTES)
    store_path = getattr(settings, "LOCAL_STORE_PATH", DEFAULT_LOCAL_STORE_PATH)
    kv: KeyValueStore
    if store_path:
        kv = JsonFileKeyValueStore(_resolve_path(store_path), quota_bytes=quota)
    else:
        kv = InMemoryKeyValueStore(quota_bytes=quota)
    return LocalRecordStore(kv, seed=_load_seed(settings))


def build_remote_store(settings: ModuleType) -> MySQLRecordStore:
    config = DBConfig.from_url(str(settings.DB_URL), secret=str(getattr(settings, "DB_SECRET", "")))
    return MySQLRecordStore(DatabaseConnection.get_instance(config))


def build_container(settings: ModuleType, *, store: Optional[RecordStore] = None) -> Container:
    """Wire services to one backend.

    The backend is chosen once here from ``USE_REMOTE_DB``; nothing else in
    the package knows which one is active.
    """
    if store is None:
        if bool(getattr(settings, "USE_REMOTE_DB", False)):
            store = build_remote_store(settings)
        else:
            store = build_local_store(settings)

    return Container(
        store=store,
        payroll_service=PayrollService(store, calculator=StandardSalaryCalculator()),
        attachment_service=AttachmentService(store),
        messaging_service=MessagingService(store),
    )
