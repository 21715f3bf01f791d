"""Seed the active backend with the default school data.

Local store: same first-run initialization the app performs.
Remote database: the fixture is pushed only while the users table is empty.
"""
from __future__ import annotations

import asyncio
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.school_records.school_records.container import build_local_store, build_remote_store
from src.school_records.school_records.core.enums import EntityKind
from src.school_records.school_records.records.seed import load_seed_fixture, push_fixture


async def _seed_remote(settings) -> None:
    store = build_remote_store(settings)
    if await store.collection(EntityKind.USERS).list():
        print(f"SKIP: {store.describe()} already has users")
        return
    fixture = load_seed_fixture(REPO_ROOT / settings.SEED_FIXTURE_PATH)
    count = await push_fixture(store, fixture)
    print(f"OK: Seeded database -> {store.describe()} ({count} records)")


async def _seed_local(settings) -> None:
    store = build_local_store(settings)
    if await store.initialize():
        print(f"OK: Seeded local store -> {settings.LOCAL_STORE_PATH}")
    else:
        print(f"SKIP: local store {settings.LOCAL_STORE_PATH} already initialized")


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    if settings.USE_REMOTE_DB:
        asyncio.run(_seed_remote(settings))
    else:
        asyncio.run(_seed_local(settings))


if __name__ == "__main__":
    main()
