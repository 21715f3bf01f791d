from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, TypeVar

import mysql.connector

from ..core.enums import EntityKind
from ..core.exceptions import StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, quote_ident
from .mapper import RowMapper
from .repository import Record, RecordRepository, RecordStore
from .schema import EntitySchema, schema_for

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _run(fn: Callable[[], T]) -> T:
    # mysql-connector is blocking; keep it off the event loop.
    try:
        return await asyncio.to_thread(fn)
    except mysql.connector.Error as e:
        logger.error("Remote store error: %s", e)
        raise StorageError(str(e)) from e


class MySQLRecordRepository(RecordRepository):
    def __init__(self, conn_factory: DatabaseConnection, schema: EntitySchema):
        self._conn_factory = conn_factory
        self._mapper = RowMapper(schema)
        self._table = quote_ident(schema.table)
        self.kind = schema.kind

    @property
    def schema(self) -> EntitySchema:
        return self._mapper.schema

    def _list(self) -> list[Record]:
        schema = self.schema
        direction = "DESC" if schema.descending else "ASC"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT * FROM {self._table} ORDER BY {quote_ident(schema.order_by)} {direction}")
            return [self._mapper.from_row(r) for r in fetchall(cur)]

    def _get(self, record_id: str) -> Optional[Record]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT * FROM {self._table} WHERE `id`=%s", (record_id,))
            row = fetchone(cur)
            return self._mapper.from_row(row) if row else None

    def _insert(self, record: Mapping[str, Any]) -> None:
        row = self._mapper.to_row(record)
        if not row:
            raise StorageError(f"Nothing to insert into {self.schema.table}")
        columns = ", ".join(quote_ident(c) for c in row)
        placeholders = ", ".join(["%s"] * len(row))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {self._table} ({columns}) VALUES ({placeholders})",
                tuple(row.values()),
            )

    def _update(self, record_id: str, partial: Mapping[str, Any]) -> None:
        row = self._mapper.to_partial_row(partial)
        if not row:
            return
        assignments = ", ".join(f"{quote_ident(c)}=%s" for c in row)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {self._table} SET {assignments} WHERE `id`=%s",
                tuple(row.values()) + (record_id,),
            )

    def _delete(self, record_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self._table} WHERE `id`=%s", (record_id,))

    async def list(self) -> Sequence[Record]:
        return await _run(self._list)

    async def get(self, record_id: str) -> Optional[Record]:
        return await _run(lambda: self._get(record_id))

    async def add(self, record: Mapping[str, Any]) -> None:
        await _run(lambda: self._insert(record))

    async def update(self, record_id: str, partial: Mapping[str, Any]) -> None:
        await _run(lambda: self._update(record_id, partial))

    async def delete(self, record_id: str) -> None:
        await _run(lambda: self._delete(record_id))


class MySQLRecordStore(RecordStore):
    backend_name = "mysql"

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._collections: Dict[EntityKind, MySQLRecordRepository] = {}

    def collection(self, kind: EntityKind) -> MySQLRecordRepository:
        kind = EntityKind(kind)
        repo = self._collections.get(kind)
        if repo is None:
            repo = MySQLRecordRepository(self._conn_factory, schema_for(kind))
            self._collections[kind] = repo
        return repo

    def describe(self) -> str:
        return self._conn_factory.config.describe()

    def _has_users(self) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT `id` FROM {quote_ident(schema_for(EntityKind.USERS).table)} LIMIT 1")
            return fetchone(cur) is not None

    async def initialize(self) -> bool:
        # Seed rows arrive through migrations (scripts/init_db.py, scripts/seed_db.py).
        if await _run(self._has_users):
            logger.info("Remote database already initialized")
        else:
            logger.warning("Remote database has no users yet; run the seed migration")
        return False
