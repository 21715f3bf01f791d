"""Schema migration helpers for the remote backend.

Used by ``scripts/init_db.py`` and by ``create_app`` when ``AUTO_INIT_DB`` is
on. The schema file only holds ``CREATE TABLE IF NOT EXISTS`` statements, so
applying it twice is harmless.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, List

import mysql.connector

from ..records.schema import ENTITY_SCHEMAS
from .connection import DBConfig

# Quoted strings and identifiers are kept whole so a ';' inside them never ends a statement.
_TOKEN = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|`[^`]*`|;|[^'"`;]+|.""", re.S)


def _prepare_script(sql: str) -> str:
    # The target database comes from DB_URL, not from the file.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def split_statements(sql: str) -> Iterator[str]:
    current: List[str] = []
    for token in _TOKEN.findall(sql):
        if token == ";":
            statement = "".join(current).strip()
            current = []
            if statement:
                yield statement
        else:
            current.append(token)
    statement = "".join(current).strip()
    if statement:
        yield statement


def _connect(config: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=config.host,
        port=config.port,
        user=config.user,
        password=config.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = config.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(config: DBConfig) -> None:
    conn = _connect(config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(config: DBConfig, *, schema_path: str | Path) -> int:
    """Run every statement of ``schema_path``; returns how many ran."""
    ensure_database_exists(config)
    statements = list(split_statements(_prepare_script(Path(schema_path).read_text(encoding="utf-8"))))

    conn = _connect(config)
    try:
        cur = conn.cursor()
        for statement in statements:
            cur.execute(statement)
        conn.commit()
    finally:
        conn.close()
    return len(statements)


def list_tables(config: DBConfig) -> list[str]:
    conn = _connect(config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def missing_tables(config: DBConfig) -> list[str]:
    """Entity tables the store expects but the database does not have."""
    present = set(list_tables(config))
    return sorted(schema.table for schema in ENTITY_SCHEMAS.values() if schema.table not in present)
