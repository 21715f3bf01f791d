from __future__ import annotations

import urllib.parse
from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_url(cls, url: str, *, secret: str = "") -> "DBConfig":
        """Build a config from ``mysql://user@host:port/database`` plus the secret.

        A password embedded in the URL wins over ``secret``.
        """
        parsed = urllib.parse.urlparse(url)
        if parsed.scheme not in {"mysql", "mysql+mysqlconnector"}:
            raise ValueError(f"Unsupported database URL scheme: {parsed.scheme!r}")
        database = parsed.path.lstrip("/")
        if not database:
            raise ValueError("Database URL must name a database")
        return cls(
            host=parsed.hostname or "localhost",
            port=int(parsed.port or 3306),
            user=urllib.parse.unquote(parsed.username or "root"),
            password=urllib.parse.unquote(parsed.password) if parsed.password else secret,
            database=database,
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
