from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    """Where the collaborator's attendance database lives."""

    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "attendance_db"
    connect_timeout: int = 10

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(values.get("host", defaults.host)),
            port=int(values.get("port", defaults.port)),
            user=str(values.get("user", defaults.user)),
            password=str(values.get("password", defaults.password)),
            database=str(values.get("database", defaults.database)),
            connect_timeout=int(values.get("connect_timeout", defaults.connect_timeout)),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "connection_timeout": self.connect_timeout,
        }
        if with_database:
            kwargs["database"] = self.database
        return kwargs

    @property
    def description(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Process-wide connection factory for the read-side loaders.

    Each loader call opens a short-lived connection; the engine itself never
    touches the database.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = cls(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    @property
    def description(self) -> str:
        return self._config.description

    def connect(self):
        return mysql.connector.connect(**self._config.connect_kwargs())
