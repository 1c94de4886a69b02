from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "DBConfig":
        return cls(
            host=str(values.get("host", "localhost")),
            port=int(values.get("port", 3306)),
            user=str(values.get("user", "root")),
            password=str(values.get("password", "")),
            database=str(values.get("database", "food_tokens")),
            connect_timeout=int(values.get("connect_timeout", 10)),
        )


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation; the session
    time zone is pinned to UTC so DATETIME values are always UTC.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=int(self._config.connect_timeout),
            time_zone="+00:00",
        )
