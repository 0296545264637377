from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "youth_ministry"
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host") or cls.host),
            port=int(db_config.get("port") or cls.port),
            user=str(db_config.get("user") or cls.user),
            password=str(db_config.get("password") or ""),
            database=str(db_config.get("database") or cls.database),
            connect_timeout=int(db_config.get("connect_timeout") or cls.connect_timeout),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "connection_timeout": self.connect_timeout,
            "charset": "utf8mb4",
            "use_pure": True,
        }
        if with_database:
            kwargs["database"] = self.database
        return kwargs

    def describe(self) -> str:
        """``user@host:port/database``, safe to log."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class ConnectionFactory:
    """Hands out short-lived MySQL connections, one per repository call.

    Factories are shared per DBConfig so every repository built for the same
    target reuses one instance.
    """

    _by_config: ClassVar[Dict[DBConfig, "ConnectionFactory"]] = {}

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def for_config(cls, config: DBConfig) -> "ConnectionFactory":
        factory = cls._by_config.get(config)
        if factory is None:
            factory = cls._by_config[config] = cls(config)
        return factory

    def connect(self):
        return mysql.connector.connect(**self._config.connect_kwargs())
