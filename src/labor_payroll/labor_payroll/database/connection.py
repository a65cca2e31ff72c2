from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "labor_payroll"

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(db_config.get("host") or defaults.host),
            port=int(db_config.get("port") or defaults.port),
            user=str(db_config.get("user") or defaults.user),
            password=str(db_config.get("password") or ""),
            database=str(db_config.get("database") or defaults.database),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "charset": "utf8mb4",
        }
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Tạo kết nối MySQL ngắn hạn cho từng thao tác của repository.

    Mỗi DBConfig dùng chung một factory trong cả tiến trình.
    """

    _instances: ClassVar[dict] = {}

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if config not in cls._instances:
            cls._instances[config] = cls(config)
        return cls._instances[config]

    def connect(self):
        return mysql.connector.connect(**self.config.connect_kwargs())
