from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_USERS = (
    # (username, full_name, role)
    ("admin", "Tuấn", "admin"),
    ("luc", "Lực", "user"),
    ("du", "Dũ", "user"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?m)^\s*--.*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'":
            in_single = not in_single
        elif ch == ";" and not in_single:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    return mysql.connector.connect(use_pure=True, **target.connect_kwargs(with_database=with_database))


def _run_sql_file(db_config: dict, path: str | Path) -> int:
    target = DBConfig.from_dict(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        count = 0
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
        return count
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_sql_file(db_config, schema_path)
    logger.info("Schema applied (%d statements) from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_sql_file(db_config, seed_path)
    logger.info("Seed applied (%d statements) from %s", count, seed_path)


def ensure_demo_users(db_config: dict, *, admin_password: str, user_password: str) -> None:
    if not admin_password or not user_password:
        raise ValueError("DEMO_ADMIN_PASSWORD / DEMO_USER_PASSWORD must be set before seeding demo users")

    target = DBConfig.from_dict(db_config)

    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        for username, full_name, role in DEMO_USERS:
            password = admin_password if role == "admin" else user_password
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    """
                    UPDATE users
                    SET full_name=%s, password_hash=%s, role=%s, is_active=1
                    WHERE username=%s
                    """,
                    (full_name, password_hash, role, username),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (user_id, username, full_name, password_hash, role)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (uuid.uuid4().hex[:16], username, full_name, password_hash, role),
                )

        conn.commit()
        logger.info("Demo users ready: %s", ", ".join(u[0] for u in DEMO_USERS))
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
