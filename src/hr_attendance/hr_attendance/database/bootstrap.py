from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.constants import INITIAL_PAID_LEAVES
from .connection import DBConfig

logger = logging.getLogger(__name__)

_SQL_TOKEN = re.compile(r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|--[^\n]*|;|[^'";-]+|.""", re.S)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema file on top-level semicolons; quoted text and -- comments are respected."""
    buf: list[str] = []
    for token in _SQL_TOKEN.findall(sql):
        if token.startswith("--"):
            continue
        if token == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(token)

    tail = "".join(buf).strip()
    if tail:
        yield tail


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
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to %s", target.describe())


def ensure_demo_users(db_config: dict) -> None:
    """Create (or refresh) one admin and one employee account for local use."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_user(full_name: str, email: str, employee_code: str, password: str, role: str, designation: str, salary: float) -> None:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET full_name=%s, password_hash=%s, role=%s, designation=%s, salary=%s, is_active=1
                    WHERE email=%s
                    """,
                    (full_name, password_hash, role, designation, salary, email),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users(full_name, email, employee_code, password_hash, role, designation,
                                      salary, paid_leave_balance, last_paid_leave_reset)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (full_name, email, employee_code, password_hash, role, designation, salary,
                     INITIAL_PAID_LEAVES, datetime.now()),
                )

        upsert_user("Admin Demo", "admin@example.com", "ADM-001", "admin123", "Admin", "Manager", 0)
        upsert_user("Employee Demo", "employee@example.com", "EMP-001", "employee123", "Employee", "Developer", 22000)

        conn.commit()
    finally:
        conn.close()
    logger.info("Demo accounts ready on %s", target.describe())


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
