"""Cursor helpers shared by the MySQL repositories.

Every repository call is its own unit of work: one connection, one commit.
Driver errors leave this module as DownstreamError so services and
controllers never see mysql.connector types.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

import mysql.connector

from ..core.exceptions import DownstreamError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("Cannot connect to %s: %s", conn_factory.config.describe(), e)
        raise DownstreamError("Database is unavailable") from e

    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.exception("Query failed, transaction rolled back")
        raise DownstreamError("Database operation failed") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def in_clause(values: Sequence[Any]) -> str:
    """Placeholder list for `IN (...)`; callers must handle the empty case first."""
    return ", ".join(["%s"] * len(values))
