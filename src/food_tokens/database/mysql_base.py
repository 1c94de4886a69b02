from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

import mysql.connector
import pytz
from mysql.connector import errors as mysql_errors

from ..core.constants import MYSQL_DUPLICATE_KEY_ERRNO
from ..core.exceptions import ConflictError, QueryError, TransportError, ValidationError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Client-side errno values for lost or refused connections.
_CONNECTION_ERRNOS = {2002, 2003, 2005, 2006, 2013, 2055}


def translate_error(exc: mysql.connector.Error) -> Exception:
    """Map a mysql-connector error onto the domain exception hierarchy."""
    message = getattr(exc, "msg", None) or str(exc)
    errno = getattr(exc, "errno", None)

    if isinstance(exc, (mysql_errors.InterfaceError, mysql_errors.OperationalError)):
        return TransportError(message)
    if errno in _CONNECTION_ERRNOS:
        return TransportError(message)
    if isinstance(exc, mysql_errors.IntegrityError):
        if errno == MYSQL_DUPLICATE_KEY_ERRNO:
            return ConflictError(message)
        return ValidationError(message)
    if isinstance(exc, mysql_errors.DataError):
        return ValidationError(message)
    return QueryError(message)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("Could not connect to data store: %s", exc)
        raise translate_error(exc) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _safe_rollback(conn)
        raise translate_error(exc) from exc
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error as exc:
        logger.warning("Rollback failed: %s", exc)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_db_datetime(value: datetime) -> datetime:
    """DATETIME columns hold naive UTC values."""
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.utc).replace(tzinfo=None)


def from_db_datetime(value: Any) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)
