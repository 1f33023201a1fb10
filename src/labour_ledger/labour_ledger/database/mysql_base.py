from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConstraintViolationError, StoreError
from ..core.logging_config import get_logger
from .connection import DatabaseConnection

logger = get_logger("database")

# Server error codes that mean "the write broke a constraint".
_CONSTRAINT_ERRNOS = {
    errorcode.ER_DUP_ENTRY,
    errorcode.ER_ROW_IS_REFERENCED_2,
    errorcode.ER_NO_REFERENCED_ROW_2,
    errorcode.ER_BAD_NULL_ERROR,
    3819,  # ER_CHECK_CONSTRAINT_VIOLATED (MySQL 8.0.16+)
}


def _translate(err: mysql.connector.Error) -> Exception:
    if isinstance(err, mysql.connector.IntegrityError) or getattr(err, "errno", None) in _CONSTRAINT_ERRNOS:
        return ConstraintViolationError(describe_constraint_error(err))
    return StoreError(f"Database error: {getattr(err, 'msg', None) or err}")


def describe_constraint_error(err: mysql.connector.Error) -> str:
    """Human-readable banner text for a rejected write."""
    msg = str(getattr(err, "msg", "") or err)
    errno = getattr(err, "errno", None)
    if errno == errorcode.ER_DUP_ENTRY:
        if "uq_attendance_worker_date" in msg:
            return "Attendance for this worker on this date already exists"
        if "uq_workers_phone" in msg:
            return "A worker with this phone number already exists"
        if "uq_categories_name" in msg:
            return "A category with this name already exists"
        if "uq_subcategories_category_name" in msg:
            return "This subcategory already exists in the category"
        return "Duplicate entry"
    if errno == errorcode.ER_ROW_IS_REFERENCED_2:
        return "Record is still referenced by attendance entries"
    if errno == errorcode.ER_NO_REFERENCED_ROW_2:
        return "Referenced record does not exist"
    if errno == 3819:
        return "Value rejected by a database check"
    return f"Write rejected by the database: {msg}"


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, roll back and translate errors."""
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.error("cannot connect to database: %s", e)
        raise StoreError("Cannot connect to the database") from e
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        translated = _translate(e)
        logger.warning("database operation failed: %s", translated)
        raise translated from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
