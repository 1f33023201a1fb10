from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import BalanceAuditRepository


class MySQLBalanceAuditRepository(BalanceAuditRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(
        self,
        *,
        worker_id: int,
        old_balance: Optional[Decimal],
        new_balance: Optional[Decimal],
        change_reason: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO balance_audit(worker_id, old_balance, new_balance, change_reason)
                VALUES(%s,%s,%s,%s)
                """,
                (int(worker_id), old_balance, new_balance, change_reason[:255]),
            )
            return int(cur.lastrowid)
