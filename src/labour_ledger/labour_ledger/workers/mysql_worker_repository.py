from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import round_money
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Worker
from .repository import WorkerRepository

_COLUMNS = "worker_id, name, address, phone, opening_balance, created_at, updated_at"


def _to_worker(row: dict) -> Worker:
    return Worker(
        worker_id=int(row["worker_id"]),
        name=row["name"],
        address=row.get("address"),
        phone=row.get("phone"),
        opening_balance=round_money(row.get("opening_balance")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE worker_id=%s", (int(worker_id),))
            row = fetchone(cur)
            return _to_worker(row) if row else None

    def get_by_phone(self, phone: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers WHERE phone=%s", (phone,))
            row = fetchone(cur)
            return _to_worker(row) if row else None

    def list_all(self) -> Sequence[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workers ORDER BY name, worker_id")
            return [_to_worker(r) for r in fetchall(cur)]

    def create_worker(
        self,
        *,
        name: str,
        address: Optional[str],
        phone: Optional[str],
        opening_balance: Decimal,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO workers(name, address, phone, opening_balance)
                VALUES(%s,%s,%s,%s)
                """,
                (name, address, phone, opening_balance),
            )
            return int(cur.lastrowid)

    def update_worker(
        self,
        *,
        worker_id: int,
        name: str,
        address: Optional[str],
        phone: Optional[str],
        opening_balance: Decimal,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE workers
                SET name=%s, address=%s, phone=%s, opening_balance=%s
                WHERE worker_id=%s
                """,
                (name, address, phone, opening_balance, int(worker_id)),
            )
            # rowcount is 0 when nothing changed, so confirm the row exists
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 FROM workers WHERE worker_id=%s", (int(worker_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, worker_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workers WHERE worker_id=%s", (int(worker_id),))
            return cur.rowcount > 0
