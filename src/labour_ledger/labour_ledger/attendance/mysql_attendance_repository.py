from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import round_money, to_decimal
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..ledger.filters import LedgerFilter
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, worker_id, work_date, status, category_id, subcategory_id, amount, narration, created_at"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        worker_id=int(r["worker_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        category_id=r.get("category_id"),
        subcategory_id=r.get("subcategory_id"),
        amount=to_decimal(r.get("amount")),
        narration=r.get("narration"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_worker_and_date(self, worker_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE worker_id=%s AND work_date=%s
                """,
                (int(worker_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_record(
        self,
        *,
        worker_id: int,
        work_date: date,
        status: AttendanceStatus,
        category_id: Optional[int],
        subcategory_id: Optional[int],
        amount: Optional[Decimal],
        narration: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(worker_id, work_date, status, category_id, subcategory_id, amount, narration)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(worker_id), work_date, status.value, category_id, subcategory_id, amount, narration),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0

    def list_filtered(self, ledger_filter: LedgerFilter) -> Sequence[AttendanceRecord]:
        clauses, params = ledger_filter.sql_clauses(worker_col="worker_id", date_col="work_date")
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                {where}
                ORDER BY work_date ASC, attendance_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def sum_eligible_wages(self, worker_id: int) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(SUM(amount), 0) AS total
                FROM attendance_records
                WHERE worker_id=%s
                  AND status IN ('present', 'halfday')
                  AND amount IS NOT NULL
                  AND amount > 0
                """,
                (int(worker_id),),
            )
            r = fetchone(cur)
            return round_money(to_decimal(r["total"]) if r else None)
