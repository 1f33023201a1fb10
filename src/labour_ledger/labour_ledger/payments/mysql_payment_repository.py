from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import round_money, to_decimal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..ledger.filters import LedgerFilter
from .model import Payment
from .repository import PaymentRepository

_COLUMNS = "payment_id, worker_id, payment_date, amount, payment_mode, narration, created_at"


def _to_payment(r: dict) -> Payment:
    return Payment(
        payment_id=int(r["payment_id"]),
        worker_id=int(r["worker_id"]),
        payment_date=r["payment_date"],
        amount=round_money(to_decimal(r["amount"])),
        payment_mode=r["payment_mode"],
        narration=r.get("narration"),
        created_at=r.get("created_at"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payments WHERE payment_id=%s", (int(payment_id),))
            r = fetchone(cur)
            return _to_payment(r) if r else None

    def create_payment(
        self,
        *,
        worker_id: int,
        payment_date: date,
        amount: Decimal,
        payment_mode: str,
        narration: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payments(worker_id, payment_date, amount, payment_mode, narration)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(worker_id), payment_date, amount, payment_mode, narration),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, payment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payments WHERE payment_id=%s", (int(payment_id),))
            return cur.rowcount > 0

    def list_filtered(self, ledger_filter: LedgerFilter) -> Sequence[Payment]:
        clauses, params = ledger_filter.sql_clauses(worker_col="worker_id", date_col="payment_date")
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payments
                {where}
                ORDER BY payment_date ASC, payment_id ASC
                """,
                tuple(params),
            )
            return [_to_payment(r) for r in fetchall(cur)]

    def sum_payments(self, worker_id: int) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(SUM(amount), 0) AS total
                FROM payments
                WHERE worker_id=%s AND amount IS NOT NULL AND amount > 0
                """,
                (int(worker_id),),
            )
            r = fetchone(cur)
            return round_money(to_decimal(r["total"]) if r else None)
