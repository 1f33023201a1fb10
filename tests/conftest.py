from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from src.labour_ledger.labour_ledger.attendance.model import AttendanceRecord
from src.labour_ledger.labour_ledger.categories.model import Category, Subcategory
from src.labour_ledger.labour_ledger.container import wire_services
from src.labour_ledger.labour_ledger.core.enums import AttendanceStatus
from src.labour_ledger.labour_ledger.core.exceptions import ConstraintViolationError
from src.labour_ledger.labour_ledger.ledger.balance import countable_payment, sum_amounts
from src.labour_ledger.labour_ledger.ledger.model import BalanceAudit
from src.labour_ledger.labour_ledger.payments.model import Payment
from src.labour_ledger.labour_ledger.workers.model import Worker


class InMemoryStore:
    """Tables shared by the fake repositories so deletes can cascade like MySQL."""

    def __init__(self):
        self.workers: dict[int, Worker] = {}
        self.categories: dict[int, Category] = {}
        self.subcategories: dict[int, Subcategory] = {}
        self.attendance: dict[int, AttendanceRecord] = {}
        self.payments: dict[int, Payment] = {}
        self.audit: dict[int, BalanceAudit] = {}
        self._next_id = 0

    def next_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def audit_for(self, worker_id: int) -> list[BalanceAudit]:
        return [a for a in self.audit.values() if a.worker_id == worker_id]


class InMemoryWorkers:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        return self._s.workers.get(worker_id)

    def get_by_phone(self, phone: str) -> Optional[Worker]:
        return next((w for w in self._s.workers.values() if w.phone == phone), None)

    def list_all(self):
        return sorted(self._s.workers.values(), key=lambda w: (w.name, w.worker_id))

    def create_worker(self, *, name, address, phone, opening_balance) -> int:
        if phone and self.get_by_phone(phone):
            raise ConstraintViolationError("A worker with this phone number already exists")
        wid = self._s.next_id()
        self._s.workers[wid] = Worker(
            worker_id=wid, name=name, address=address, phone=phone, opening_balance=Decimal(opening_balance)
        )
        return wid

    def update_worker(self, *, worker_id, name, address, phone, opening_balance) -> bool:
        current = self._s.workers.get(worker_id)
        if not current:
            return False
        self._s.workers[worker_id] = replace(
            current, name=name, address=address, phone=phone, opening_balance=Decimal(opening_balance)
        )
        return True

    def delete_by_id(self, worker_id: int) -> bool:
        if self._s.workers.pop(worker_id, None) is None:
            return False
        for table in (self._s.attendance, self._s.payments, self._s.audit):
            for key in [k for k, row in table.items() if row.worker_id == worker_id]:
                del table[key]
        return True


class InMemoryCategories:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def list_categories(self):
        return sorted(self._s.categories.values(), key=lambda c: c.name)

    def get_category(self, category_id: int):
        return self._s.categories.get(category_id)

    def get_category_by_name(self, name: str):
        return next((c for c in self._s.categories.values() if c.name == name), None)

    def create_category(self, *, name: str) -> int:
        if self.get_category_by_name(name):
            raise ConstraintViolationError("A category with this name already exists")
        cid = self._s.next_id()
        self._s.categories[cid] = Category(category_id=cid, name=name)
        return cid

    def delete_category(self, category_id: int) -> bool:
        if category_id not in self._s.categories:
            return False
        if any(a.category_id == category_id for a in self._s.attendance.values()):
            raise ConstraintViolationError("Record is still referenced by attendance entries")
        del self._s.categories[category_id]
        for key in [k for k, s in self._s.subcategories.items() if s.category_id == category_id]:
            del self._s.subcategories[key]
        return True

    def list_subcategories(self, category_id: Optional[int] = None):
        subs = [s for s in self._s.subcategories.values() if category_id is None or s.category_id == category_id]
        return sorted(subs, key=lambda s: s.name)

    def get_subcategory(self, subcategory_id: int):
        return self._s.subcategories.get(subcategory_id)

    def get_subcategory_by_name(self, category_id: int, name: str):
        return next(
            (s for s in self._s.subcategories.values() if s.category_id == category_id and s.name == name),
            None,
        )

    def create_subcategory(self, *, category_id: int, name: str) -> int:
        if self.get_subcategory_by_name(category_id, name):
            raise ConstraintViolationError("This subcategory already exists in the category")
        sid = self._s.next_id()
        self._s.subcategories[sid] = Subcategory(subcategory_id=sid, category_id=category_id, name=name)
        return sid


class InMemoryAttendance:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, attendance_id: int):
        return self._s.attendance.get(attendance_id)

    def get_for_worker_and_date(self, worker_id: int, work_date: date):
        return next(
            (a for a in self._s.attendance.values() if a.worker_id == worker_id and a.work_date == work_date),
            None,
        )

    def create_record(self, *, worker_id, work_date, status, category_id, subcategory_id, amount, narration=None) -> int:
        if self.get_for_worker_and_date(worker_id, work_date):
            raise ConstraintViolationError("Attendance for this worker on this date already exists")
        aid = self._s.next_id()
        self._s.attendance[aid] = AttendanceRecord(
            attendance_id=aid,
            worker_id=worker_id,
            work_date=work_date,
            status=AttendanceStatus(status),
            category_id=category_id,
            subcategory_id=subcategory_id,
            amount=amount,
            narration=narration,
        )
        return aid

    def delete_by_id(self, attendance_id: int) -> bool:
        return self._s.attendance.pop(attendance_id, None) is not None

    def list_filtered(self, ledger_filter):
        rows = [a for a in self._s.attendance.values() if ledger_filter.contains(a.worker_id, a.work_date)]
        return sorted(rows, key=lambda a: (a.work_date, a.attendance_id))

    def sum_eligible_wages(self, worker_id: int) -> Decimal:
        return sum_amounts(a.wage for a in self._s.attendance.values() if a.worker_id == worker_id)


class InMemoryPayments:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, payment_id: int):
        return self._s.payments.get(payment_id)

    def create_payment(self, *, worker_id, payment_date, amount, payment_mode, narration=None) -> int:
        pid = self._s.next_id()
        self._s.payments[pid] = Payment(
            payment_id=pid,
            worker_id=worker_id,
            payment_date=payment_date,
            amount=amount,
            payment_mode=payment_mode,
            narration=narration,
        )
        return pid

    def delete_by_id(self, payment_id: int) -> bool:
        return self._s.payments.pop(payment_id, None) is not None

    def list_filtered(self, ledger_filter):
        rows = [p for p in self._s.payments.values() if ledger_filter.contains(p.worker_id, p.payment_date)]
        return sorted(rows, key=lambda p: (p.payment_date, p.payment_id))

    def sum_payments(self, worker_id: int) -> Decimal:
        return sum_amounts(countable_payment(p.amount) for p in self._s.payments.values() if p.worker_id == worker_id)


class InMemoryAudit:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def append(self, *, worker_id, old_balance, new_balance, change_reason) -> int:
        audit_id = self._s.next_id()
        self._s.audit[audit_id] = BalanceAudit(
            audit_id=audit_id,
            worker_id=worker_id,
            old_balance=old_balance,
            new_balance=new_balance,
            change_reason=change_reason,
        )
        return audit_id


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def container(store):
    return wire_services(
        workers_repo=InMemoryWorkers(store),
        categories_repo=InMemoryCategories(store),
        attendance_repo=InMemoryAttendance(store),
        payments_repo=InMemoryPayments(store),
        audit_repo=InMemoryAudit(store),
    )


@pytest.fixture
def work(container):
    """One category with one subcategory: (category_id, subcategory_id)."""
    cid = container.category_service.create_category(name="Coffee Estate")
    sid = container.category_service.create_subcategory(category_id=cid, name="Picking")
    return cid, sid


@pytest.fixture
def ravi(container) -> int:
    """Worker with an opening balance of 100."""
    return container.worker_service.create_worker(name="Ravi", phone="98765 43210", opening_balance="100")


@pytest.fixture
def day1() -> date:
    return date(2026, 3, 1)


@pytest.fixture
def day2() -> date:
    return date(2026, 3, 2)
