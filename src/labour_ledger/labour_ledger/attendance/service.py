from __future__ import annotations

from typing import Optional, Sequence

from ..categories.repository import CategoryRepository
from ..common.validators import (
    FormErrors,
    optional_text,
    parse_id,
    require_date,
    require_id,
    require_positive_amount,
)
from ..core.constants import ZERO
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConstraintViolationError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..ledger.filters import LedgerFilter
from ..ledger.service import BalanceAuditor
from ..workers.repository import WorkerRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = get_logger("attendance")


class AttendanceService:
    """Use case: record a worker's day (status, work done, wage)."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        workers: WorkerRepository,
        categories: CategoryRepository,
        *,
        auditor: Optional[BalanceAuditor] = None,
    ):
        self._attendance = attendance
        self._workers = workers
        self._categories = categories
        self._auditor = auditor

    @staticmethod
    def _parse_status(value, form: FormErrors) -> AttendanceStatus:
        try:
            return AttendanceStatus((value or AttendanceStatus.PRESENT.value).strip().lower())
        except (ValueError, AttributeError):
            form.add("status", "Status must be present, absent or halfday")
            return AttendanceStatus.PRESENT

    def record_attendance(
        self,
        *,
        worker_id,
        work_date,
        status=AttendanceStatus.PRESENT.value,
        category_id=None,
        subcategory_id=None,
        amount=None,
        narration: Optional[str] = None,
    ) -> int:
        form = FormErrors()
        wid = form.check(require_id, worker_id, "worker_id", label="Worker")
        day = form.check(require_date, work_date, "date")
        st = self._parse_status(status.value if isinstance(status, AttendanceStatus) else status, form)

        if st == AttendanceStatus.ABSENT:
            # absent days carry no work and no wage
            cid, sid, amt = None, None, ZERO
        else:
            cid = form.check(require_id, category_id, "category_id", label="Category")
            sid = form.check(require_id, subcategory_id, "subcategory_id", label="Subcategory")
            amt = form.check(require_positive_amount, amount, "amount")
        form.raise_if_any()

        if not self._workers.get_by_id(wid):
            raise ValidationError("Worker not found", {"worker_id": "Worker not found"})

        if st != AttendanceStatus.ABSENT:
            if not self._categories.get_category(cid):
                raise ValidationError("Category not found", {"category_id": "Category not found"})
            sub = self._categories.get_subcategory(sid)
            if not sub or sub.category_id != cid:
                raise ValidationError(
                    "Subcategory does not belong to the selected category",
                    {"subcategory_id": "Subcategory does not belong to the selected category"},
                )

        if self._attendance.get_for_worker_and_date(wid, day):
            logger.warning("duplicate attendance rejected: worker %s on %s", wid, day)
            raise ConstraintViolationError("Attendance for this worker on this date already exists")

        old_balance = self._auditor.snapshot(wid) if self._auditor else None
        attendance_id = self._attendance.create_record(
            worker_id=wid,
            work_date=day,
            status=st,
            category_id=cid,
            subcategory_id=sid,
            amount=amt,
            narration=optional_text(narration),
        )
        logger.info("attendance %s recorded: worker %s, %s, %s, amount %s", attendance_id, wid, day, st.value, amt)

        if self._auditor:
            self._auditor.record(wid, old_balance=old_balance, reason=f"attendance {day.isoformat()}")
        return attendance_id

    def list_records(self, ledger_filter: LedgerFilter) -> Sequence[AttendanceRecord]:
        return self._attendance.list_filtered(ledger_filter)

    def list_view(self, ledger_filter: LedgerFilter) -> list[dict]:
        """Records with worker/category/subcategory names resolved for display."""
        records = self._attendance.list_filtered(ledger_filter)
        workers = {w.worker_id: w.name for w in self._workers.list_all()}
        categories = {c.category_id: c.name for c in self._categories.list_categories()}
        subcategories = {s.subcategory_id: s.name for s in self._categories.list_subcategories()}

        return [
            {
                "attendance_id": r.attendance_id,
                "worker_id": r.worker_id,
                "worker_name": workers.get(r.worker_id, ""),
                "date": r.work_date.isoformat(),
                "status": r.status.value,
                "category": categories.get(r.category_id, "") if r.category_id else "",
                "subcategory": subcategories.get(r.subcategory_id, "") if r.subcategory_id else "",
                "amount": r.amount,
                "wage": r.wage,
                "narration": r.narration or "",
            }
            for r in records
        ]

    def delete_record(self, attendance_id) -> None:
        aid = parse_id(attendance_id)
        record = self._attendance.get_by_id(aid) if aid else None
        if not record:
            raise NotFoundError("Attendance record not found")

        old_balance = self._auditor.snapshot(record.worker_id) if self._auditor else None
        if not self._attendance.delete_by_id(record.attendance_id):
            raise NotFoundError("Attendance record not found")
        logger.info("attendance %s deleted (worker %s, %s)", record.attendance_id, record.worker_id, record.work_date)

        if self._auditor:
            self._auditor.record(
                record.worker_id,
                old_balance=old_balance,
                reason=f"attendance {record.work_date.isoformat()} deleted",
            )
