from __future__ import annotations

from typing import Optional, Sequence

from ..common.money import round_money
from ..common.validators import FormErrors, normalize_phone, optional_text, parse_amount, parse_id, require_non_empty
from ..core.constants import ZERO
from ..core.exceptions import ConstraintViolationError, NotFoundError
from ..core.logging_config import get_logger
from ..ledger.service import BalanceAuditor
from .model import Worker
from .repository import WorkerRepository

logger = get_logger("workers")


class WorkerService:
    """Use case: manage workers (create, edit, delete)."""

    def __init__(self, workers: WorkerRepository, *, auditor: Optional[BalanceAuditor] = None):
        self._workers = workers
        self._auditor = auditor

    def _validate(self, *, name, address, phone, opening_balance):
        form = FormErrors()
        name = form.check(require_non_empty, name, "name", label="Name")
        phone = form.check(normalize_phone, phone, "phone")
        opening = form.check(parse_amount, opening_balance, "opening_balance")
        form.raise_if_any()
        return name, optional_text(address), phone, round_money(opening if opening is not None else ZERO)

    def _ensure_phone_free(self, phone: Optional[str], *, worker_id: Optional[int] = None) -> None:
        if not phone:
            return
        other = self._workers.get_by_phone(phone)
        if other and other.worker_id != worker_id:
            raise ConstraintViolationError("A worker with this phone number already exists")

    def get_worker(self, worker_id) -> Worker:
        wid = parse_id(worker_id)
        worker = self._workers.get_by_id(wid) if wid else None
        if not worker:
            raise NotFoundError("Worker not found")
        return worker

    def list_workers(self) -> Sequence[Worker]:
        return self._workers.list_all()

    def create_worker(self, *, name: str, address: Optional[str] = None, phone: Optional[str] = None, opening_balance=None) -> int:
        name, address, phone, opening = self._validate(
            name=name, address=address, phone=phone, opening_balance=opening_balance
        )
        self._ensure_phone_free(phone)

        worker_id = self._workers.create_worker(name=name, address=address, phone=phone, opening_balance=opening)
        logger.info("worker %s created (%s), opening balance %s", worker_id, name, opening)
        return worker_id

    def update_worker(
        self,
        worker_id,
        *,
        name: str,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        opening_balance=None,
    ) -> Worker:
        current = self.get_worker(worker_id)
        name, address, phone, opening = self._validate(
            name=name, address=address, phone=phone, opening_balance=opening_balance
        )
        self._ensure_phone_free(phone, worker_id=current.worker_id)

        old_balance = None
        balance_changes = opening != current.opening_balance
        if balance_changes and self._auditor:
            old_balance = self._auditor.snapshot(current.worker_id)

        if not self._workers.update_worker(
            worker_id=current.worker_id, name=name, address=address, phone=phone, opening_balance=opening
        ):
            raise NotFoundError("Worker not found")
        logger.info("worker %s updated", current.worker_id)

        if balance_changes and self._auditor:
            self._auditor.record(current.worker_id, old_balance=old_balance, reason="opening balance updated")
        return self.get_worker(current.worker_id)

    def delete_worker(self, worker_id) -> None:
        """Destructive: the store cascades to the worker's attendance, payments and audit rows."""
        worker = self.get_worker(worker_id)
        if not self._workers.delete_by_id(worker.worker_id):
            raise NotFoundError("Worker not found")
        logger.info("worker %s (%s) deleted with attendance, payments and audit history", worker.worker_id, worker.name)
