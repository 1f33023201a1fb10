from __future__ import annotations

from decimal import Decimal

import pytest

from src.labour_ledger.labour_ledger.core.exceptions import ConstraintViolationError, NotFoundError, ValidationError


def test_create_worker_normalizes_phone_and_defaults_opening_balance(container):
    wid = container.worker_service.create_worker(name="  Lakshmi ", phone="98765-01234")

    worker = container.worker_service.get_worker(wid)
    assert worker.name == "Lakshmi"
    assert worker.phone == "9876501234"
    assert worker.opening_balance == Decimal("0.00")


def test_create_worker_collects_every_field_error(container):
    with pytest.raises(ValidationError) as ei:
        container.worker_service.create_worker(name="", phone="12345", opening_balance="abc")

    assert set(ei.value.field_errors) == {"name", "phone", "opening_balance"}
    assert ei.value.field_errors["phone"] == "Phone number must be 10 digits"


def test_duplicate_phone_is_rejected(container, ravi):
    with pytest.raises(ConstraintViolationError):
        container.worker_service.create_worker(name="Other", phone="9876543210")


def test_update_keeps_own_phone_and_audits_opening_balance_change(container, store, ravi):
    worker = container.worker_service.update_worker(
        ravi, name="Ravi K", phone="9876543210", opening_balance="150.005"
    )

    assert worker.name == "Ravi K"
    assert worker.opening_balance == Decimal("150.01")
    audit = store.audit_for(ravi)
    assert len(audit) == 1
    assert audit[0].old_balance == Decimal("100.00")
    assert audit[0].new_balance == Decimal("150.01")
    assert audit[0].change_reason == "opening balance updated"


def test_update_without_balance_change_writes_no_audit(container, store, ravi):
    container.worker_service.update_worker(ravi, name="Ravi", address="Hulimane", phone="9876543210", opening_balance="100")
    assert store.audit_for(ravi) == []


def test_get_unknown_worker_raises_not_found(container):
    with pytest.raises(NotFoundError):
        container.worker_service.get_worker(999)
    with pytest.raises(NotFoundError):
        container.worker_service.get_worker("abc")


def test_delete_worker_cascades_to_ledger_rows_of_that_worker_only(container, store, ravi, work, day1):
    cid, sid = work
    other = container.worker_service.create_worker(name="Manju", opening_balance="0")
    for wid in (ravi, other):
        container.attendance_service.record_attendance(
            worker_id=wid, work_date=day1, category_id=cid, subcategory_id=sid, amount="50"
        )
        container.payment_service.record_payment(
            worker_id=wid, amount="10", payment_date=day1, payment_mode="Cash"
        )

    container.worker_service.delete_worker(ravi)

    assert ravi not in store.workers
    assert [a.worker_id for a in store.attendance.values()] == [other]
    assert [p.worker_id for p in store.payments.values()] == [other]
    assert store.audit_for(ravi) == []
    assert store.audit_for(other)
