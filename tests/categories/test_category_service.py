from __future__ import annotations

import pytest

from src.labour_ledger.labour_ledger.core.exceptions import ConstraintViolationError, NotFoundError, ValidationError


def test_list_with_subcategories_groups_by_category(container, work):
    cid, sid = work
    other = container.category_service.create_category(name="Pepper")
    container.category_service.create_subcategory(category_id=other, name="Harvesting")
    container.category_service.create_subcategory(category_id=cid, name="Drying")

    listed = {c.name: [s.name for s in c.subcategories] for c in container.category_service.list_with_subcategories()}

    assert listed == {"Coffee Estate": ["Drying", "Picking"], "Pepper": ["Harvesting"]}


def test_duplicate_names_are_rejected(container, work):
    cid, _ = work
    with pytest.raises(ConstraintViolationError):
        container.category_service.create_category(name="Coffee Estate")
    with pytest.raises(ConstraintViolationError):
        container.category_service.create_subcategory(category_id=cid, name="Picking")


def test_same_subcategory_name_allowed_in_another_category(container, work):
    other = container.category_service.create_category(name="Pepper")
    assert container.category_service.create_subcategory(category_id=other, name="Picking")


def test_subcategory_needs_existing_category_and_name(container):
    with pytest.raises(ValidationError):
        container.category_service.create_subcategory(category_id=42, name="Picking")
    with pytest.raises(ValidationError):
        container.category_service.create_category(name="   ")


def test_delete_category_removes_subcategories(container, store, work):
    cid, sid = work
    container.category_service.delete_category(cid)

    assert cid not in store.categories
    assert sid not in store.subcategories
    with pytest.raises(NotFoundError):
        container.category_service.delete_category(cid)


def test_delete_category_in_use_is_refused(container, ravi, work, day1):
    cid, sid = work
    container.attendance_service.record_attendance(
        worker_id=ravi, work_date=day1, category_id=cid, subcategory_id=sid, amount="50"
    )
    with pytest.raises(ConstraintViolationError):
        container.category_service.delete_category(cid)
