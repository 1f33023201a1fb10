"""Seed demo workers, categories, attendance and payments.

Goes through the service layer so every row passes the same validation
and balance-audit path as the HTTP API. Skips seeding when workers exist.
"""

from __future__ import annotations

import importlib
import sys
from datetime import timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.labour_ledger.labour_ledger.common.datetime_utils import today
from src.labour_ledger.labour_ledger.container import build_container
from src.labour_ledger.labour_ledger.core.logging_config import configure_logging
from src.labour_ledger.labour_ledger.database.bootstrap import apply_schema

DEMO_WORKERS = [
    {"name": "Ravi Kumar", "phone": "9876543210", "address": "Hulimane village", "opening_balance": "500"},
    {"name": "Lakshmi Devi", "phone": "9876501234", "address": "Hulimane village", "opening_balance": "0"},
    {"name": "Manjunath", "phone": "9123456780", "address": "Sakleshpur", "opening_balance": "250"},
]

DEMO_CATEGORIES = {
    "Coffee Estate": ["Picking", "Pruning", "Drying"],
    "Pepper": ["Harvesting", "Cleaning"],
    "General": ["Weeding", "Fencing"],
}


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    c = build_container(db_config=db_config)

    if c.worker_service.list_workers():
        print("SKIP: workers already present, nothing seeded")
        return

    worker_ids = [c.worker_service.create_worker(**w) for w in DEMO_WORKERS]

    subcategories: list[tuple[int, int]] = []
    for category, subs in DEMO_CATEGORIES.items():
        cid = c.category_service.create_category(name=category)
        for sub in subs:
            subcategories.append((cid, c.category_service.create_subcategory(category_id=cid, name=sub)))

    start = today() - timedelta(days=6)
    for offset in range(6):
        day = start + timedelta(days=offset)
        for i, wid in enumerate(worker_ids):
            cid, sid = subcategories[(offset + i) % len(subcategories)]
            if (offset + i) % 5 == 4:
                c.attendance_service.record_attendance(worker_id=wid, work_date=day, status="absent")
                continue
            status = "halfday" if (offset + i) % 4 == 3 else "present"
            c.attendance_service.record_attendance(
                worker_id=wid,
                work_date=day,
                status=status,
                category_id=cid,
                subcategory_id=sid,
                amount="250" if status == "halfday" else "500",
            )

    for wid in worker_ids:
        c.payment_service.record_payment(
            worker_id=wid,
            amount="1000",
            payment_date=today(),
            payment_mode="Cash",
            narration="Weekly advance",
            confirmed=True,
        )

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(workers={len(worker_ids)}, subcategories={len(subcategories)})"
    )


if __name__ == "__main__":
    main()
