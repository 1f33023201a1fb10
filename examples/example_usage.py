"""Example: use the service layer directly (no Flask).

Controllers stay thin; the ledger rules live in the services.
"""

import importlib

from config import get_settings_module

from src.labour_ledger.labour_ledger.container import build_container
from src.labour_ledger.labour_ledger.ledger.filters import LedgerFilter


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for worker, balance in container.balance_service.balances_for_all():
        print(f"{worker.name:<20} {balance:>12}")

    for row in container.report_service.build_detailed_report(LedgerFilter()):
        print(row.date, row.worker_name, row.wage_amount, row.payment_amount, row.running_balance)


if __name__ == "__main__":
    main()
