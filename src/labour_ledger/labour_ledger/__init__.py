"""Labour Ledger package.

Organized by feature modules (workers, categories, attendance, payments,
ledger, reports) with a thin Flask controller layer over service and
repository layers.
"""
