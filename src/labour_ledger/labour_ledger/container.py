from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .categories.mysql_category_repository import MySQLCategoryRepository
from .categories.repository import CategoryRepository
from .categories.service import CategoryService
from .database.connection import DBConfig, DatabaseConnection
from .ledger.mysql_audit_repository import MySQLBalanceAuditRepository
from .ledger.repository import BalanceAuditRepository
from .ledger.service import BalanceAuditor, BalanceService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .reports.service import LedgerReportService
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository
from .workers.service import WorkerService


@dataclass(frozen=True)
class Container:
    workers_repo: WorkerRepository
    categories_repo: CategoryRepository
    attendance_repo: AttendanceRepository
    payments_repo: PaymentRepository
    audit_repo: BalanceAuditRepository

    balance_service: BalanceService
    worker_service: WorkerService
    category_service: CategoryService
    attendance_service: AttendanceService
    payment_service: PaymentService
    report_service: LedgerReportService

    conn: DatabaseConnection | None = None


def wire_services(
    *,
    workers_repo: WorkerRepository,
    categories_repo: CategoryRepository,
    attendance_repo: AttendanceRepository,
    payments_repo: PaymentRepository,
    audit_repo: BalanceAuditRepository,
    conn: DatabaseConnection | None = None,
) -> Container:
    """Build the services on top of any set of repositories (MySQL or in-memory)."""
    balance_service = BalanceService(workers_repo, attendance_repo, payments_repo)
    auditor = BalanceAuditor(balance_service, audit_repo)

    return Container(
        workers_repo=workers_repo,
        categories_repo=categories_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        audit_repo=audit_repo,
        balance_service=balance_service,
        worker_service=WorkerService(workers_repo, auditor=auditor),
        category_service=CategoryService(categories_repo),
        attendance_service=AttendanceService(attendance_repo, workers_repo, categories_repo, auditor=auditor),
        payment_service=PaymentService(payments_repo, workers_repo, balance_service, auditor=auditor),
        report_service=LedgerReportService(
            workers_repo, categories_repo, attendance_repo, payments_repo, balance_service
        ),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire_services(
        workers_repo=MySQLWorkerRepository(conn),
        categories_repo=MySQLCategoryRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        audit_repo=MySQLBalanceAuditRepository(conn),
        conn=conn,
    )
