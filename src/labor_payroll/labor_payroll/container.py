from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .activity.mysql_activity_repository import MySQLActivityLogRepository
from .activity.repository import ActivityLogRepository
from .activity.service import ActivityLogService
from .backup.mysql_snapshot_storage import MySQLSnapshotStorage
from .backup.repository import SnapshotStorage
from .backup.service import BackupService
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .debt.mysql_transaction_repository import MySQLTransactionRepository
from .debt.repository import TransactionRepository
from .debt.service import DebtService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_batch_repository import MySQLPayrollBatchRepository
from .payroll.repository import PayrollBatchRepository
from .payroll.service import BatchService, PayrollService
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .timesheet.mysql_record_repository import MySQLTimeRecordRepository
from .timesheet.repository import TimeRecordRepository
from .timesheet.service import TimesheetService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService
from .workbook.mysql_workbook_repository import MySQLPersonnelRepository, MySQLWorkbookRepository
from .workbook.repository import PersonnelRepository, WorkbookRepository
from .workbook.service import WorkbookService
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository
from .workers.service import WorkerService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    workers_repo: WorkerRepository
    projects_repo: ProjectRepository
    records_repo: TimeRecordRepository
    transactions_repo: TransactionRepository
    batches_repo: PayrollBatchRepository
    logs_repo: ActivityLogRepository
    storage_repo: SnapshotStorage
    workbooks_repo: WorkbookRepository
    personnel_repo: PersonnelRepository

    auth_service: AuthService
    activity_service: ActivityLogService
    worker_service: WorkerService
    project_service: ProjectService
    timesheet_service: TimesheetService
    debt_service: DebtService
    payroll_service: PayrollService
    batch_service: BatchService
    dashboard_service: DashboardService
    backup_service: BackupService
    workbook_service: WorkbookService


def wire(
    *,
    conn: Optional[DatabaseConnection],
    users_repo: UserRepository,
    workers_repo: WorkerRepository,
    projects_repo: ProjectRepository,
    records_repo: TimeRecordRepository,
    transactions_repo: TransactionRepository,
    batches_repo: PayrollBatchRepository,
    logs_repo: ActivityLogRepository,
    storage_repo: SnapshotStorage,
    workbooks_repo: WorkbookRepository,
    personnel_repo: PersonnelRepository,
) -> Container:
    """Build services on top of the given repositories (MySQL or in-memory)."""
    calculator = StandardPayrollCalculator()
    activity_service = ActivityLogService(logs_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        workers_repo=workers_repo,
        projects_repo=projects_repo,
        records_repo=records_repo,
        transactions_repo=transactions_repo,
        batches_repo=batches_repo,
        logs_repo=logs_repo,
        storage_repo=storage_repo,
        workbooks_repo=workbooks_repo,
        personnel_repo=personnel_repo,
        auth_service=AuthService(users_repo),
        activity_service=activity_service,
        worker_service=WorkerService(workers_repo, projects_repo),
        project_service=ProjectService(projects_repo),
        timesheet_service=TimesheetService(records_repo, workers_repo, projects_repo),
        debt_service=DebtService(transactions_repo, records_repo, workers_repo, calculator=calculator),
        payroll_service=PayrollService(records_repo, workers_repo, projects_repo, batches_repo, calculator=calculator),
        batch_service=BatchService(batches_repo, workers_repo, projects_repo),
        dashboard_service=DashboardService(workers_repo, projects_repo, records_repo),
        backup_service=BackupService(
            workers=workers_repo,
            projects=projects_repo,
            records=records_repo,
            transactions=transactions_repo,
            batches=batches_repo,
            logs=logs_repo,
            storage=storage_repo,
            activity=activity_service,
        ),
        workbook_service=WorkbookService(workbooks_repo, personnel_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        workers_repo=MySQLWorkerRepository(conn),
        projects_repo=MySQLProjectRepository(conn),
        records_repo=MySQLTimeRecordRepository(conn),
        transactions_repo=MySQLTransactionRepository(conn),
        batches_repo=MySQLPayrollBatchRepository(conn),
        logs_repo=MySQLActivityLogRepository(conn),
        storage_repo=MySQLSnapshotStorage(conn),
        workbooks_repo=MySQLWorkbookRepository(conn),
        personnel_repo=MySQLPersonnelRepository(conn),
    )
