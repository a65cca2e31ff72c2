from __future__ import annotations

import logging
from typing import Callable, Optional

from ..activity.model import ActivityLog
from ..activity.repository import ActivityLogRepository
from ..activity.service import ActivityLogService
from ..common.datetime_utils import now_local
from ..core.constants import BACKUP_VERSION
from ..core.exceptions import AuthorizationError, ValidationError
from ..debt.model import Transaction
from ..debt.repository import TransactionRepository
from ..payroll.model import PayrollBatch
from ..payroll.repository import PayrollBatchRepository
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from ..timesheet.model import TimeRecord
from ..timesheet.repository import TimeRecordRepository
from ..users.model import Actor
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .repository import SnapshotStorage

logger = logging.getLogger(__name__)

# payload key -> parser; order is the restore order
_SECTIONS = (
    ("projects", Project.from_dict),
    ("workers", Worker.from_dict),
    ("records", TimeRecord.from_dict),
    ("transactions", Transaction.from_dict),
    ("batches", PayrollBatch.from_dict),
    ("logs", ActivityLog.from_dict),
)


class BackupService:
    """Sao lưu / phục hồi toàn bộ dữ liệu dưới dạng một file JSON."""

    def __init__(
        self,
        *,
        workers: WorkerRepository,
        projects: ProjectRepository,
        records: TimeRecordRepository,
        transactions: TransactionRepository,
        batches: PayrollBatchRepository,
        logs: ActivityLogRepository,
        storage: SnapshotStorage,
        activity: ActivityLogService,
        clock: Optional[Callable] = None,
    ):
        self._workers = workers
        self._projects = projects
        self._records = records
        self._transactions = transactions
        self._batches = batches
        self._logs = logs
        self._storage = storage
        self._activity = activity
        self._clock = clock or now_local

    def export_snapshot(self) -> dict:
        return {
            "workers": [w.to_dict() for w in self._workers.list_all()],
            "projects": [p.to_dict() for p in self._projects.list_all()],
            "records": [r.to_dict() for r in self._records.list_range()],
            "transactions": [t.to_dict() for t in self._transactions.list_all()],
            "batches": [b.to_dict() for b in self._batches.list_all()],
            "logs": [log.to_dict() for log in self._logs.list_all()],
            "version": BACKUP_VERSION,
            "exportDate": self._clock().isoformat(timespec="seconds"),
        }

    def _parse(self, data) -> dict[str, list]:
        if not isinstance(data, dict):
            raise ValidationError("File sao lưu không hợp lệ")

        parsed: dict[str, list] = {}
        for key, parser in _SECTIONS:
            raw = data.get(key) or []
            if not isinstance(raw, list):
                raise ValidationError(f"Mục '{key}' trong file sao lưu không hợp lệ")
            try:
                parsed[key] = [parser(item) for item in raw]
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise ValidationError(f"Dữ liệu '{key}' trong file sao lưu bị lỗi: {e}")
        return parsed

    def restore(self, data, actor: Actor) -> dict:
        """Thay toàn bộ dữ liệu bằng nội dung file sao lưu (chỉ admin).

        Mục nào không có trong file được coi là rỗng.
        """
        if not actor.is_admin:
            raise AuthorizationError("Chỉ quản trị viên được phục hồi dữ liệu")

        parsed = self._parse(data)

        self._projects.replace_all(parsed["projects"])
        self._workers.replace_all(parsed["workers"])
        self._records.replace_all(parsed["records"])
        self._transactions.replace_all(parsed["transactions"])
        self._batches.replace_all(parsed["batches"])
        self._logs.replace_all(parsed["logs"])
        self._storage.save(data)

        counts = {key: len(items) for key, items in parsed.items()}
        logger.warning("Data restored by %s: %s", actor.user_id, counts)
        self._activity.record(actor, "Phục hồi dữ liệu", "Khôi phục dữ liệu từ file backup")
        return counts

    def save_snapshot(self, data) -> None:
        if not isinstance(data, dict):
            raise ValidationError("Dữ liệu lưu trữ không hợp lệ")
        self._storage.save(data)

    def latest_snapshot(self) -> Optional[dict]:
        return self._storage.latest()
