from __future__ import annotations

import logging
from typing import Optional

from ..common.ids import new_id
from ..common.validators import optional_rate, require_non_empty, require_non_negative
from ..core.exceptions import NotFoundError
from ..projects.repository import ProjectRepository
from .model import Worker
from .repository import WorkerRepository

logger = logging.getLogger(__name__)


def _clean(value) -> Optional[str]:
    value = (value or "").strip() if isinstance(value, str) else value
    return value or None


class WorkerService:
    def __init__(self, workers: WorkerRepository, projects: ProjectRepository):
        self._workers = workers
        self._projects = projects

    def list_workers(self, *, search: Optional[str] = None, project_id: Optional[str] = None) -> list[Worker]:
        workers = list(self._workers.list_all())
        if project_id:
            workers = [w for w in workers if w.current_project_id == project_id]
        if search:
            needle = search.strip().lower()
            workers = [w for w in workers if needle in w.name.lower()]
        return workers

    def get(self, worker_id: str) -> Worker:
        worker = self._workers.get_by_id(worker_id)
        if not worker:
            raise NotFoundError("Công nhật không tồn tại")
        return worker

    def _build(self, worker_id: str, fields: dict) -> Worker:
        project_id = _clean(fields.get("current_project_id"))
        if project_id and not self._projects.get_by_id(project_id):
            raise NotFoundError("Công trình không tồn tại")

        return Worker(
            worker_id=worker_id,
            name=require_non_empty(fields.get("name", ""), "Tên công nhật"),
            role=_clean(fields.get("role")) or "Công nhật",
            daily_rate=require_non_negative(fields.get("daily_rate"), "Lương ngày"),
            rate_1_cong=optional_rate(fields.get("rate_1_cong"), "Giá 1 công"),
            rate_2_cong=optional_rate(fields.get("rate_2_cong"), "Giá 2 công"),
            current_project_id=project_id,
            identity_card_number=_clean(fields.get("identity_card_number")),
            phone=_clean(fields.get("phone")),
            bank_account=_clean(fields.get("bank_account")),
            bank_name=_clean(fields.get("bank_name")),
        )

    def create(self, **fields) -> Worker:
        worker = self._build(new_id(), fields)
        self._workers.save(worker)
        logger.info("Worker created: %s (%s)", worker.name, worker.worker_id)
        return worker

    def update(self, worker_id: str, **fields) -> Worker:
        self.get(worker_id)
        worker = self._build(worker_id, fields)
        self._workers.save(worker)
        logger.info("Worker updated: %s (%s)", worker.name, worker.worker_id)
        return worker

    def delete(self, worker_id: str) -> None:
        if not self._workers.delete(worker_id):
            raise NotFoundError("Công nhật không tồn tại")
        logger.info("Worker deleted: %s", worker_id)
