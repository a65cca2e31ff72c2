from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import iter_dates
from ..common.ids import new_id
from ..common.validators import require_non_negative, require_shifts
from ..core.exceptions import NotFoundError, ValidationError
from ..projects.repository import ProjectRepository
from ..workers.rates import recommended_rate
from ..workers.repository import WorkerRepository
from .model import TimeRecord
from .repository import TimeRecordRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceEntry:
    """Một dòng trên form chấm công: công nhật được chọn, số công, đơn giá."""

    worker_id: str
    shifts: float = 1
    rate: Optional[int] = None
    note: Optional[str] = None


class TimesheetService:
    def __init__(self, records: TimeRecordRepository, workers: WorkerRepository, projects: ProjectRepository):
        self._records = records
        self._workers = workers
        self._projects = projects

    def _dates(self, work_date: Optional[date], start_date: Optional[date], end_date: Optional[date]) -> list[date]:
        if start_date or end_date:
            if not (start_date and end_date):
                raise ValidationError("Vui lòng chọn đủ ngày bắt đầu và kết thúc")
            return list(iter_dates(start_date, end_date))
        if not work_date:
            raise ValidationError("Vui lòng chọn ngày chấm công")
        return [work_date]

    def record_attendance(
        self,
        *,
        project_id: str,
        entries: Sequence[AttendanceEntry],
        work_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TimeRecord]:
        """Chấm công cho các công nhật được chọn, một bản ghi / người / ngày.

        Chế độ nhiều ngày (start_date..end_date) tạo bản ghi cho mọi ngày trong khoảng.
        """
        project = self._projects.get_by_id(project_id)
        if not project:
            raise NotFoundError("Công trình không tồn tại")

        if not entries:
            raise ValidationError("Vui lòng chọn ít nhất một công nhật để chấm công.")

        dates = self._dates(work_date, start_date, end_date)

        seen: set[str] = set()
        prepared: list[tuple[str, float, int, Optional[str]]] = []
        for entry in entries:
            if entry.worker_id in seen:
                raise ValidationError("Một công nhật bị chọn hai lần")
            seen.add(entry.worker_id)

            worker = self._workers.get_by_id(entry.worker_id)
            if not worker:
                raise NotFoundError(f"Công nhật không tồn tại: {entry.worker_id}")

            shifts = require_shifts(entry.shifts)
            if entry.rate is None or entry.rate == "":
                rate = recommended_rate(worker, shifts, project)
            else:
                rate = require_non_negative(entry.rate, "Đơn giá")
            note = str(entry.note or "").strip() or None
            prepared.append((worker.worker_id, shifts, rate, note))

        records = [
            TimeRecord(
                record_id=new_id(),
                worker_id=worker_id,
                project_id=project.project_id,
                work_date=day,
                shifts=shifts,
                rate_used=rate,
                note=note,
            )
            for day in dates
            for worker_id, shifts, rate, note in prepared
        ]

        self._records.add_many(records)
        logger.info(
            "Attendance recorded: %d records (%d workers x %d days) for project %s",
            len(records),
            len(prepared),
            len(dates),
            project.project_id,
        )
        return records

    def get(self, record_id: str) -> TimeRecord:
        record = self._records.get_by_id(record_id)
        if not record:
            raise NotFoundError("Bản ghi chấm công không tồn tại")
        return record

    def update_record(self, record_id: str, *, shifts=None, rate_used=None, note: Optional[str] = None) -> TimeRecord:
        """Sửa số công / đơn giá / ghi chú; trường None giữ nguyên giá trị cũ."""
        current = self.get(record_id)
        if rate_used == "":
            raise ValidationError("Vui lòng nhập đơn giá")
        updated = TimeRecord(
            record_id=current.record_id,
            worker_id=current.worker_id,
            project_id=current.project_id,
            work_date=current.work_date,
            shifts=current.shifts if shifts is None else require_shifts(shifts),
            rate_used=current.rate_used if rate_used is None else require_non_negative(rate_used, "Đơn giá"),
            note=current.note if note is None else (str(note).strip() or None),
        )
        # rowcount is 0 for an unchanged row on MySQL.
        self._records.update(updated)
        logger.info("Record updated: %s shifts=%s rate=%s", record_id, updated.shifts, updated.rate_used)
        return updated

    def delete_record(self, record_id: str) -> None:
        if not self._records.delete(record_id):
            raise NotFoundError("Bản ghi chấm công không tồn tại")
        logger.info("Record deleted: %s", record_id)

    def list_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        worker_id: Optional[str] = None,
        project_id: Optional[str] = None,
    ) -> list[TimeRecord]:
        if start_date and end_date and end_date < start_date:
            raise ValidationError("Ngày kết thúc phải sau ngày bắt đầu")
        return list(
            self._records.list_range(
                start_date=start_date,
                end_date=end_date,
                worker_id=worker_id,
                project_id=project_id,
            )
        )

    def list_for_day(self, work_date: date, project_id: Optional[str] = None) -> list[TimeRecord]:
        return self.list_records(start_date=work_date, end_date=work_date, project_id=project_id)

    def roster(self, *, work_date: date, project_id: str, filter_by_project: bool = True) -> dict:
        """Dữ liệu cho màn hình chấm công của một ngày / một công trình."""
        project = self._projects.get_by_id(project_id)
        if not project:
            raise NotFoundError("Công trình không tồn tại")

        workers = list(self._workers.list_all())
        if filter_by_project:
            workers = [w for w in workers if w.current_project_id == project.project_id]

        existing = self.list_for_day(work_date, project.project_id)
        names = {w.worker_id: w.name for w in self._workers.list_all()}

        return {
            "date": work_date.isoformat(),
            "project": project.to_dict(),
            "workers": [
                {
                    "worker": w.to_dict(),
                    "recommendedRate": recommended_rate(w, 1, project),
                    "recommendedRate2": recommended_rate(w, 2, project),
                }
                for w in workers
            ],
            "records": [dict(r.to_dict(), workerName=names.get(r.worker_id, "")) for r in existing],
        }
