from __future__ import annotations

import logging
import re
from collections import defaultdict
from dataclasses import replace
from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import month_range, now_local, payroll_week_range
from ..common.validators import require_non_empty, require_non_negative
from ..common.xlsx import TransferSheet, write_transfer_workbook
from ..common.ids import new_id
from ..core.constants import UNKNOWN_PROJECT_LABEL
from ..core.exceptions import NotFoundError, ValidationError
from ..projects.repository import ProjectRepository
from ..timesheet.repository import TimeRecordRepository
from ..workers.repository import WorkerRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import BatchItem, MonthlyPayrollItem, PayrollBatch, WeeklyPayrollItem
from .repository import PayrollBatchRepository

logger = logging.getLogger(__name__)

UNASSIGNED_PROJECT_LABEL = "Chưa xác định"

_ITEM_FIELDS = {
    "basicAmount": "basic_amount",
    "basic_amount": "basic_amount",
    "extraAmount": "extra_amount",
    "extra_amount": "extra_amount",
    "note": "note",
    "projectId": "project_id",
    "project_id": "project_id",
}


def _validate_month(year, month) -> tuple[int, int]:
    try:
        year, month = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationError("Tháng/năm không hợp lệ")
    if not 1 <= month <= 12:
        raise ValidationError("Tháng không hợp lệ")
    return year, month


class PayrollService:
    """Bảng lương tháng (phải trả / đã chi / còn lại) và bảng lương tuần."""

    def __init__(
        self,
        records: TimeRecordRepository,
        workers: WorkerRepository,
        projects: ProjectRepository,
        batches: PayrollBatchRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._records = records
        self._workers = workers
        self._projects = projects
        self._batches = batches
        self._calculator = calculator or StandardPayrollCalculator()

    def monthly_overview(self, year, month) -> dict:
        year, month = _validate_month(year, month)
        start, end = month_range(year, month)

        shifts: dict[str, float] = defaultdict(float)
        amounts: dict[str, int] = defaultdict(int)
        project_ids: dict[str, list[str]] = defaultdict(list)
        for rec in self._records.list_range(start_date=start, end_date=end):
            shifts[rec.worker_id] += rec.shifts
            amounts[rec.worker_id] += self._calculator.record_amount(rec)
            if rec.project_id and rec.project_id not in project_ids[rec.worker_id]:
                project_ids[rec.worker_id].append(rec.project_id)

        paid: dict[str, int] = defaultdict(int)
        for batch in self._batches.list_by_month(year, month):
            for item in batch.items:
                paid[item.worker_id] += item.total_amount

        project_names = {p.project_id: p.name for p in self._projects.list_all()}

        items = [
            MonthlyPayrollItem(
                worker_id=w.worker_id,
                worker_name=w.name,
                total_shifts=shifts[w.worker_id],
                total_amount=amounts[w.worker_id],
                paid_amount=paid[w.worker_id],
                project_names=tuple(project_names.get(pid, UNKNOWN_PROJECT_LABEL) for pid in project_ids[w.worker_id]),
            )
            for w in self._workers.list_all()
        ]
        items = [i for i in items if i.total_amount > 0 or i.paid_amount > 0]

        total_amount = sum(i.total_amount for i in items)
        total_paid = sum(i.paid_amount for i in items)
        return {
            "year": year,
            "month": month,
            "items": [i.to_dict() for i in items],
            "totalLiability": total_amount,
            "totalPaid": total_paid,
            "totalRemaining": total_amount - total_paid,
        }

    def weekly_payroll(self, day: date) -> dict:
        """Bảng lương tuần chứa `day`: từ thứ Sáu tới hết thứ Năm."""
        start, end = payroll_week_range(day)
        records = sorted(self._records.list_range(start_date=start, end_date=end), key=lambda r: r.work_date)
        project_names = {p.project_id: p.name for p in self._projects.list_all()}

        by_worker: dict[str, list] = defaultdict(list)
        for rec in records:
            by_worker[rec.worker_id].append(rec)

        items: list[WeeklyPayrollItem] = []
        for w in self._workers.list_all():
            recs = by_worker.get(w.worker_id)
            if not recs:
                continue
            items.append(
                WeeklyPayrollItem(
                    worker_id=w.worker_id,
                    worker_name=w.name,
                    worker_role=w.role,
                    total_shifts=sum(r.shifts for r in recs),
                    total_amount=sum(self._calculator.record_amount(r) for r in recs),
                    details=tuple(
                        {
                            "date": r.work_date.isoformat(),
                            "shifts": r.shifts,
                            "rate": r.rate_used,
                            "amount": self._calculator.record_amount(r),
                            "projectName": project_names.get(r.project_id, UNKNOWN_PROJECT_LABEL),
                        }
                        for r in recs
                    ),
                )
            )

        items.sort(key=lambda i: i.total_amount, reverse=True)

        overtime: list[dict] = []
        for item in items:
            per_day: dict[str, float] = defaultdict(float)
            for d in item.details:
                per_day[d["date"]] += d["shifts"]
            for day_iso, total in sorted(per_day.items()):
                if total > 1:
                    overtime.append({"workerName": item.worker_name, "date": day_iso, "shifts": total})

        top = items[0] if items else None
        return {
            "weekStart": start.isoformat(),
            "weekEnd": end.isoformat(),
            "items": [i.to_dict() for i in items],
            "summary": {
                "totalAmount": sum(i.total_amount for i in items),
                "totalShifts": sum(i.total_shifts for i in items),
                "workerCount": len(items),
                "topWorker": {"name": top.worker_name, "amount": top.total_amount} if top else None,
                "overtimeDays": overtime,
            },
        }


class BatchService:
    """Đợt chi lương và file danh sách giao dịch chuyển khoản."""

    def __init__(
        self,
        batches: PayrollBatchRepository,
        workers: WorkerRepository,
        projects: ProjectRepository,
        *,
        clock: Optional[Callable] = None,
    ):
        self._batches = batches
        self._workers = workers
        self._projects = projects
        self._clock = clock or now_local

    def _project_name(self, project_id: str) -> str:
        if not project_id:
            return UNASSIGNED_PROJECT_LABEL
        project = self._projects.get_by_id(project_id)
        return project.name if project else UNASSIGNED_PROJECT_LABEL

    def create_batch(self, *, name: str, year, month) -> PayrollBatch:
        """Tạo đợt chi mới, tự điền mỗi công nhật một dòng 0đ.

        Công trình mặc định: công trình hiện tại của công nhật, nếu không có thì công trình đầu tiên.
        """
        name = require_non_empty(name, "Tên đợt chi")
        year, month = _validate_month(year, month)

        projects = list(self._projects.list_all())
        names = {p.project_id: p.name for p in projects}
        fallback = projects[0].project_id if projects else ""

        items = []
        for w in self._workers.list_all():
            project_id = w.current_project_id or fallback
            items.append(
                BatchItem(
                    worker_id=w.worker_id,
                    project_id=project_id,
                    project_name=names.get(project_id, UNASSIGNED_PROJECT_LABEL),
                )
            )

        batch = PayrollBatch(
            batch_id=new_id(),
            name=name,
            month=month,
            year=year,
            created_at=self._clock(),
            items=tuple(items),
        )
        self._batches.save(batch)
        logger.info("Batch created: %s (%s) %d/%d with %d items", batch.batch_id, name, month, year, len(items))
        return batch

    def list_batches(self, *, year=None, month=None) -> list[PayrollBatch]:
        if year is None or month is None:
            return list(self._batches.list_all())
        year, month = _validate_month(year, month)
        return list(self._batches.list_by_month(year, month))

    def get_batch(self, batch_id: str) -> PayrollBatch:
        batch = self._batches.get_by_id(batch_id)
        if not batch:
            raise NotFoundError("Đợt chi không tồn tại")
        return batch

    def _replace_items(self, batch: PayrollBatch, items) -> PayrollBatch:
        updated = replace(batch, items=tuple(items))
        self._batches.save(updated)
        return updated

    def update_item(self, batch_id: str, *, worker_id: str, project_id: str, field: str, value) -> PayrollBatch:
        """Sửa một ô của dòng (worker, project). Tổng tiền luôn = cơ bản + ngoài."""
        batch = self.get_batch(batch_id)
        attr = _ITEM_FIELDS.get(field)
        if not attr:
            raise ValidationError("Trường không hợp lệ")

        current = batch.find_item(worker_id, project_id or "")
        if not current:
            raise NotFoundError("Dòng chi không tồn tại")

        if attr in ("basic_amount", "extra_amount"):
            changed = replace(current, **{attr: require_non_negative(value, "Số tiền")})
        elif attr == "note":
            changed = replace(current, note=str(value or "").strip())
        else:
            new_project = str(value or "")
            if new_project and not self._projects.get_by_id(new_project):
                raise NotFoundError("Công trình không tồn tại")
            if new_project != current.project_id and batch.find_item(worker_id, new_project):
                raise ValidationError("Công nhật đã có dòng chi cho công trình này")
            changed = replace(current, project_id=new_project, project_name=self._project_name(new_project))

        items = [changed if i.key == current.key else i for i in batch.items]
        updated = self._replace_items(batch, items)
        logger.info("Batch %s item %s/%s: %s updated", batch_id, worker_id, project_id, attr)
        return updated

    def add_item(self, batch_id: str, *, worker_id: str, project_id: str) -> PayrollBatch:
        """Thêm dòng chi cho một công nhật ở công trình khác (chia tiền theo công trình)."""
        batch = self.get_batch(batch_id)
        if not self._workers.get_by_id(worker_id):
            raise NotFoundError("Công nhật không tồn tại")
        if project_id and not self._projects.get_by_id(project_id):
            raise NotFoundError("Công trình không tồn tại")
        if batch.find_item(worker_id, project_id or ""):
            raise ValidationError("Công nhật đã có dòng chi cho công trình này")

        item = BatchItem(worker_id=worker_id, project_id=project_id or "", project_name=self._project_name(project_id))
        return self._replace_items(batch, [*batch.items, item])

    def remove_item(self, batch_id: str, *, worker_id: str, project_id: str) -> PayrollBatch:
        batch = self.get_batch(batch_id)
        key = (worker_id, project_id or "")
        if not batch.find_item(*key):
            raise NotFoundError("Dòng chi không tồn tại")
        return self._replace_items(batch, [i for i in batch.items if i.key != key])

    def rename_batch(self, batch_id: str, name: str) -> PayrollBatch:
        batch = self.get_batch(batch_id)
        updated = replace(batch, name=require_non_empty(name, "Tên đợt chi"))
        self._batches.save(updated)
        return updated

    def delete_batch(self, batch_id: str) -> PayrollBatch:
        batch = self.get_batch(batch_id)
        self._batches.delete(batch_id)
        logger.info("Batch deleted: %s (%s)", batch_id, batch.name)
        return batch

    def export_batch_xlsx(self, batch_id: str) -> tuple[str, bytes]:
        """File "danh sách giao dịch": mỗi công trình một sheet.

        Chỉ xuất dòng có số tiền > 0 hoặc có ghi chú; công trình không có dòng nào bị bỏ qua.
        """
        batch = self.get_batch(batch_id)
        workers = {w.worker_id: w for w in self._workers.list_all()}
        projects = {p.project_id: p for p in self._projects.list_all()}

        groups: dict[str, list[BatchItem]] = {}
        for item in batch.items:
            groups.setdefault(item.project_id, []).append(item)

        sheets: list[TransferSheet] = []
        for project_id, items in groups.items():
            active = [i for i in items if i.total_amount > 0 or i.note]
            if not active:
                continue

            project = projects.get(project_id)
            label = project.name if project else UNKNOWN_PROJECT_LABEL
            sheet = TransferSheet(name=label, subtitle=f"Đợt: {batch.name} - {label}")
            for item in active:
                worker = workers.get(item.worker_id)
                sheet.add_row(
                    account_no=worker.bank_account if worker else "",
                    bank_name=worker.bank_name if worker else "",
                    beneficiary=worker.name if worker else "",
                    basic=item.basic_amount,
                    extra=item.extra_amount,
                    note=item.note,
                )
            sheets.append(sheet)

        if not sheets:
            raise ValidationError("Đợt chi chưa có khoản chi nào để xuất")

        filename = "DanhSachGiaoDich_" + re.sub(r"\s+", "_", batch.name.strip()) + ".xlsx"
        return filename, write_transfer_workbook(sheets)
