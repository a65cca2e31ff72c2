from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta

from ..common.datetime_utils import short_label
from ..core.constants import DASHBOARD_DAYS, UNKNOWN_PROJECT_LABEL
from ..core.enums import ProjectStatus
from ..projects.repository import ProjectRepository
from ..timesheet.repository import TimeRecordRepository
from ..workers.repository import WorkerRepository


class DashboardService:
    def __init__(self, workers: WorkerRepository, projects: ProjectRepository, records: TimeRecordRepository):
        self._workers = workers
        self._projects = projects
        self._records = records

    def summary(self, today: date) -> dict:
        """Số liệu tổng quan và biểu đồ số công 7 ngày gần nhất (kể cả hôm nay)."""
        projects = list(self._projects.list_all())
        names = {p.project_id: p.name for p in projects}

        start = today - timedelta(days=DASHBOARD_DAYS - 1)
        by_day: dict[date, list] = defaultdict(list)
        for rec in self._records.list_range(start_date=start, end_date=today):
            by_day[rec.work_date].append(rec)

        chart = []
        for offset in range(DASHBOARD_DAYS):
            day = start + timedelta(days=offset)
            details: dict[str, float] = {}
            for rec in by_day.get(day, []):
                label = names.get(rec.project_id, UNKNOWN_PROJECT_LABEL)
                details[label] = details.get(label, 0) + rec.shifts
            chart.append(
                {
                    "date": day.isoformat(),
                    "name": short_label(day),
                    "shifts": sum(r.shifts for r in by_day.get(day, [])),
                    "details": details,
                }
            )

        return {
            "workerCount": len(self._workers.list_all()),
            "activeProjectCount": sum(1 for p in projects if p.status == ProjectStatus.ACTIVE),
            "recordCount": self._records.count(),
            "chart": chart,
        }
