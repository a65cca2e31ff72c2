from datetime import date

from src.labor_payroll.labor_payroll.core.enums import ProjectStatus
from src.labor_payroll.labor_payroll.dashboard.service import DashboardService
from src.labor_payroll.labor_payroll.projects.model import Project
from src.labor_payroll.labor_payroll.timesheet.model import TimeRecord
from src.labor_payroll.labor_payroll.workers.model import Worker
from tests.fakes import FakeProjectsRepo, FakeRecordsRepo, FakeWorkersRepo


def _rec(rid, day, shifts, project_id):
    return TimeRecord(record_id=rid, worker_id="w1", project_id=project_id, work_date=day, shifts=shifts, rate_used=1)


def test_summary_counts_and_seven_day_chart():
    service = DashboardService(
        FakeWorkersRepo([Worker(worker_id="w1", name="An"), Worker(worker_id="w2", name="Bình")]),
        FakeProjectsRepo(
            [
                Project(project_id="p1", name="Nhà A"),
                Project(project_id="p2", name="Nhà B", status=ProjectStatus.COMPLETED),
            ]
        ),
        FakeRecordsRepo(
            [
                _rec("r1", date(2024, 5, 10), 1, "p1"),
                _rec("r2", date(2024, 5, 10), 0.5, "p2"),
                _rec("r3", date(2024, 5, 10), 1, "deleted-project"),
                _rec("r4", date(2024, 5, 3), 1, "p1"),  # outside the 7-day window
            ]
        ),
    )

    data = service.summary(date(2024, 5, 10))

    assert data["workerCount"] == 2
    assert data["activeProjectCount"] == 1
    assert data["recordCount"] == 4

    chart = data["chart"]
    assert [c["name"] for c in chart] == ["4/5", "5/5", "6/5", "7/5", "8/5", "9/5", "10/5"]
    assert chart[0]["shifts"] == 0 and chart[0]["details"] == {}
    assert chart[-1]["date"] == "2024-05-10"
    assert chart[-1]["shifts"] == 2.5
    assert chart[-1]["details"] == {"Nhà A": 1, "Nhà B": 0.5, "Khác": 1}
