from datetime import date, datetime

import pytest

from src.labor_payroll.labor_payroll.core.exceptions import ValidationError
from src.labor_payroll.labor_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.labor_payroll.labor_payroll.payroll.model import BatchItem, PayrollBatch
from src.labor_payroll.labor_payroll.payroll.service import PayrollService
from src.labor_payroll.labor_payroll.projects.model import Project
from src.labor_payroll.labor_payroll.timesheet.model import TimeRecord
from src.labor_payroll.labor_payroll.workers.model import Worker
from tests.fakes import FakeBatchesRepo, FakeProjectsRepo, FakeRecordsRepo, FakeWorkersRepo


def _rec(rid, worker_id, day, shifts, rate, project_id="p1"):
    return TimeRecord(record_id=rid, worker_id=worker_id, project_id=project_id, work_date=day, shifts=shifts, rate_used=rate)


WORKERS = [
    Worker(worker_id="w1", name="An", role="Thợ Chính"),
    Worker(worker_id="w2", name="Bình", role="Phụ Hồ"),
    Worker(worker_id="w3", name="Cường"),
]
PROJECTS = [Project(project_id="p1", name="Nhà A"), Project(project_id="p2", name="Nhà B")]


def _service(records, batches=()):
    return PayrollService(
        FakeRecordsRepo(records),
        FakeWorkersRepo(WORKERS),
        FakeProjectsRepo(PROJECTS),
        FakeBatchesRepo(batches),
    )


def test_standard_calculator_uses_rounded_amount():
    calc = StandardPayrollCalculator()
    assert calc.record_amount(_rec("r", "w1", date(2024, 5, 1), 1.5, 333333)) == 500000


def test_monthly_overview_merges_liability_and_batch_payments():
    records = [
        _rec("r1", "w1", date(2024, 5, 1), 1, 400000),
        _rec("r2", "w1", date(2024, 5, 31), 2, 400000, project_id="p2"),
        _rec("r3", "w1", date(2024, 6, 1), 1, 400000),  # next month
        _rec("r4", "w2", date(2024, 4, 30), 1, 300000),  # previous month
    ]
    batches = [
        PayrollBatch(
            batch_id="b1",
            name="Đợt 1",
            month=5,
            year=2024,
            created_at=datetime(2024, 5, 15),
            items=(
                BatchItem("w1", "p1", "Nhà A", basic_amount=500000, extra_amount=100000),
                BatchItem("w2", "p1", "Nhà A", basic_amount=200000),
            ),
        ),
        PayrollBatch(batch_id="b2", name="Đợt 1", month=4, year=2024, created_at=datetime(2024, 4, 15),
                     items=(BatchItem("w3", "p1", "Nhà A", basic_amount=999),)),
    ]

    overview = _service(records, batches).monthly_overview(2024, 5)
    items = {i["workerId"]: i for i in overview["items"]}

    assert set(items) == {"w1", "w2"}  # w3: nothing earned, nothing paid in May
    assert items["w1"]["totalShifts"] == 3
    assert items["w1"]["totalAmount"] == 1200000
    assert items["w1"]["paidAmount"] == 600000
    assert items["w1"]["remainingAmount"] == 600000
    assert items["w1"]["projectNames"] == ["Nhà A", "Nhà B"]
    # paid without earning in the month still shows up
    assert items["w2"]["totalAmount"] == 0 and items["w2"]["remainingAmount"] == -200000
    assert overview["totalLiability"] == 1200000
    assert overview["totalPaid"] == 800000
    assert overview["totalRemaining"] == 400000


def test_monthly_overview_rejects_bad_month():
    with pytest.raises(ValidationError):
        _service([]).monthly_overview(2024, 0)


def test_weekly_payroll_friday_to_thursday():
    records = [
        _rec("r0", "w1", date(2024, 5, 9), 1, 400000),  # Thursday: previous week
        _rec("r1", "w1", date(2024, 5, 10), 1, 400000),  # Friday: first day
        _rec("r2", "w1", date(2024, 5, 13), 1, 400000),
        _rec("r3", "w1", date(2024, 5, 13), 0.5, 400000, project_id="p2"),
        _rec("r4", "w2", date(2024, 5, 16), 2, 300000),  # Thursday: last day
        _rec("r5", "w2", date(2024, 5, 17), 1, 300000),  # Friday: next week
    ]

    result = _service(records).weekly_payroll(date(2024, 5, 14))

    assert (result["weekStart"], result["weekEnd"]) == ("2024-05-10", "2024-05-16")
    assert [i["workerId"] for i in result["items"]] == ["w1", "w2"]
    w1 = result["items"][0]
    assert w1["totalShifts"] == 2.5
    assert w1["totalAmount"] == 1000000
    assert [d["date"] for d in w1["details"]] == ["2024-05-10", "2024-05-13", "2024-05-13"]

    summary = result["summary"]
    assert summary["totalAmount"] == 1600000
    assert summary["topWorker"] == {"name": "An", "amount": 1000000}
    assert summary["overtimeDays"] == [
        {"workerName": "An", "date": "2024-05-13", "shifts": 1.5},
        {"workerName": "Bình", "date": "2024-05-16", "shifts": 2.0},
    ]


def test_weekly_payroll_empty_week():
    result = _service([]).weekly_payroll(date(2024, 5, 14))
    assert result["items"] == []
    assert result["summary"]["topWorker"] is None
    assert result["summary"]["totalAmount"] == 0
