from datetime import datetime, timedelta

from src.labor_payroll.labor_payroll.activity.service import ActivityLogService
from src.labor_payroll.labor_payroll.core.enums import Role
from src.labor_payroll.labor_payroll.users.model import Actor
from tests.fakes import FakeLogsRepo

ACTOR = Actor(user_id="u1", name="Tuấn", role=Role.ADMIN)


def test_record_and_list_recent_newest_first():
    ticks = iter(datetime(2024, 5, 1, 8, 0) + timedelta(minutes=i) for i in range(10))
    service = ActivityLogService(FakeLogsRepo(), clock=lambda: next(ticks))

    service.record(ACTOR, "Chấm công", "Chấm công 3 người")
    service.record(ACTOR, "Xóa đợt chi", "Xóa đợt chi Đợt 1")

    logs = service.list_recent(limit=10)
    assert [log["action"] for log in logs] == ["Xóa đợt chi", "Chấm công"]
    assert logs[0]["userName"] == "Tuấn"
    assert logs[0]["timestamp"] == "2024-05-01T08:01:00"
    assert len(service.list_recent(limit=0)) == 1  # clamped to at least one


def test_record_failure_does_not_break_the_caller(caplog):
    service = ActivityLogService(FakeLogsRepo(fail=True))

    assert service.record(ACTOR, "Chấm công", "x") is None
    assert "Log failed" in caplog.text
