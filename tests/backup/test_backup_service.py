from datetime import date, datetime

import pytest

from src.labor_payroll.labor_payroll.core.enums import Role
from src.labor_payroll.labor_payroll.core.exceptions import AuthorizationError, ValidationError
from src.labor_payroll.labor_payroll.projects.model import Project
from src.labor_payroll.labor_payroll.timesheet.model import TimeRecord
from src.labor_payroll.labor_payroll.users.model import Actor
from src.labor_payroll.labor_payroll.workers.model import Worker
from tests.fakes import make_container

ADMIN = Actor(user_id="u-admin", name="Tuấn", role=Role.ADMIN)
USER = Actor(user_id="u-luc", name="Lực", role=Role.USER)


@pytest.fixture()
def container():
    return make_container(
        workers=[Worker(worker_id="w1", name="An", daily_rate=400000)],
        projects=[Project(project_id="p1", name="Nhà A")],
        records=[
            TimeRecord(record_id="r1", worker_id="w1", project_id="p1", work_date=date(2024, 5, 1), shifts=1, rate_used=400000)
        ],
    )


def test_export_snapshot_contains_every_section(container):
    container.batch_service.create_batch(name="Đợt 1", year=2024, month=5)
    container.activity_service.record(ADMIN, "Tạo đợt chi", "Đợt 1")

    snapshot = container.backup_service.export_snapshot()

    assert snapshot["version"] == "1.0"
    assert datetime.fromisoformat(snapshot["exportDate"])
    assert snapshot["workers"][0]["name"] == "An"
    assert snapshot["records"][0]["amount"] == 400000
    assert len(snapshot["batches"]) == 1 and snapshot["batches"][0]["items"][0]["workerId"] == "w1"
    assert snapshot["logs"][0]["action"] == "Tạo đợt chi"
    assert snapshot["transactions"] == []


def test_restore_round_trips_an_export(container):
    container.debt_service.add_transaction(worker_id="w1", tx_type="advance", amount=100000, tx_date=date(2024, 5, 2))
    snapshot = container.backup_service.export_snapshot()

    container.worker_service.delete("w1")
    counts = container.backup_service.restore(snapshot, ADMIN)

    assert counts["workers"] == 1 and counts["transactions"] == 1
    assert container.worker_service.get("w1").daily_rate == 400000
    assert container.debt_service.debt_summary()["totalCompanyDebt"] == 300000
    assert container.storage_repo.latest()["version"] == "1.0"
    assert container.activity_service.list_recent()[0]["action"] == "Phục hồi dữ liệu"


def test_restore_treats_missing_sections_as_empty(container):
    container.backup_service.restore({"projects": [{"id": "p9", "name": "Mới"}]}, ADMIN)

    assert [p.project_id for p in container.project_service.list_projects()] == ["p9"]
    assert container.worker_service.list_workers() == []
    assert container.timesheet_service.list_records() == []


def test_restore_requires_admin_and_an_object(container):
    with pytest.raises(AuthorizationError):
        container.backup_service.restore({}, USER)
    with pytest.raises(ValidationError):
        container.backup_service.restore(["not", "an", "object"], ADMIN)
    with pytest.raises(ValidationError):
        container.backup_service.restore({"workers": [{"name": "no id"}]}, ADMIN)

    # nothing was replaced
    assert container.worker_service.get("w1").name == "An"


def test_storage_keeps_latest_snapshot(container):
    assert container.backup_service.latest_snapshot() is None
    container.backup_service.save_snapshot({"workers": [], "n": 1})
    container.backup_service.save_snapshot({"workers": [], "n": 2})
    assert container.backup_service.latest_snapshot()["n"] == 2
    with pytest.raises(ValidationError):
        container.backup_service.save_snapshot("text")
