import io
from datetime import datetime

import pytest
from openpyxl import load_workbook

from src.labor_payroll.labor_payroll.core.exceptions import NotFoundError, ValidationError
from src.labor_payroll.labor_payroll.payroll.service import BatchService
from src.labor_payroll.labor_payroll.projects.model import Project
from src.labor_payroll.labor_payroll.workers.model import Worker
from tests.fakes import FakeBatchesRepo, FakeProjectsRepo, FakeWorkersRepo


@pytest.fixture()
def service():
    projects = FakeProjectsRepo(
        [
            Project(project_id="p1", name="Nhà phố Quận 7"),
            Project(project_id="p2", name="Biệt thự Thảo Điền - giai đoạn hoàn thiện nội thất"),
        ]
    )
    workers = FakeWorkersRepo(
        [
            Worker(worker_id="w1", name="Nguyễn Văn An", current_project_id="p2", bank_account="0123", bank_name="MB"),
            Worker(worker_id="w2", name="Trần Bình"),
        ]
    )
    return BatchService(FakeBatchesRepo(), workers, projects, clock=lambda: datetime(2024, 5, 20, 9, 0))


def test_create_batch_populates_every_worker_with_default_project(service):
    batch = service.create_batch(name="Đợt 1 tháng 5", year=2024, month=5)

    assert batch.created_at == datetime(2024, 5, 20, 9, 0)
    assert [(i.worker_id, i.project_id) for i in batch.items] == [("w1", "p2"), ("w2", "p1")]
    assert all(i.total_amount == 0 for i in batch.items)
    assert [b.batch_id for b in service.list_batches(year=2024, month=5)] == [batch.batch_id]
    assert service.list_batches(year=2024, month=6) == []

    with pytest.raises(ValidationError):
        service.create_batch(name=" ", year=2024, month=5)


def test_update_item_recomputes_total(service):
    batch = service.create_batch(name="Đợt 1", year=2024, month=5)

    service.update_item(batch.batch_id, worker_id="w2", project_id="p1", field="basicAmount", value="1000000")
    updated = service.update_item(batch.batch_id, worker_id="w2", project_id="p1", field="extraAmount", value=250000)
    item = updated.find_item("w2", "p1")

    assert item.total_amount == 1250000
    assert updated.total_amount == 1250000
    assert service.get_batch(batch.batch_id).find_item("w2", "p1").total_amount == 1250000

    with pytest.raises(ValidationError):
        service.update_item(batch.batch_id, worker_id="w2", project_id="p1", field="totalAmount", value=1)
    with pytest.raises(ValidationError):
        service.update_item(batch.batch_id, worker_id="w2", project_id="p1", field="basicAmount", value=-1)
    with pytest.raises(NotFoundError):
        service.update_item(batch.batch_id, worker_id="w2", project_id="p2", field="note", value="x")


def test_split_worker_across_projects(service):
    batch = service.create_batch(name="Đợt 1", year=2024, month=5)

    batch = service.add_item(batch.batch_id, worker_id="w1", project_id="p1")
    assert batch.find_item("w1", "p1").project_name == "Nhà phố Quận 7"

    with pytest.raises(ValidationError):
        service.add_item(batch.batch_id, worker_id="w1", project_id="p1")
    with pytest.raises(ValidationError):
        service.update_item(batch.batch_id, worker_id="w1", project_id="p2", field="projectId", value="p1")

    batch = service.remove_item(batch.batch_id, worker_id="w1", project_id="p2")
    assert [i.key for i in batch.items] == [("w2", "p1"), ("w1", "p1")]


def test_rename_and_delete(service):
    batch = service.create_batch(name="Đợt 1", year=2024, month=5)

    assert service.rename_batch(batch.batch_id, "Đợt 2").name == "Đợt 2"
    service.delete_batch(batch.batch_id)
    with pytest.raises(NotFoundError):
        service.get_batch(batch.batch_id)


def test_export_groups_items_by_project(service):
    batch = service.create_batch(name="Đợt 1 tháng 5", year=2024, month=5)
    service.update_item(batch.batch_id, worker_id="w1", project_id="p2", field="basicAmount", value=3000000)
    service.update_item(batch.batch_id, worker_id="w1", project_id="p2", field="extraAmount", value=500000)
    service.add_item(batch.batch_id, worker_id="w2", project_id="p2")
    service.update_item(batch.batch_id, worker_id="w2", project_id="p2", field="note", value="chờ xác nhận")

    filename, content = service.export_batch_xlsx(batch.batch_id)

    assert filename == "DanhSachGiaoDich_Đợt_1_tháng_5.xlsx"
    wb = load_workbook(io.BytesIO(content))
    # p1 only has a zero item without note: no sheet for it
    assert wb.sheetnames == ["Biệt thự Thảo Điền - giai đoạn"]

    ws = wb.active
    rows = [list(r) for r in ws.iter_rows(values_only=True)]
    assert rows[0][0] == "DANH SÁCH GIAO DỊCH (LIST OF TRANSACTIONS)"
    assert rows[1][0].startswith("Đợt: Đợt 1 tháng 5 - ")
    assert rows[3][0] == "STT (Ord. No.)"
    assert rows[4][:7] == [1, "0123", "MB", "NGUYỄN VĂN AN", 3000000, 500000, 3500000]
    assert rows[5][3] == "TRẦN BÌNH"
    assert rows[5][6] == 0
    assert rows[5][7] == "chờ xác nhận"
    assert rows[6][3] == "TỔNG CỘNG:"
    assert rows[6][6] == 3500000


def test_export_without_payments_is_rejected(service):
    batch = service.create_batch(name="Đợt trống", year=2024, month=5)
    with pytest.raises(ValidationError):
        service.export_batch_xlsx(batch.batch_id)
