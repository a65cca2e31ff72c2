import io
from datetime import datetime

import pandas as pd
import pytest
from openpyxl import load_workbook

from src.labor_payroll.labor_payroll.core.exceptions import NotFoundError, ValidationError
from src.labor_payroll.labor_payroll.workbook.service import WorkbookService
from tests.fakes import FakePersonnelRepo, FakeWorkbooksRepo


@pytest.fixture()
def service():
    return WorkbookService(FakeWorkbooksRepo(), FakePersonnelRepo(), clock=lambda: datetime(2024, 5, 15, 8, 30))


def test_missing_month_is_an_empty_workbook(service):
    wb = service.get_workbook(2024, 5)
    assert (wb.year, wb.month, wb.sheets) == (2024, 5, [])
    with pytest.raises(ValidationError):
        service.get_workbook(2024, 13)


def test_sheet_lifecycle(service):
    sheet = service.add_sheet(2024, 5, "TT")
    service.add_sheet(2024, 5, "MBM")
    service.rename_sheet(2024, 5, sheet.sheet_id, "TT Group")

    assert [s.name for s in service.get_workbook(2024, 5).sheets] == ["TT Group", "MBM"]

    service.delete_sheet(2024, 5, sheet.sheet_id)
    assert [s.name for s in service.get_workbook(2024, 5).sheets] == ["MBM"]
    with pytest.raises(NotFoundError):
        service.rename_sheet(2024, 5, sheet.sheet_id, "X")
    with pytest.raises(ValidationError):
        service.add_sheet(2024, 5, "")


def test_rows_autofill_from_personnel(service):
    service.add_personnel(name="Nguyễn Văn An", accountNo="0123456", bankName="VCB", company="TT")
    sheet = service.add_sheet(2024, 5, "TT")
    row = service.add_row(2024, 5, sheet.sheet_id)
    assert row.bank_name == "MB"

    row = service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="beneficiary", value="nguyễn văn an")
    assert row.beneficiary == "NGUYỄN VĂN AN"
    assert (row.account_no, row.bank_name) == ("0123456", "VCB")

    row = service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="basicSalary", value="5000000")
    row = service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="extraSalary", value=700000)
    assert row.total == 5700000

    with pytest.raises(ValidationError):
        service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="payments", value={})

    saved = service.get_workbook(2024, 5).find_sheet(sheet.sheet_id).rows[0]
    assert saved.total == 5700000 and saved.account_no == "0123456"


def test_list_rows_filters_by_name_and_company(service):
    service.add_personnel(name="AN", company="TT")
    service.add_personnel(name="BINH", company="MBM")
    sheet = service.add_sheet(2024, 5, "Chung")
    for name in ("an", "binh", "cuong"):
        row = service.add_row(2024, 5, sheet.sheet_id)
        service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="beneficiary", value=name)

    assert [r.beneficiary for r in service.list_rows(2024, 5, sheet.sheet_id, search="n")] == ["AN", "BINH", "CUONG"]
    assert [r.beneficiary for r in service.list_rows(2024, 5, sheet.sheet_id, company="MBM")] == ["BINH"]
    assert service.companies() == ["MBM", "TT"]


def test_move_row_is_noop_at_edges(service):
    sheet = service.add_sheet(2024, 5, "TT")
    ids = [service.add_row(2024, 5, sheet.sheet_id).row_id for _ in range(3)]

    rows = service.move_row(2024, 5, sheet.sheet_id, ids[0], "UP")
    assert [r.row_id for r in rows] == ids
    rows = service.move_row(2024, 5, sheet.sheet_id, ids[0], "DOWN")
    assert [r.row_id for r in rows] == [ids[1], ids[0], ids[2]]
    rows = service.move_row(2024, 5, sheet.sheet_id, ids[2], "down")
    assert [r.row_id for r in rows] == [ids[1], ids[0], ids[2]]

    with pytest.raises(ValidationError):
        service.move_row(2024, 5, sheet.sheet_id, ids[2], "LEFT")

    service.delete_row(2024, 5, sheet.sheet_id, ids[1])
    assert [r.row_id for r in service.get_workbook(2024, 5).sheets[0].rows] == [ids[0], ids[2]]


def test_payment_batches_track_paid_and_remaining(service):
    sheet = service.add_sheet(2024, 5, "TT")
    row = service.add_row(2024, 5, sheet.sheet_id)
    service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="basicSalary", value=6000000)

    first = service.create_payment_batch(2024, 5, sheet.sheet_id, "Đợt 1 - 15/05")
    second = service.create_payment_batch(2024, 5, sheet.sheet_id, "Đợt 2")
    assert first.date == "2024-05-15T08:30:00"

    service.set_payment(2024, 5, sheet.sheet_id, row.row_id, first.batch_id, 2000000)
    row = service.set_payment(2024, 5, sheet.sheet_id, row.row_id, second.batch_id, "1.500.000")
    assert (row.paid, row.remaining) == (3500000, 2500000)

    with pytest.raises(NotFoundError):
        service.set_payment(2024, 5, sheet.sheet_id, row.row_id, "missing", 1)


def test_copy_from_previous_month_resets_payments(service):
    sheet = service.add_sheet(2024, 4, "TT")
    row = service.add_row(2024, 4, sheet.sheet_id)
    service.update_row(2024, 4, sheet.sheet_id, row.row_id, field="beneficiary", value="An")
    service.update_row(2024, 4, sheet.sheet_id, row.row_id, field="basicSalary", value=1000)
    batch = service.create_payment_batch(2024, 4, sheet.sheet_id, "Đợt 1")
    service.set_payment(2024, 4, sheet.sheet_id, row.row_id, batch.batch_id, 1000)

    copied = service.copy_from_previous_month(2024, 5)

    [new_sheet] = copied.sheets
    [new_row] = new_sheet.rows
    assert new_sheet.name == "TT" and new_sheet.sheet_id != sheet.sheet_id
    assert new_sheet.payment_batches == []
    assert new_row.row_id != row.row_id
    assert (new_row.beneficiary, new_row.basic_salary, new_row.payments) == ("AN", 1000, {})
    # source month untouched
    assert service.get_workbook(2024, 4).sheets[0].rows[0].paid == 1000

    with pytest.raises(ValidationError):
        service.copy_from_previous_month(2024, 1)


def test_export_workbook(service):
    with pytest.raises(ValidationError):
        service.export_workbook_xlsx(2024, 5)

    sheet = service.add_sheet(2024, 5, "MBM")
    row = service.add_row(2024, 5, sheet.sheet_id)
    service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="beneficiary", value="Trần Bình")
    service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="basicSalary", value=4000000)
    service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="note", value="Lương T5")

    filename, content = service.export_workbook_xlsx(2024, 5)

    assert filename == "BangLuong_Thang5_2024.xlsx"
    ws = load_workbook(io.BytesIO(content))["MBM"]
    rows = [list(r) for r in ws.iter_rows(values_only=True)]
    assert rows[1][0] == "Đợt: Lương Tháng 5/2024 - MBM"
    assert rows[4][2:8] == ["MB", "TRẦN BÌNH", 4000000, 0, 4000000, "Lương T5"]
    assert rows[-1][3] == "TỔNG CỘNG:" and rows[-1][6] == 4000000


def test_personnel_crud_and_excel_import(service):
    person = service.add_personnel(name="Lê C", company="TT")
    service.update_personnel(person.personnel_id, accountNo="999")
    assert service.list_personnel()[0].account_no == "999"
    assert service.find_personnel_by_name("lê c") is not None

    buf = io.BytesIO()
    pd.DataFrame(
        [["Tên", "Số TK", "Ngân hàng", "Công ty"], ["phạm d", 123456789, "ACB", "MBM"], [None, "x", "y", "z"]]
    ).to_excel(buf, index=False, header=False, engine="openpyxl")

    imported = service.import_personnel_xlsx(buf.getvalue())

    assert [(p.name, p.account_no, p.bank_name, p.company) for p in imported] == [("PHẠM D", "123456789", "ACB", "MBM")]
    assert len(service.list_personnel()) == 2

    service.delete_personnel(person.personnel_id)
    with pytest.raises(NotFoundError):
        service.delete_personnel(person.personnel_id)
    with pytest.raises(ValidationError):
        service.import_personnel_xlsx(b"not an excel file")


def test_salary_cells_accept_grouped_numbers(service):
    sheet = service.add_sheet(2024, 5, "TT")
    row = service.add_row(2024, 5, sheet.sheet_id)

    row = service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="basicSalary", value="6.000.000")
    row = service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="extraSalary", value="")
    assert (row.basic_salary, row.extra_salary, row.total) == (6000000, 0, 6000000)

    with pytest.raises(ValidationError):
        service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="basicSalary", value="6tr")
    with pytest.raises(ValidationError):
        service.update_row(2024, 5, sheet.sheet_id, row.row_id, field="extraSalary", value="-500")
