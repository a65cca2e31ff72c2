from __future__ import annotations

import io
import logging
from dataclasses import replace
from typing import Callable, Optional

import pandas as pd

from ..common.datetime_utils import now_local, previous_month
from ..common.ids import new_id
from ..common.money import parse_number
from ..common.validators import require_non_empty, require_non_negative
from ..common.xlsx import TransferSheet, write_transfer_workbook
from ..core.constants import DEFAULT_BANK_NAME
from ..core.enums import MoveDirection
from ..core.exceptions import NotFoundError, ValidationError
from .model import PaymentBatch, Personnel, Sheet, TransactionRow, Workbook
from .repository import PersonnelRepository, WorkbookRepository

logger = logging.getLogger(__name__)

# JSON key -> TransactionRow attribute
_ROW_FIELDS = {
    "accountNo": "account_no",
    "bankName": "bank_name",
    "beneficiary": "beneficiary",
    "basicSalary": "basic_salary",
    "extraSalary": "extra_salary",
    "note": "note",
}

_PERSONNEL_FIELDS = {
    "name": "name",
    "accountNo": "account_no",
    "bankName": "bank_name",
    "company": "company",
}


def _validate_month(year, month) -> tuple[int, int]:
    try:
        year, month = int(year), int(month)
    except (TypeError, ValueError):
        raise ValidationError("Tháng/năm không hợp lệ")
    if not 1 <= month <= 12:
        raise ValidationError("Tháng không hợp lệ")
    return year, month


def _money(value) -> int:
    """Số tiền từ ô nhập: chấp nhận "1.500.000" hoặc số."""
    if isinstance(value, str):
        value = parse_number(value)
    return require_non_negative(value, "Số tiền")


def _cell(value) -> str:
    if value is None or pd.isna(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


class WorkbookService:
    """Bảng lương tháng theo công ty và danh bạ người thụ hưởng."""

    def __init__(
        self,
        workbooks: WorkbookRepository,
        personnel: PersonnelRepository,
        *,
        clock: Optional[Callable] = None,
    ):
        self._workbooks = workbooks
        self._personnel = personnel
        self._clock = clock or now_local

    # ----- workbook -----

    def get_workbook(self, year, month) -> Workbook:
        year, month = _validate_month(year, month)
        return self._workbooks.get(year, month) or Workbook(year=year, month=month)

    def _sheet(self, workbook: Workbook, sheet_id: str) -> Sheet:
        sheet = workbook.find_sheet(sheet_id)
        if not sheet:
            raise NotFoundError("Sheet không tồn tại")
        return sheet

    def _row(self, sheet: Sheet, row_id: str) -> TransactionRow:
        row = sheet.find_row(row_id)
        if not row:
            raise NotFoundError("Dòng không tồn tại")
        return row

    def add_sheet(self, year, month, name: str) -> Sheet:
        workbook = self.get_workbook(year, month)
        sheet = Sheet(sheet_id=new_id(), name=require_non_empty(name, "Tên công ty"))
        workbook.sheets.append(sheet)
        self._workbooks.save(workbook)
        return sheet

    def rename_sheet(self, year, month, sheet_id: str, name: str) -> Sheet:
        workbook = self.get_workbook(year, month)
        sheet = self._sheet(workbook, sheet_id)
        sheet.name = require_non_empty(name, "Tên công ty")
        self._workbooks.save(workbook)
        return sheet

    def delete_sheet(self, year, month, sheet_id: str) -> None:
        workbook = self.get_workbook(year, month)
        sheet = self._sheet(workbook, sheet_id)
        workbook.sheets.remove(sheet)
        self._workbooks.save(workbook)

    def list_rows(self, year, month, sheet_id: str, *, search: str = "", company: Optional[str] = None) -> list[TransactionRow]:
        """Lọc theo tên thụ hưởng; lọc công ty dựa vào danh bạ (khớp tên không phân biệt hoa thường)."""
        sheet = self._sheet(self.get_workbook(year, month), sheet_id)
        needle = (search or "").strip().lower()
        rows = [r for r in sheet.rows if needle in r.beneficiary.lower()]
        if company:
            by_name = {p.name.upper(): p for p in self._personnel.list_all()}
            rows = [
                r
                for r in rows
                if r.beneficiary.upper() in by_name and by_name[r.beneficiary.upper()].company == company
            ]
        return rows

    def add_row(self, year, month, sheet_id: str) -> TransactionRow:
        workbook = self.get_workbook(year, month)
        sheet = self._sheet(workbook, sheet_id)
        row = TransactionRow(row_id=new_id(), bank_name=DEFAULT_BANK_NAME)
        sheet.rows.append(row)
        self._workbooks.save(workbook)
        return row

    def update_row(self, year, month, sheet_id: str, row_id: str, *, field: str, value) -> TransactionRow:
        attr = _ROW_FIELDS.get(field)
        if not attr:
            raise ValidationError("Trường không hợp lệ")

        workbook = self.get_workbook(year, month)
        row = self._row(self._sheet(workbook, sheet_id), row_id)

        if attr in ("basic_salary", "extra_salary"):
            setattr(row, attr, _money(value))
        elif attr == "beneficiary":
            row.beneficiary = str(value or "").strip().upper()
            person = self.find_personnel_by_name(row.beneficiary)
            if person:
                row.account_no = person.account_no
                row.bank_name = person.bank_name
        else:
            setattr(row, attr, str(value or "").strip())

        self._workbooks.save(workbook)
        return row

    def delete_row(self, year, month, sheet_id: str, row_id: str) -> None:
        workbook = self.get_workbook(year, month)
        sheet = self._sheet(workbook, sheet_id)
        sheet.rows.remove(self._row(sheet, row_id))
        self._workbooks.save(workbook)

    def move_row(self, year, month, sheet_id: str, row_id: str, direction) -> list[TransactionRow]:
        try:
            direction = MoveDirection(str(direction).upper())
        except ValueError:
            raise ValidationError("Hướng di chuyển không hợp lệ")

        workbook = self.get_workbook(year, month)
        sheet = self._sheet(workbook, sheet_id)
        idx = sheet.rows.index(self._row(sheet, row_id))
        other = idx - 1 if direction == MoveDirection.UP else idx + 1
        if 0 <= other < len(sheet.rows):
            sheet.rows[idx], sheet.rows[other] = sheet.rows[other], sheet.rows[idx]
            self._workbooks.save(workbook)
        return sheet.rows

    def create_payment_batch(self, year, month, sheet_id: str, name: str) -> PaymentBatch:
        workbook = self.get_workbook(year, month)
        sheet = self._sheet(workbook, sheet_id)
        batch = PaymentBatch(
            batch_id=new_id(),
            name=require_non_empty(name, "Tên đợt chi trả"),
            date=self._clock().isoformat(timespec="seconds"),
        )
        sheet.payment_batches.append(batch)
        self._workbooks.save(workbook)
        return batch

    def set_payment(self, year, month, sheet_id: str, row_id: str, batch_id: str, amount) -> TransactionRow:
        workbook = self.get_workbook(year, month)
        sheet = self._sheet(workbook, sheet_id)
        if not any(b.batch_id == batch_id for b in sheet.payment_batches):
            raise NotFoundError("Đợt chi trả không tồn tại")
        row = self._row(sheet, row_id)
        row.payments[batch_id] = _money(amount)
        self._workbooks.save(workbook)
        return row

    def copy_from_previous_month(self, year, month) -> Workbook:
        """Sao chép sheet và dòng của tháng trước (id mới, xóa đợt chi và số đã trả).

        Dữ liệu hiện có của tháng đích bị thay thế.
        """
        year, month = _validate_month(year, month)
        prev_year, prev_month = previous_month(year, month)
        previous = self._workbooks.get(prev_year, prev_month)
        if not previous or not previous.sheets:
            raise ValidationError(f"Không tìm thấy dữ liệu của Tháng {prev_month}/{prev_year}.")

        workbook = Workbook(
            year=year,
            month=month,
            sheets=[
                Sheet(
                    sheet_id=new_id(),
                    name=sheet.name,
                    rows=[replace(row, row_id=new_id(), payments={}) for row in sheet.rows],
                )
                for sheet in previous.sheets
            ],
        )
        self._workbooks.save(workbook)
        logger.info("Workbook %d/%d copied from %d/%d", month, year, prev_month, prev_year)
        return workbook

    def export_workbook_xlsx(self, year, month) -> tuple[str, bytes]:
        workbook = self.get_workbook(year, month)
        if not workbook.sheets:
            raise ValidationError("Chưa có dữ liệu để xuất!")

        sheets = []
        for sheet in workbook.sheets:
            out = TransferSheet(name=sheet.name, subtitle=f"Đợt: Lương Tháng {workbook.month}/{workbook.year} - {sheet.name}")
            for row in sheet.rows:
                out.add_row(row.account_no, row.bank_name, row.beneficiary, row.basic_salary, row.extra_salary, row.note)
            sheets.append(out)

        return f"BangLuong_Thang{workbook.month}_{workbook.year}.xlsx", write_transfer_workbook(sheets)

    # ----- personnel -----

    def list_personnel(self) -> list[Personnel]:
        return list(self._personnel.list_all())

    def companies(self) -> list[str]:
        return sorted({p.company for p in self._personnel.list_all() if p.company})

    def find_personnel_by_name(self, name: str) -> Optional[Personnel]:
        key = (name or "").strip().lower()
        if not key:
            return None
        return next((p for p in self._personnel.list_all() if p.name.lower() == key), None)

    def add_personnel(self, **fields) -> Personnel:
        person = Personnel(
            personnel_id=new_id(),
            **{attr: str(fields.get(key) or "").strip() for key, attr in _PERSONNEL_FIELDS.items()},
        )
        self._personnel.save(person)
        return person

    def update_personnel(self, personnel_id: str, **fields) -> Personnel:
        current = self._personnel.get_by_id(personnel_id)
        if not current:
            raise NotFoundError("Nhân viên không tồn tại")
        changes = {attr: str(fields[key] or "").strip() for key, attr in _PERSONNEL_FIELDS.items() if key in fields}
        updated = replace(current, **changes)
        self._personnel.save(updated)
        return updated

    def delete_personnel(self, personnel_id: str) -> None:
        if not self._personnel.delete(personnel_id):
            raise NotFoundError("Nhân viên không tồn tại")

    def import_personnel_xlsx(self, content: bytes) -> list[Personnel]:
        """Nhập danh bạ từ sheet đầu tiên: Tên | Số TK | Ngân hàng | Công ty (bỏ dòng tiêu đề)."""
        try:
            df = pd.read_excel(io.BytesIO(content), sheet_name=0, header=None, engine="openpyxl")
        except Exception as e:
            logger.warning("Personnel import failed: %s", e)
            raise ValidationError("Có lỗi khi đọc file Excel.")

        people = []
        for values in df.iloc[1:].itertuples(index=False):
            cells = [_cell(v) for v in values] + ["", "", "", ""]
            if not cells[0]:
                continue
            people.append(
                Personnel(
                    personnel_id=new_id(),
                    name=cells[0].upper(),
                    account_no=cells[1],
                    bank_name=cells[2],
                    company=cells[3],
                )
            )

        if not people:
            raise ValidationError("Không tìm thấy dữ liệu hợp lệ trong file Excel.")

        self._personnel.add_many(people)
        logger.info("Imported %d personnel", len(people))
        return people
