from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import DEFAULT_BANK_NAME


def _amount(value) -> int:
    try:
        return int(round(float(value or 0)))
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class Personnel:
    """Danh bạ người thụ hưởng: tên, tài khoản, ngân hàng, công ty."""

    personnel_id: str
    name: str = ""
    account_no: str = ""
    bank_name: str = ""
    company: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.personnel_id,
            "name": self.name,
            "accountNo": self.account_no,
            "bankName": self.bank_name,
            "company": self.company,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Personnel":
        return cls(
            personnel_id=str(data["id"]),
            name=str(data.get("name") or ""),
            account_no=str(data.get("accountNo") or ""),
            bank_name=str(data.get("bankName") or ""),
            company=str(data.get("company") or ""),
        )


# The workbook is one JSON document per month, edited in place and saved whole.


@dataclass
class PaymentBatch:
    batch_id: str
    name: str
    date: str

    def to_dict(self) -> dict:
        return {"id": self.batch_id, "name": self.name, "date": self.date}

    @classmethod
    def from_dict(cls, data: dict) -> "PaymentBatch":
        return cls(batch_id=str(data["id"]), name=str(data.get("name") or ""), date=str(data.get("date") or ""))


@dataclass
class TransactionRow:
    row_id: str
    account_no: str = ""
    bank_name: str = DEFAULT_BANK_NAME
    beneficiary: str = ""
    basic_salary: int = 0
    extra_salary: int = 0
    note: str = ""
    payments: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.basic_salary + self.extra_salary

    @property
    def paid(self) -> int:
        return sum(self.payments.values())

    @property
    def remaining(self) -> int:
        return self.total - self.paid

    def to_dict(self) -> dict:
        return {
            "id": self.row_id,
            "accountNo": self.account_no,
            "bankName": self.bank_name,
            "beneficiary": self.beneficiary,
            "basicSalary": self.basic_salary,
            "extraSalary": self.extra_salary,
            "note": self.note,
            "payments": dict(self.payments),
            "total": self.total,
            "paid": self.paid,
            "remaining": self.remaining,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TransactionRow":
        return cls(
            row_id=str(data["id"]),
            account_no=str(data.get("accountNo") or ""),
            bank_name=str(data.get("bankName") or ""),
            beneficiary=str(data.get("beneficiary") or ""),
            basic_salary=_amount(data.get("basicSalary")),
            extra_salary=_amount(data.get("extraSalary")),
            note=str(data.get("note") or ""),
            payments={str(k): _amount(v) for k, v in (data.get("payments") or {}).items()},
        )


@dataclass
class Sheet:
    sheet_id: str
    name: str
    payment_batches: list[PaymentBatch] = field(default_factory=list)
    rows: list[TransactionRow] = field(default_factory=list)

    def find_row(self, row_id: str) -> Optional[TransactionRow]:
        return next((r for r in self.rows if r.row_id == row_id), None)

    def to_dict(self) -> dict:
        return {
            "id": self.sheet_id,
            "name": self.name,
            "paymentBatches": [b.to_dict() for b in self.payment_batches],
            "rows": [r.to_dict() for r in self.rows],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Sheet":
        return cls(
            sheet_id=str(data["id"]),
            name=str(data.get("name") or ""),
            payment_batches=[PaymentBatch.from_dict(b) for b in data.get("paymentBatches") or []],
            rows=[TransactionRow.from_dict(r) for r in data.get("rows") or []],
        )


@dataclass
class Workbook:
    """Bảng lương tháng: mỗi công ty một sheet chuyển khoản."""

    year: int
    month: int
    sheets: list[Sheet] = field(default_factory=list)

    def find_sheet(self, sheet_id: str) -> Optional[Sheet]:
        return next((s for s in self.sheets if s.sheet_id == sheet_id), None)

    def to_dict(self) -> dict:
        return {"year": self.year, "month": self.month, "sheets": [s.to_dict() for s in self.sheets]}

    @classmethod
    def from_dict(cls, data: dict) -> "Workbook":
        return cls(
            year=int(data["year"]),
            month=int(data["month"]),
            sheets=[Sheet.from_dict(s) for s in data.get("sheets") or []],
        )
