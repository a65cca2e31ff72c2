"""Excel export helpers (pandas + openpyxl)."""

from __future__ import annotations

import io
import re
from dataclasses import dataclass, field
from typing import Sequence

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ..core.constants import SHEET_NAME_MAX

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

TITLE = "DANH SÁCH GIAO DỊCH (LIST OF TRANSACTIONS)"

TRANSFER_HEADERS = [
    "STT (Ord. No.)",
    "Số tài khoản MB (Account No.)",
    "Ngân hàng thụ hưởng",
    "Tên đơn vị thụ hưởng (Beneficiary)",
    "Lương cơ bản",
    "Lương ngoài",
    "Số tiền (Amount)",
    "Chi tiết thanh toán (Payment Detail)",
]

TRANSFER_WIDTHS = [8, 20, 15, 30, 15, 15, 15, 30]

_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")


@dataclass
class TransferSheet:
    """Một sheet "danh sách giao dịch": tiêu đề, các dòng chuyển khoản, dòng tổng."""

    name: str
    subtitle: str
    rows: list[list] = field(default_factory=list)

    def add_row(self, account_no: str, bank_name: str, beneficiary: str, basic: int, extra: int, note: str) -> None:
        self.rows.append(
            [
                len(self.rows) + 1,
                account_no or "",
                bank_name or "",
                (beneficiary or "").upper(),
                int(basic),
                int(extra),
                int(basic) + int(extra),
                note or "",
            ]
        )

    @property
    def total(self) -> int:
        return sum(int(r[6]) for r in self.rows)

    def as_matrix(self) -> list[list]:
        matrix: list[list] = [[TITLE], [self.subtitle], [], list(TRANSFER_HEADERS)]
        matrix.extend(self.rows)
        matrix.append(["", "", "", "TỔNG CỘNG:", "", "", self.total, ""])
        return matrix


def safe_sheet_name(name: str, used: set[str]) -> str:
    base = _INVALID_SHEET_CHARS.sub(" ", name or "").strip()[:SHEET_NAME_MAX] or "Sheet"
    candidate = base
    n = 2
    while candidate.lower() in used:
        suffix = f" ({n})"
        candidate = base[: SHEET_NAME_MAX - len(suffix)] + suffix
        n += 1
    used.add(candidate.lower())
    return candidate


def write_transfer_workbook(sheets: Sequence[TransferSheet]) -> bytes:
    out = io.BytesIO()
    used: set[str] = set()

    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        for sheet in sheets:
            sheet_name = safe_sheet_name(sheet.name, used)
            df = pd.DataFrame(sheet.as_matrix())
            df.to_excel(writer, sheet_name=sheet_name, index=False, header=False)

            ws = writer.sheets[sheet_name]
            for idx, width in enumerate(TRANSFER_WIDTHS, start=1):
                ws.column_dimensions[get_column_letter(idx)].width = width
            ws["A1"].font = Font(bold=True, size=13)
            for cell in ws[4]:
                cell.font = Font(bold=True)

    return out.getvalue()
