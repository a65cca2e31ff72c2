"""Ví dụ: dùng service layer (không qua Flask).

In bảng lương tuần hiện tại và công nợ toàn công ty.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.labor_payroll.labor_payroll.common.money import format_currency
from src.labor_payroll.labor_payroll.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    weekly = container.payroll_service.weekly_payroll(date.today())
    print(f"Tuần {weekly['weekStart']} -> {weekly['weekEnd']}: {format_currency(weekly['summary']['totalAmount'])}")
    for item in weekly["items"]:
        print(f"  {item['workerName']}: {item['totalShifts']} công, {format_currency(item['totalAmount'])}")

    debt = container.debt_service.debt_summary()
    print("Tổng công nợ:", format_currency(debt["totalCompanyDebt"]))


if __name__ == "__main__":
    main()
