from datetime import date

import pytest

from src.labor_payroll.labor_payroll.common.datetime_utils import (
    iter_dates,
    month_range,
    parse_iso_date,
    payroll_week_end,
    payroll_week_range,
    previous_month,
    short_label,
)
from src.labor_payroll.labor_payroll.common.money import format_currency, format_number, line_amount, parse_number
from src.labor_payroll.labor_payroll.common.validators import (
    require_non_empty,
    require_non_negative,
    require_positive,
    require_shifts,
)
from src.labor_payroll.labor_payroll.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "day, expected_end",
    [
        (date(2024, 5, 9), date(2024, 5, 9)),  # Thursday closes its own week
        (date(2024, 5, 6), date(2024, 5, 9)),  # Monday
        (date(2024, 5, 10), date(2024, 5, 16)),  # Friday rolls forward
        (date(2024, 5, 11), date(2024, 5, 16)),  # Saturday rolls forward
        (date(2024, 5, 12), date(2024, 5, 16)),  # Sunday
    ],
)
def test_payroll_week_end_is_thursday(day, expected_end):
    assert payroll_week_end(day) == expected_end


def test_payroll_week_range_runs_friday_to_thursday():
    start, end = payroll_week_range(date(2024, 5, 13))
    assert (start, end) == (date(2024, 5, 10), date(2024, 5, 16))
    assert start.weekday() == 4 and end.weekday() == 3


def test_month_range_handles_leap_february():
    assert month_range(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    with pytest.raises(ValidationError):
        month_range(2024, 13)


def test_previous_month_wraps_year():
    assert previous_month(2025, 1) == (2024, 12)
    assert previous_month(2025, 7) == (2025, 6)


def test_iter_dates_is_inclusive_and_rejects_reversed_range():
    assert list(iter_dates(date(2024, 1, 30), date(2024, 2, 1))) == [
        date(2024, 1, 30),
        date(2024, 1, 31),
        date(2024, 2, 1),
    ]
    with pytest.raises(ValidationError):
        list(iter_dates(date(2024, 2, 2), date(2024, 2, 1)))


def test_parse_iso_date_accepts_timestamps_and_rejects_garbage():
    assert parse_iso_date("2024-03-05T10:00:00.000Z") == date(2024, 3, 5)
    with pytest.raises(ValidationError):
        parse_iso_date("05/03/2024")
    with pytest.raises(ValidationError):
        parse_iso_date("2024-05-13xyz")
    with pytest.raises(ValidationError):
        parse_iso_date(20240513)
    with pytest.raises(ValidationError):
        parse_iso_date(None)


def test_short_label():
    assert short_label(date(2024, 3, 5)) == "5/3"


def test_money_formatting():
    assert format_number(1234567) == "1.234.567"
    assert format_number(0) == ""
    assert format_currency(500000) == "500.000 ₫"
    assert format_currency(0) == "0 ₫"
    assert parse_number("1.500.000") == 1500000
    assert parse_number("") == 0
    with pytest.raises(ValidationError):
        parse_number("abc")


def test_line_amount_rounds_to_integer_vnd():
    assert line_amount(1.5, 350000) == 525000
    assert line_amount(0.5, 333333) == 166666


@pytest.mark.parametrize("value", [0.5, 1, 1.5, 2, 3, "2"])
def test_require_shifts_accepts_half_steps(value):
    assert require_shifts(value) == float(value)


@pytest.mark.parametrize("value", [0, -1, 0.3, 3.5, "x", None])
def test_require_shifts_rejects_invalid(value):
    with pytest.raises(ValidationError):
        require_shifts(value)


def test_amount_validators():
    assert require_non_negative("", "Số tiền") == 0
    assert require_non_negative("1500.4", "Số tiền") == 1500
    with pytest.raises(ValidationError):
        require_non_negative(-1, "Số tiền")
    with pytest.raises(ValidationError):
        require_positive(0, "Số tiền")


@pytest.mark.parametrize("value", [None, "", "   ", 123, ["An"]])
def test_require_non_empty_rejects_blank_and_non_text(value):
    with pytest.raises(ValidationError):
        require_non_empty(value, "Tên")


def test_require_non_empty_strips():
    assert require_non_empty("  An ", "Tên") == "An"
