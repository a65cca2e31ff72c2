"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Tuần lương kết thúc vào thứ Năm (Monday=0 ... Thursday=3).
PAYROLL_WEEK_END_WEEKDAY = 3

DASHBOARD_DAYS = 7
DEFAULT_LOG_LIMIT = 200

SHIFT_STEP = 0.5
MAX_SHIFTS_PER_RECORD = 3

BACKUP_VERSION = "1.0"

# Excel giới hạn tên sheet 31 ký tự.
SHEET_NAME_MAX = 30
UNKNOWN_PROJECT_LABEL = "Khác"
DEFAULT_BANK_NAME = "MB"
