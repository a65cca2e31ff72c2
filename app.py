"""Chạy server phát triển: `python app.py` (cấu hình theo APP_ENV, xem config/)."""

import os

from src.labor_payroll.labor_payroll.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")))
