"""Nạp dữ liệu mẫu (công trình, công nhật) và tài khoản demo Tuấn / Lực / Dũ."""

from __future__ import annotations

import importlib
from pathlib import Path

from config import get_settings_module

from src.labor_payroll.labor_payroll.database.bootstrap import DEMO_USERS, apply_seed_sql, ensure_demo_users


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(db_config, seed_path=seed_path)
    ensure_demo_users(
        db_config,
        admin_password=settings.DEMO_ADMIN_PASSWORD,
        user_password=settings.DEMO_USER_PASSWORD,
    )

    print(f"OK: seeded {db_config.get('database')} (users: {', '.join(u[0] for u in DEMO_USERS)})")


if __name__ == "__main__":
    main()
