"""Sao lưu / phục hồi dữ liệu dạng JSON (cùng định dạng với nút "Sao lưu" trên API).

    python -m scripts.backup                 # ghi backups/tt_backup_<ngày>.json
    python -m scripts.backup restore FILE    # phục hồi (ghi đè toàn bộ dữ liệu)
"""

from __future__ import annotations

import argparse
import importlib
import json
from pathlib import Path

from config import get_settings_module

from src.labor_payroll.labor_payroll.container import build_container
from src.labor_payroll.labor_payroll.core.enums import Role
from src.labor_payroll.labor_payroll.users.model import Actor


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("action", nargs="?", choices=("export", "restore"), default="export")
    parser.add_argument("file", nargs="?")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    if args.action == "restore":
        if not args.file:
            raise SystemExit("Thiếu đường dẫn file backup.")
        data = json.loads(Path(args.file).read_text(encoding="utf-8"))
        actor = Actor(user_id="script", name="scripts/backup.py", role=Role.ADMIN)
        counts = container.backup_service.restore(data, actor)
        print(f"OK: restored {counts}")
        return

    snapshot = container.backup_service.export_snapshot()
    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / f"tt_backup_{snapshot['exportDate'][:10]}.json"
    out_file.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
