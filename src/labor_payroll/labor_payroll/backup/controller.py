from __future__ import annotations

import io
import json

from flask import Flask, request, send_file

from ..common.web import admin_required, current_actor, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/backup/export", methods=["GET"], endpoint="backup_export")
    @login_required
    def backup_export():
        snapshot = container.backup_service.export_snapshot()
        content = json.dumps(snapshot, ensure_ascii=False, indent=2).encode("utf-8")
        filename = f"tt_backup_{snapshot['exportDate'][:10]}.json"
        container.activity_service.record(current_actor(), "Sao lưu dữ liệu", "Tải file backup")
        return send_file(
            io.BytesIO(content),
            mimetype="application/json",
            as_attachment=True,
            download_name=filename,
        )

    @app.route("/api/backup/restore", methods=["POST"], endpoint="backup_restore")
    @admin_required
    def backup_restore():
        upload = request.files.get("file")
        if upload is not None:
            try:
                data = json.loads(upload.read().decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError):
                raise ValidationError("File sao lưu không phải JSON hợp lệ")
        else:
            data = request.get_json(silent=True)
        counts = container.backup_service.restore(data, current_actor())
        return ok(counts, message="Phục hồi dữ liệu thành công!")

    @app.route("/api/storage", methods=["GET"], endpoint="storage_get")
    @login_required
    def storage_get():
        return ok(container.backup_service.latest_snapshot() or {})

    @app.route("/api/storage", methods=["POST"], endpoint="storage_save")
    @login_required
    def storage_save():
        container.backup_service.save_snapshot(json_body())
        return ok(message="Đã lưu dữ liệu.")
