from __future__ import annotations

import io
from datetime import date

from flask import Flask, request, send_file

from ..common.web import arg_date, arg_int, current_actor, json_body, login_required, ok
from ..common.xlsx import XLSX_MIMETYPE
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _log(action: str, details: str) -> None:
        container.activity_service.record(current_actor(), action, details)

    @app.route("/api/payroll/monthly", methods=["GET"], endpoint="payroll_monthly")
    @login_required
    def payroll_monthly():
        today = date.today()
        data = container.payroll_service.monthly_overview(
            arg_int("year", today.year),
            arg_int("month", today.month),
        )
        return ok(data)

    @app.route("/api/payroll/weekly", methods=["GET"], endpoint="payroll_weekly")
    @login_required
    def payroll_weekly():
        return ok(container.payroll_service.weekly_payroll(arg_date("date", date.today())))

    @app.route("/api/batches", methods=["GET"], endpoint="batches_list")
    @login_required
    def batches_list():
        batches = container.batch_service.list_batches(year=arg_int("year"), month=arg_int("month"))
        return ok([b.to_dict(with_items=False) for b in batches])

    @app.route("/api/batches", methods=["POST"], endpoint="batches_create")
    @login_required
    def batches_create():
        data = json_body()
        today = date.today()
        batch = container.batch_service.create_batch(
            name=data.get("name") or "",
            year=data.get("year", today.year),
            month=data.get("month", today.month),
        )
        _log("Tạo đợt chi", f"Tạo đợt chi {batch.name} tháng {batch.month}/{batch.year}")
        return ok(batch.to_dict(), status=201)

    @app.route("/api/batches/<batch_id>", methods=["GET"], endpoint="batches_get")
    @login_required
    def batches_get(batch_id: str):
        return ok(container.batch_service.get_batch(batch_id).to_dict())

    @app.route("/api/batches/<batch_id>", methods=["PUT"], endpoint="batches_rename")
    @login_required
    def batches_rename(batch_id: str):
        batch = container.batch_service.rename_batch(batch_id, json_body().get("name") or "")
        _log("Sửa đợt chi", f"Đổi tên đợt chi thành {batch.name}")
        return ok(batch.to_dict())

    @app.route("/api/batches/<batch_id>", methods=["DELETE"], endpoint="batches_delete")
    @login_required
    def batches_delete(batch_id: str):
        batch = container.batch_service.delete_batch(batch_id)
        _log("Xóa đợt chi", f"Xóa đợt chi {batch.name}")
        return ok(message="Đã xóa đợt chi.")

    @app.route("/api/batches/<batch_id>/items", methods=["PATCH"], endpoint="batches_update_item")
    @login_required
    def batches_update_item(batch_id: str):
        data = json_body()
        batch = container.batch_service.update_item(
            batch_id,
            worker_id=str(data.get("workerId") or ""),
            project_id=str(data.get("projectId") or ""),
            field=str(data.get("field") or ""),
            value=data.get("value"),
        )
        return ok(batch.to_dict())

    @app.route("/api/batches/<batch_id>/items", methods=["POST"], endpoint="batches_add_item")
    @login_required
    def batches_add_item(batch_id: str):
        data = json_body()
        batch = container.batch_service.add_item(
            batch_id,
            worker_id=str(data.get("workerId") or ""),
            project_id=str(data.get("projectId") or ""),
        )
        return ok(batch.to_dict(), status=201)

    @app.route("/api/batches/<batch_id>/items", methods=["DELETE"], endpoint="batches_remove_item")
    @login_required
    def batches_remove_item(batch_id: str):
        batch = container.batch_service.remove_item(
            batch_id,
            worker_id=request.args.get("worker_id") or "",
            project_id=request.args.get("project_id") or "",
        )
        return ok(batch.to_dict())

    @app.route("/api/batches/<batch_id>/export", methods=["GET"], endpoint="batches_export")
    @login_required
    def batches_export(batch_id: str):
        filename, content = container.batch_service.export_batch_xlsx(batch_id)
        return send_file(
            io.BytesIO(content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=filename,
        )
