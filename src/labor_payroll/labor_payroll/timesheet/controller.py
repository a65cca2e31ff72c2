from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import arg_date, current_actor, json_body, login_required, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .service import AttendanceEntry


def _opt_date(data: dict, key: str):
    value = data.get(key)
    return parse_iso_date(value) if value else None


def _entries(data: dict) -> list[AttendanceEntry]:
    raw = data.get("entries") or []
    if not isinstance(raw, list):
        raise ValidationError("Danh sách chấm công không hợp lệ")
    out = []
    for item in raw:
        if not isinstance(item, dict) or not item.get("workerId"):
            raise ValidationError("Danh sách chấm công không hợp lệ")
        out.append(
            AttendanceEntry(
                worker_id=str(item["workerId"]),
                shifts=item.get("shifts", 1),
                rate=item.get("rate"),
                note=item.get("note"),
            )
        )
    return out


def register(app: Flask, container: Container) -> None:
    def _log(action: str, details: str) -> None:
        container.activity_service.record(current_actor(), action, details)

    @app.route("/api/timesheet/roster", methods=["GET"], endpoint="timesheet_roster")
    @login_required
    def timesheet_roster():
        project_id = request.args.get("project_id") or ""
        if not project_id:
            raise ValidationError("Vui lòng chọn công trình")
        data = container.timesheet_service.roster(
            work_date=arg_date("date", date.today()),
            project_id=project_id,
            filter_by_project=request.args.get("filter", "1") != "0",
        )
        return ok(data)

    @app.route("/api/records", methods=["GET"], endpoint="records_list")
    @login_required
    def records_list():
        records = container.timesheet_service.list_records(
            start_date=arg_date("start"),
            end_date=arg_date("end"),
            worker_id=request.args.get("worker_id"),
            project_id=request.args.get("project_id"),
        )
        return ok([r.to_dict() for r in records])

    @app.route("/api/records", methods=["POST"], endpoint="records_create")
    @login_required
    def records_create():
        data = json_body()
        records = container.timesheet_service.record_attendance(
            project_id=str(data.get("projectId") or ""),
            entries=_entries(data),
            work_date=_opt_date(data, "date"),
            start_date=_opt_date(data, "startDate"),
            end_date=_opt_date(data, "endDate"),
        )
        _log("Chấm công", f"Thêm {len(records)} bản ghi chấm công")
        return ok([r.to_dict() for r in records], status=201)

    @app.route("/api/records/<record_id>", methods=["PUT"], endpoint="records_update")
    @login_required
    def records_update(record_id: str):
        data = json_body()
        record = container.timesheet_service.update_record(
            record_id,
            shifts=data.get("shifts"),
            rate_used=data.get("rateUsed"),
            note=data.get("note"),
        )
        _log("Sửa chấm công", f"Cập nhật bản ghi {record_id}")
        return ok(record.to_dict())

    @app.route("/api/records/<record_id>", methods=["DELETE"], endpoint="records_delete")
    @login_required
    def records_delete(record_id: str):
        container.timesheet_service.delete_record(record_id)
        _log("Xóa chấm công", f"Xóa bản ghi {record_id}")
        return ok(message="Đã xóa bản ghi chấm công.")
