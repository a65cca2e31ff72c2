from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.web import current_actor, json_body, login_required, ok
from ..common.xlsx import XLSX_MIMETYPE
from ..container import Container
from ..core.exceptions import ValidationError

_PREFIX = "/api/workbooks/<int:year>/<int:month>"


def register(app: Flask, container: Container) -> None:
    service = container.workbook_service

    def _log(action: str, details: str) -> None:
        container.activity_service.record(current_actor(), action, details)

    @app.route(_PREFIX, methods=["GET"], endpoint="workbook_get")
    @login_required
    def workbook_get(year: int, month: int):
        return ok(service.get_workbook(year, month).to_dict())

    @app.route(f"{_PREFIX}/copy-previous", methods=["POST"], endpoint="workbook_copy_previous")
    @login_required
    def workbook_copy_previous(year: int, month: int):
        workbook = service.copy_from_previous_month(year, month)
        _log("Sao chép bảng lương", f"Sao chép dữ liệu tháng trước sang {month}/{year}")
        return ok(workbook.to_dict(), message="Sao chép thành công!")

    @app.route(f"{_PREFIX}/export", methods=["GET"], endpoint="workbook_export")
    @login_required
    def workbook_export(year: int, month: int):
        filename, content = service.export_workbook_xlsx(year, month)
        return send_file(io.BytesIO(content), mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)

    # ----- sheets -----

    @app.route(f"{_PREFIX}/sheets", methods=["POST"], endpoint="workbook_sheet_add")
    @login_required
    def workbook_sheet_add(year: int, month: int):
        sheet = service.add_sheet(year, month, json_body().get("name") or "")
        _log("Thêm sheet", f"Thêm sheet {sheet.name} tháng {month}/{year}")
        return ok(sheet.to_dict(), status=201)

    @app.route(f"{_PREFIX}/sheets/<sheet_id>", methods=["PUT"], endpoint="workbook_sheet_rename")
    @login_required
    def workbook_sheet_rename(year: int, month: int, sheet_id: str):
        sheet = service.rename_sheet(year, month, sheet_id, json_body().get("name") or "")
        return ok(sheet.to_dict())

    @app.route(f"{_PREFIX}/sheets/<sheet_id>", methods=["DELETE"], endpoint="workbook_sheet_delete")
    @login_required
    def workbook_sheet_delete(year: int, month: int, sheet_id: str):
        service.delete_sheet(year, month, sheet_id)
        _log("Xóa sheet", f"Xóa sheet tháng {month}/{year}")
        return ok(message="Đã xóa sheet.")

    # ----- rows -----

    @app.route(f"{_PREFIX}/sheets/<sheet_id>/rows", methods=["GET"], endpoint="workbook_rows_list")
    @login_required
    def workbook_rows_list(year: int, month: int, sheet_id: str):
        rows = service.list_rows(
            year,
            month,
            sheet_id,
            search=request.args.get("search", ""),
            company=request.args.get("company") or None,
        )
        return ok([r.to_dict() for r in rows])

    @app.route(f"{_PREFIX}/sheets/<sheet_id>/rows", methods=["POST"], endpoint="workbook_row_add")
    @login_required
    def workbook_row_add(year: int, month: int, sheet_id: str):
        return ok(service.add_row(year, month, sheet_id).to_dict(), status=201)

    @app.route(f"{_PREFIX}/sheets/<sheet_id>/rows/<row_id>", methods=["PATCH"], endpoint="workbook_row_update")
    @login_required
    def workbook_row_update(year: int, month: int, sheet_id: str, row_id: str):
        data = json_body()
        row = service.update_row(year, month, sheet_id, row_id, field=str(data.get("field") or ""), value=data.get("value"))
        return ok(row.to_dict())

    @app.route(f"{_PREFIX}/sheets/<sheet_id>/rows/<row_id>", methods=["DELETE"], endpoint="workbook_row_delete")
    @login_required
    def workbook_row_delete(year: int, month: int, sheet_id: str, row_id: str):
        service.delete_row(year, month, sheet_id, row_id)
        return ok(message="Đã xóa dòng.")

    @app.route(f"{_PREFIX}/sheets/<sheet_id>/rows/<row_id>/move", methods=["POST"], endpoint="workbook_row_move")
    @login_required
    def workbook_row_move(year: int, month: int, sheet_id: str, row_id: str):
        rows = service.move_row(year, month, sheet_id, row_id, json_body().get("direction") or "")
        return ok([r.to_dict() for r in rows])

    # ----- payment batches -----

    @app.route(f"{_PREFIX}/sheets/<sheet_id>/batches", methods=["POST"], endpoint="workbook_batch_add")
    @login_required
    def workbook_batch_add(year: int, month: int, sheet_id: str):
        batch = service.create_payment_batch(year, month, sheet_id, json_body().get("name") or "")
        _log("Tạo đợt chi trả", f"Tạo đợt chi trả {batch.name} tháng {month}/{year}")
        return ok(batch.to_dict(), status=201)

    @app.route(
        f"{_PREFIX}/sheets/<sheet_id>/rows/<row_id>/payments/<batch_id>",
        methods=["PUT"],
        endpoint="workbook_payment_set",
    )
    @login_required
    def workbook_payment_set(year: int, month: int, sheet_id: str, row_id: str, batch_id: str):
        row = service.set_payment(year, month, sheet_id, row_id, batch_id, json_body().get("amount"))
        return ok(row.to_dict())

    # ----- personnel -----

    @app.route("/api/personnel", methods=["GET"], endpoint="personnel_list")
    @login_required
    def personnel_list():
        return ok([p.to_dict() for p in service.list_personnel()])

    @app.route("/api/personnel/companies", methods=["GET"], endpoint="personnel_companies")
    @login_required
    def personnel_companies():
        return ok(service.companies())

    @app.route("/api/personnel", methods=["POST"], endpoint="personnel_create")
    @login_required
    def personnel_create():
        return ok(service.add_personnel(**json_body()).to_dict(), status=201)

    @app.route("/api/personnel/<personnel_id>", methods=["PUT"], endpoint="personnel_update")
    @login_required
    def personnel_update(personnel_id: str):
        return ok(service.update_personnel(personnel_id, **json_body()).to_dict())

    @app.route("/api/personnel/<personnel_id>", methods=["DELETE"], endpoint="personnel_delete")
    @login_required
    def personnel_delete(personnel_id: str):
        service.delete_personnel(personnel_id)
        return ok(message="Đã xóa nhân viên.")

    @app.route("/api/personnel/import", methods=["POST"], endpoint="personnel_import")
    @login_required
    def personnel_import():
        upload = request.files.get("file")
        if upload is None:
            raise ValidationError("Vui lòng chọn file Excel")
        people = service.import_personnel_xlsx(upload.read())
        _log("Nhập danh bạ", f"Nhập {len(people)} nhân viên từ Excel")
        return ok([p.to_dict() for p in people], message=f"Đã nhập thành công {len(people)} nhân viên!", status=201)
