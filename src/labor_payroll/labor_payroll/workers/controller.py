from __future__ import annotations

from flask import Flask, request

from ..common.web import current_actor, json_body, login_required, ok
from ..container import Container

# JSON key -> WorkerService field
_FIELDS = {
    "name": "name",
    "role": "role",
    "dailyRate": "daily_rate",
    "rate1Cong": "rate_1_cong",
    "rate2Cong": "rate_2_cong",
    "currentProjectId": "current_project_id",
    "identityCardNumber": "identity_card_number",
    "phone": "phone",
    "bankAccount": "bank_account",
    "bankName": "bank_name",
}


def _fields(data: dict) -> dict:
    return {field: data.get(key) for key, field in _FIELDS.items()}


def register(app: Flask, container: Container) -> None:
    def _log(action: str, details: str) -> None:
        container.activity_service.record(current_actor(), action, details)

    @app.route("/api/workers", methods=["GET"], endpoint="workers_list")
    @login_required
    def workers_list():
        workers = container.worker_service.list_workers(
            search=request.args.get("search"),
            project_id=request.args.get("project_id"),
        )
        return ok([w.to_dict() for w in workers])

    @app.route("/api/workers", methods=["POST"], endpoint="workers_create")
    @login_required
    def workers_create():
        worker = container.worker_service.create(**_fields(json_body()))
        _log("Thêm công nhật", f"Thêm công nhật {worker.name}")
        return ok(worker.to_dict(), status=201)

    @app.route("/api/workers/<worker_id>", methods=["GET"], endpoint="workers_get")
    @login_required
    def workers_get(worker_id: str):
        return ok(container.worker_service.get(worker_id).to_dict())

    @app.route("/api/workers/<worker_id>", methods=["PUT"], endpoint="workers_update")
    @login_required
    def workers_update(worker_id: str):
        worker = container.worker_service.update(worker_id, **_fields(json_body()))
        _log("Sửa công nhật", f"Cập nhật công nhật {worker.name}")
        return ok(worker.to_dict())

    @app.route("/api/workers/<worker_id>", methods=["DELETE"], endpoint="workers_delete")
    @login_required
    def workers_delete(worker_id: str):
        container.worker_service.delete(worker_id)
        _log("Xóa công nhật", f"Xóa công nhật ID {worker_id}")
        return ok(message="Đã xóa công nhật.")
