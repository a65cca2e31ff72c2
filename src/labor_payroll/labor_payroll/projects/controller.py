from __future__ import annotations

from flask import Flask, request

from ..common.web import current_actor, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _log(action: str, details: str) -> None:
        container.activity_service.record(current_actor(), action, details)

    @app.route("/api/projects", methods=["GET"], endpoint="projects_list")
    @login_required
    def projects_list():
        projects = container.project_service.list_projects(status=request.args.get("status"))
        return ok([p.to_dict() for p in projects])

    @app.route("/api/projects", methods=["POST"], endpoint="projects_create")
    @login_required
    def projects_create():
        data = json_body()
        project = container.project_service.create(
            name=data.get("name", ""),
            address=data.get("address", ""),
            standard_rate=data.get("standardRate"),
            double_rate=data.get("doubleRate"),
        )
        _log("Thêm công trình", f"Thêm công trình {project.name}")
        return ok(project.to_dict(), status=201)

    @app.route("/api/projects/<project_id>", methods=["GET"], endpoint="projects_get")
    @login_required
    def projects_get(project_id: str):
        return ok(container.project_service.get(project_id).to_dict())

    @app.route("/api/projects/<project_id>", methods=["PUT"], endpoint="projects_update")
    @login_required
    def projects_update(project_id: str):
        data = json_body()
        project = container.project_service.update(
            project_id,
            name=data.get("name", ""),
            address=data.get("address", ""),
            status=data.get("status"),
            standard_rate=data.get("standardRate"),
            double_rate=data.get("doubleRate"),
        )
        _log("Sửa công trình", f"Cập nhật công trình {project.name}")
        return ok(project.to_dict())

    @app.route("/api/projects/<project_id>", methods=["DELETE"], endpoint="projects_delete")
    @login_required
    def projects_delete(project_id: str):
        container.project_service.delete(project_id)
        _log("Xóa công trình", f"Xóa công trình ID {project_id}")
        return ok(message="Đã xóa công trình.")
