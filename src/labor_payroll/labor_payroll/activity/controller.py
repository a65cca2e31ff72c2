from __future__ import annotations

from flask import Flask

from ..common.web import arg_int, login_required, ok
from ..container import Container
from ..core.constants import DEFAULT_LOG_LIMIT


def register(app: Flask, container: Container) -> None:
    @app.route("/api/logs", methods=["GET"], endpoint="activity_logs")
    @login_required
    def activity_logs():
        limit = arg_int("limit", DEFAULT_LOG_LIMIT)
        return ok(container.activity_service.list_recent(limit))
