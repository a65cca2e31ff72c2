from __future__ import annotations

from datetime import date

from flask import Flask

from ..common.web import arg_date, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard_summary")
    @login_required
    def dashboard_summary():
        return ok(container.dashboard_service.summary(arg_date("today", date.today())))
