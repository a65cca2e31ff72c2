from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .activity.controller import register as register_activity
from .backup.controller import register as register_backup
from .common.web import error_response, fail
from .container import Container, build_container
from .core.exceptions import DomainError
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .debt.controller import register as register_debt
from .payroll.controller import register as register_payroll
from .projects.controller import register as register_projects
from .timesheet.controller import register as register_timesheet
from .users.controller import register as register_users
from .workbook.controller import register as register_workbook
from .workers.controller import register as register_workers

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).resolve().parents[3]


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        return error_response(exc)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return fail(exc.description or exc.name, exc.code or 500)
        logger.exception("Unhandled error")
        return fail("Có lỗi xảy ra, vui lòng thử lại sau.", 500)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.permanent_session_lifetime = timedelta(days=7)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=_ROOT / "database" / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=_ROOT / "database" / "seed.sql")
            ensure_demo_users(
                db_config,
                admin_password=getattr(settings, "DEMO_ADMIN_PASSWORD"),
                user_password=getattr(settings, "DEMO_USER_PASSWORD"),
            )
            logger.info("Demo seed ready")

        container = build_container(db_config=db_config)

    _register_error_handlers(app)

    register_users(app, container)
    register_activity(app, container)
    register_projects(app, container)
    register_workers(app, container)
    register_timesheet(app, container)
    register_debt(app, container)
    register_payroll(app, container)
    register_dashboard(app, container)
    register_backup(app, container)
    register_workbook(app, container)

    return app
