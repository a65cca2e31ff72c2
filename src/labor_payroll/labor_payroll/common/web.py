"""Shared helpers for the JSON controllers."""

from __future__ import annotations

from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..users.model import Actor
from .datetime_utils import parse_iso_date

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def current_actor() -> Actor:
    return Actor(
        user_id=str(session.get("user_id")),
        name=session.get("name") or "",
        role=Role(session.get("role", Role.USER.value)),
    )


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def error_response(exc: DomainError):
    for exc_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, exc_type):
            return fail(str(exc), status)
    return fail(str(exc), 400)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Vui lòng đăng nhập để tiếp tục!", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Vui lòng đăng nhập để tiếp tục!", 401)
        if session.get("role") != Role.ADMIN.value:
            return fail("Bạn không có quyền", 403)
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Dữ liệu gửi lên phải là JSON")
    if not isinstance(data, dict):
        raise ValidationError("Dữ liệu gửi lên không hợp lệ")
    return data


def arg_date(name: str, default: Optional[date] = None) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        return default
    return parse_iso_date(value)


def arg_int(name: str, default: Optional[int] = None) -> Optional[int]:
    value = request.args.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Tham số {name} không hợp lệ")
