from __future__ import annotations

from flask import Flask, session

from ..common.web import current_actor, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/users", methods=["GET"], endpoint="login_choices")
    def login_choices():
        return ok(container.auth_service.list_login_choices())

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))

        session["user_id"] = s_user.user_id
        session["username"] = s_user.username
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        container.activity_service.record(current_actor(), "Đăng nhập", "Đăng nhập vào hệ thống")
        return ok(
            {"user_id": s_user.user_id, "username": s_user.username, "name": s_user.full_name, "role": s_user.role.value},
            message="Đăng nhập thành công!",
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Đã đăng xuất hệ thống.")

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        actor = current_actor()
        return ok({"user_id": actor.user_id, "name": actor.name, "role": actor.role.value})
