from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    username: str
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username(str(username or "").strip())
        if not user or not user.is_active:
            logger.info("Login rejected for unknown/inactive user %r", username)
            raise AuthenticationError("Sai tài khoản hoặc mật khẩu")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Login rejected for %r: wrong password", username)
            raise AuthenticationError("Sai tài khoản hoặc mật khẩu")

        return SessionUser(
            user_id=user.user_id,
            username=user.username,
            full_name=user.full_name,
            role=user.role,
        )

    def list_login_choices(self) -> list[dict]:
        """Danh sách người dùng cho màn hình đăng nhập (không lộ mật khẩu)."""
        return [
            {"username": u.username, "name": u.full_name, "role": u.role.value}
            for u in self._users.list_all()
            if u.is_active
        ]
