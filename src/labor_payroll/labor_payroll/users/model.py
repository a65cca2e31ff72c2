from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Thực thể miền (domain): tài khoản đăng nhập hệ thống.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    """

    user_id: str
    username: str
    full_name: str
    password_hash: str
    role: Role
    is_active: bool = True


@dataclass(frozen=True)
class Actor:
    """Người đang thao tác (lấy từ session), dùng cho phân quyền và nhật ký."""

    user_id: str
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
