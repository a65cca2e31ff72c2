from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Vai trò người dùng dùng cho phân quyền."""

    ADMIN = "admin"
    USER = "user"


class ProjectStatus(str, Enum):
    """Trạng thái công trình."""

    ACTIVE = "active"
    COMPLETED = "completed"


class TransactionType(str, Enum):
    """Loại giao dịch công nợ: ứng lương hoặc thanh toán."""

    ADVANCE = "advance"
    PAYMENT = "payment"


class MoveDirection(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
