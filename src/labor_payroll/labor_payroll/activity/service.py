from __future__ import annotations

import logging
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..users.model import Actor
from ..core.constants import DEFAULT_LOG_LIMIT
from .model import ActivityLog
from .repository import ActivityLogRepository

logger = logging.getLogger(__name__)


class ActivityLogService:
    def __init__(self, logs: ActivityLogRepository, *, clock: Optional[Callable] = None):
        self._logs = logs
        self._clock = clock or now_local

    def record(self, actor: Actor, action: str, details: str) -> Optional[ActivityLog]:
        """Ghi nhật ký. Lỗi ghi nhật ký không làm hỏng thao tác chính."""
        log = ActivityLog(
            log_id=new_id(),
            user_id=actor.user_id,
            user_name=actor.name,
            action=action,
            details=details,
            timestamp=self._clock(),
        )
        try:
            self._logs.add(log)
        except Exception:
            logger.exception("Log failed: %s - %s", action, details)
            return None
        return log

    def list_recent(self, limit: int = DEFAULT_LOG_LIMIT) -> list[dict]:
        limit = max(1, min(int(limit), 1000))
        return [log.to_dict() for log in self._logs.list_recent(limit)]
