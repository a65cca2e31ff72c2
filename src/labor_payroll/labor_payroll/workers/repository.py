from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Worker


class WorkerRepository(Protocol):
    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Worker]:
        raise NotImplementedError

    def save(self, worker: Worker) -> None:
        """Insert or update (last write wins)."""

        raise NotImplementedError

    def delete(self, worker_id: str) -> bool:
        raise NotImplementedError

    def replace_all(self, workers: Sequence[Worker]) -> None:
        raise NotImplementedError
