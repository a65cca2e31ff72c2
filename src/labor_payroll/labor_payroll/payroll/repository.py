from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayrollBatch


class PayrollBatchRepository(Protocol):
    def get_by_id(self, batch_id: str) -> Optional[PayrollBatch]:
        raise NotImplementedError

    def list_by_month(self, year: int, month: int) -> Sequence[PayrollBatch]:
        raise NotImplementedError

    def list_all(self) -> Sequence[PayrollBatch]:
        raise NotImplementedError

    def save(self, batch: PayrollBatch) -> None:
        """Upsert the batch header and replace its items, keeping item order."""

        raise NotImplementedError

    def delete(self, batch_id: str) -> bool:
        raise NotImplementedError

    def replace_all(self, batches: Sequence[PayrollBatch]) -> None:
        raise NotImplementedError
