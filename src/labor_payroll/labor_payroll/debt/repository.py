from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Transaction


class TransactionRepository(Protocol):
    def add(self, tx: Transaction) -> None:
        raise NotImplementedError

    def list_all(self, *, worker_id: Optional[str] = None) -> Sequence[Transaction]:
        raise NotImplementedError

    def replace_all(self, transactions: Sequence[Transaction]) -> None:
        raise NotImplementedError
