from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Optional

from ..common.ids import new_id
from ..common.validators import require_positive
from ..core.enums import TransactionType
from ..core.exceptions import NotFoundError, ValidationError
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..timesheet.repository import TimeRecordRepository
from ..workers.repository import WorkerRepository
from .model import Transaction, WorkerDebt
from .repository import TransactionRepository

logger = logging.getLogger(__name__)


class DebtService:
    """Công nợ & ứng lương."""

    def __init__(
        self,
        transactions: TransactionRepository,
        records: TimeRecordRepository,
        workers: WorkerRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._transactions = transactions
        self._records = records
        self._workers = workers
        self._calculator = calculator or StandardPayrollCalculator()

    def add_transaction(
        self,
        *,
        worker_id: str,
        tx_type,
        amount,
        tx_date: date,
        note: Optional[str] = None,
    ) -> Transaction:
        if not self._workers.get_by_id(worker_id):
            raise NotFoundError("Công nhật không tồn tại")

        try:
            tx_type = TransactionType(tx_type)
        except ValueError:
            raise ValidationError("Loại giao dịch không hợp lệ")

        tx = Transaction(
            transaction_id=new_id(),
            worker_id=worker_id,
            tx_type=tx_type,
            amount=require_positive(amount, "Số tiền"),
            tx_date=tx_date,
            note=str(note or "").strip() or None,
        )
        self._transactions.add(tx)
        logger.info("Transaction %s %s for worker %s: %d", tx.transaction_id, tx.tx_type.value, worker_id, tx.amount)
        return tx

    def list_for_worker(self, worker_id: str) -> list[Transaction]:
        txs = list(self._transactions.list_all(worker_id=worker_id))
        txs.sort(key=lambda t: t.tx_date, reverse=True)
        return txs

    def debt_summary(self, *, project_id: Optional[str] = None, search: Optional[str] = None) -> dict:
        """Công nợ lũy kế từng công nhật và tổng công nợ công ty.

        Lọc theo công trình hiện tại của công nhật và theo tên.
        """
        workers = list(self._workers.list_all())
        if project_id:
            workers = [w for w in workers if w.current_project_id == project_id]
        if search:
            needle = search.strip().lower()
            workers = [w for w in workers if needle in w.name.lower()]

        earned: dict[str, int] = defaultdict(int)
        for rec in self._records.list_range():
            earned[rec.worker_id] += self._calculator.record_amount(rec)

        advanced: dict[str, int] = defaultdict(int)
        paid: dict[str, int] = defaultdict(int)
        for tx in self._transactions.list_all():
            if tx.tx_type == TransactionType.ADVANCE:
                advanced[tx.worker_id] += tx.amount
            else:
                paid[tx.worker_id] += tx.amount

        rows = [
            WorkerDebt(
                worker_id=w.worker_id,
                worker_name=w.name,
                total_earned=earned[w.worker_id],
                total_advanced=advanced[w.worker_id],
                total_paid=paid[w.worker_id],
            )
            for w in workers
        ]

        return {
            "items": [r.to_dict() for r in rows],
            "totalCompanyDebt": sum(r.remaining_debt for r in rows),
        }
