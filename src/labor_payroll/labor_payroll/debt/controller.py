from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.money import format_currency
from ..common.web import current_actor, json_body, login_required, ok
from ..container import Container
from ..core.enums import TransactionType


def register(app: Flask, container: Container) -> None:
    @app.route("/api/debt", methods=["GET"], endpoint="debt_summary")
    @login_required
    def debt_summary():
        data = container.debt_service.debt_summary(
            project_id=request.args.get("project_id"),
            search=request.args.get("search"),
        )
        return ok(data)

    @app.route("/api/workers/<worker_id>/transactions", methods=["GET"], endpoint="worker_transactions")
    @login_required
    def worker_transactions(worker_id: str):
        container.worker_service.get(worker_id)
        return ok([t.to_dict() for t in container.debt_service.list_for_worker(worker_id)])

    @app.route("/api/transactions", methods=["POST"], endpoint="transactions_create")
    @login_required
    def transactions_create():
        data = json_body()
        tx_date = parse_iso_date(data["date"]) if data.get("date") else date.today()
        tx = container.debt_service.add_transaction(
            worker_id=str(data.get("workerId") or ""),
            tx_type=data.get("type"),
            amount=data.get("amount"),
            tx_date=tx_date,
            note=data.get("note"),
        )
        label = "Ứng" if tx.tx_type == TransactionType.ADVANCE else "Thanh toán"
        container.activity_service.record(current_actor(), "Giao dịch", f"{label} {format_currency(tx.amount)}")
        return ok(tx.to_dict(), status=201)
