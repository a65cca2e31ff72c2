"""In-memory repositories used by the service and HTTP tests."""

from __future__ import annotations

from copy import deepcopy
from typing import Optional

from werkzeug.security import generate_password_hash

from src.labor_payroll.labor_payroll.container import Container, wire
from src.labor_payroll.labor_payroll.core.enums import Role
from src.labor_payroll.labor_payroll.users.model import User
from src.labor_payroll.labor_payroll.workbook.model import Workbook


class FakeUsersRepo:
    def __init__(self, users=()):
        self._users = {u.user_id: u for u in users}

    def get_by_id(self, user_id):
        return self._users.get(user_id)

    def get_by_username(self, username):
        return next((u for u in self._users.values() if u.username == username), None)

    def list_all(self):
        return list(self._users.values())


class _DictRepo:
    """Keyed store keeping insertion order; `key` names the id attribute."""

    key = ""

    def __init__(self, items=()):
        self._items = {getattr(i, self.key): i for i in items}

    def get_by_id(self, item_id):
        return self._items.get(item_id)

    def save(self, item):
        self._items[getattr(item, self.key)] = item

    def delete(self, item_id):
        return self._items.pop(item_id, None) is not None

    def replace_all(self, items):
        self._items = {getattr(i, self.key): i for i in items}


class FakeWorkersRepo(_DictRepo):
    key = "worker_id"

    def list_all(self):
        return list(self._items.values())


class FakeProjectsRepo(_DictRepo):
    key = "project_id"

    def list_all(self, *, status=None):
        return [p for p in self._items.values() if status is None or p.status == status]


class FakeRecordsRepo(_DictRepo):
    key = "record_id"

    def list_range(self, *, start_date=None, end_date=None, worker_id=None, project_id=None):
        out = []
        for r in self._items.values():
            if start_date and r.work_date < start_date:
                continue
            if end_date and r.work_date > end_date:
                continue
            if worker_id and r.worker_id != worker_id:
                continue
            if project_id and r.project_id != project_id:
                continue
            out.append(r)
        return out

    def count(self):
        return len(self._items)

    def add_many(self, records):
        for r in records:
            self._items[r.record_id] = r

    def update(self, record):
        if record.record_id not in self._items:
            return False
        self._items[record.record_id] = record
        return True


class FakeTransactionsRepo:
    def __init__(self, txs=()):
        self._txs = list(txs)

    def add(self, tx):
        self._txs.append(tx)

    def list_all(self, *, worker_id=None):
        return [t for t in self._txs if worker_id is None or t.worker_id == worker_id]

    def replace_all(self, txs):
        self._txs = list(txs)


class FakeBatchesRepo(_DictRepo):
    key = "batch_id"

    def list_all(self):
        return list(self._items.values())

    def list_by_month(self, year, month):
        return [b for b in self._items.values() if b.year == year and b.month == month]


class FakeLogsRepo:
    def __init__(self, logs=(), *, fail=False):
        self._logs = list(logs)
        self.fail = fail

    def add(self, log):
        if self.fail:
            raise RuntimeError("db down")
        self._logs.append(log)

    def list_recent(self, limit):
        return sorted(self._logs, key=lambda log: log.timestamp, reverse=True)[:limit]

    def list_all(self):
        return self.list_recent(len(self._logs))

    def replace_all(self, logs):
        self._logs = list(logs)


class FakeStorage:
    def __init__(self):
        self.saved: list[dict] = []

    def save(self, data):
        self.saved.append(deepcopy(data))

    def latest(self) -> Optional[dict]:
        return deepcopy(self.saved[-1]) if self.saved else None


class FakeWorkbooksRepo:
    def __init__(self):
        self._data: dict[tuple[int, int], dict] = {}

    def get(self, year, month):
        data = self._data.get((year, month))
        return Workbook.from_dict(data) if data else None

    def save(self, workbook):
        # Stored as JSON-like dicts so every read returns a fresh copy.
        self._data[(workbook.year, workbook.month)] = deepcopy(workbook.to_dict())


class FakePersonnelRepo(_DictRepo):
    key = "personnel_id"

    def list_all(self):
        return list(self._items.values())

    def add_many(self, people):
        for p in people:
            self.save(p)


DEMO_PASSWORD = "secret123"


def demo_users() -> list[User]:
    pw = generate_password_hash(DEMO_PASSWORD)
    return [
        User(user_id="u-admin", username="admin", full_name="Tuấn", password_hash=pw, role=Role.ADMIN),
        User(user_id="u-luc", username="luc", full_name="Lực", password_hash=pw, role=Role.USER),
    ]


def make_container(*, workers=(), projects=(), records=(), transactions=(), batches=()) -> Container:
    return wire(
        conn=None,
        users_repo=FakeUsersRepo(demo_users()),
        workers_repo=FakeWorkersRepo(workers),
        projects_repo=FakeProjectsRepo(projects),
        records_repo=FakeRecordsRepo(records),
        transactions_repo=FakeTransactionsRepo(transactions),
        batches_repo=FakeBatchesRepo(batches),
        logs_repo=FakeLogsRepo(),
        storage_repo=FakeStorage(),
        workbooks_repo=FakeWorkbooksRepo(),
        personnel_repo=FakePersonnelRepo(),
    )
