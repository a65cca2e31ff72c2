from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Personnel, Workbook


class WorkbookRepository(Protocol):
    def get(self, year: int, month: int) -> Optional[Workbook]:
        raise NotImplementedError

    def save(self, workbook: Workbook) -> None:
        raise NotImplementedError


class PersonnelRepository(Protocol):
    def get_by_id(self, personnel_id: str) -> Optional[Personnel]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Personnel]:
        """In insertion order."""

        raise NotImplementedError

    def save(self, person: Personnel) -> None:
        raise NotImplementedError

    def add_many(self, people: Sequence[Personnel]) -> None:
        raise NotImplementedError

    def delete(self, personnel_id: str) -> bool:
        raise NotImplementedError
