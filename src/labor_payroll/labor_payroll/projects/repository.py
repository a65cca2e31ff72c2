from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ProjectStatus
from .model import Project


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: str) -> Optional[Project]:
        raise NotImplementedError

    def list_all(self, *, status: Optional[ProjectStatus] = None) -> Sequence[Project]:
        raise NotImplementedError

    def save(self, project: Project) -> None:
        """Insert or update (last write wins)."""

        raise NotImplementedError

    def delete(self, project_id: str) -> bool:
        raise NotImplementedError

    def replace_all(self, projects: Sequence[Project]) -> None:
        raise NotImplementedError
