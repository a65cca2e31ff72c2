from __future__ import annotations

import logging
from typing import Optional

from ..common.ids import new_id
from ..common.validators import optional_rate, require_non_empty
from ..core.enums import ProjectStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Project
from .repository import ProjectRepository

logger = logging.getLogger(__name__)


def _parse_status(value) -> ProjectStatus:
    if isinstance(value, ProjectStatus):
        return value
    try:
        return ProjectStatus(value or ProjectStatus.ACTIVE.value)
    except ValueError:
        raise ValidationError("Trạng thái công trình không hợp lệ")


class ProjectService:
    def __init__(self, projects: ProjectRepository):
        self._projects = projects

    def list_projects(self, *, status: Optional[str] = None) -> list[Project]:
        status_enum = _parse_status(status) if status else None
        return list(self._projects.list_all(status=status_enum))

    def get(self, project_id: str) -> Project:
        project = self._projects.get_by_id(project_id)
        if not project:
            raise NotFoundError("Công trình không tồn tại")
        return project

    def create(
        self,
        *,
        name: str,
        address: str = "",
        standard_rate=None,
        double_rate=None,
    ) -> Project:
        project = Project(
            project_id=new_id(),
            name=require_non_empty(name, "Tên công trình"),
            address=str(address or "").strip(),
            status=ProjectStatus.ACTIVE,
            standard_rate=optional_rate(standard_rate, "Đơn giá 1 công"),
            double_rate=optional_rate(double_rate, "Đơn giá 2 công"),
        )
        self._projects.save(project)
        logger.info("Project created: %s (%s)", project.name, project.project_id)
        return project

    def update(
        self,
        project_id: str,
        *,
        name: str,
        address: str = "",
        status=None,
        standard_rate=None,
        double_rate=None,
    ) -> Project:
        current = self.get(project_id)
        project = Project(
            project_id=current.project_id,
            name=require_non_empty(name, "Tên công trình"),
            address=str(address or "").strip(),
            status=_parse_status(status) if status else current.status,
            standard_rate=optional_rate(standard_rate, "Đơn giá 1 công"),
            double_rate=optional_rate(double_rate, "Đơn giá 2 công"),
        )
        self._projects.save(project)
        logger.info("Project updated: %s (%s)", project.name, project.project_id)
        return project

    def delete(self, project_id: str) -> None:
        if not self._projects.delete(project_id):
            raise NotFoundError("Công trình không tồn tại")
        logger.info("Project deleted: %s", project_id)
