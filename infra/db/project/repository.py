from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.interfaces import ProjectRepository
from core.models import SavedProjectInfo, Task, generate_id
from infra.db.models import ProjectORM, TaskORM
from infra.db.project.mapper import task_from_orm, task_to_orm


class SqlAlchemyProjectRepository(ProjectRepository):
    def __init__(self, session: Session):
        self.session = session

    def _get_by_name(self, name: str) -> Optional[ProjectORM]:
        stmt = select(ProjectORM).where(ProjectORM.name == name)
        return self.session.execute(stmt).scalars().first()

    def save(self, name: str, tasks: List[Task]) -> None:
        """Replace whatever was saved under ``name`` with ``tasks``."""
        existing = self._get_by_name(name)
        if existing is not None:
            self.session.delete(existing)
            self.session.flush()

        project = ProjectORM(id=generate_id("P"), name=name, saved_at=datetime.now())
        project.tasks = [task_to_orm(t, project.id, i) for i, t in enumerate(tasks)]
        self.session.add(project)
        self.session.flush()

    def load(self, name: str) -> List[Task]:
        project = self._get_by_name(name)
        if project is None:
            raise NotFoundError(f'Project "{name}" not found', code="PROJECT_NOT_FOUND")
        return [task_from_orm(row) for row in project.tasks]

    def delete(self, name: str) -> None:
        project = self._get_by_name(name)
        if project is None:
            raise NotFoundError(f'Project "{name}" not found', code="PROJECT_NOT_FOUND")
        self.session.delete(project)
        self.session.flush()

    def list_projects(self) -> List[SavedProjectInfo]:
        stmt = (
            select(ProjectORM.name, ProjectORM.saved_at, func.count(TaskORM.row_id))
            .outerjoin(TaskORM, TaskORM.project_id == ProjectORM.id)
            .group_by(ProjectORM.id)
            .order_by(ProjectORM.saved_at.desc(), ProjectORM.name)
        )
        rows = self.session.execute(stmt).all()
        return [
            SavedProjectInfo(name=name, saved_at=saved_at, task_count=count)
            for name, saved_at, count in rows
        ]

    def last_saved_name(self) -> Optional[str]:
        stmt = select(ProjectORM.name).order_by(ProjectORM.saved_at.desc()).limit(1)
        return self.session.execute(stmt).scalars().first()
