from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import ValidationError
from core.interfaces import ProjectRepository
from core.models import DEFAULT_PROJECT_NAME, SavedProjectInfo
from core.services.project.sample import SAMPLE_PROJECT_NAME, build_sample_project
from core.services.task.store import TaskStore

logger = logging.getLogger(__name__)


class ProjectService:
    """Binds the live task store to named projects saved in the database."""

    def __init__(
        self,
        session: Session,
        project_repo: ProjectRepository,
        task_store: TaskStore,
    ):
        self._session: Session = session
        self._project_repo: ProjectRepository = project_repo
        self._task_store: TaskStore = task_store

    @property
    def project_name(self) -> str:
        return self._task_store.project_name

    def rename_project(self, name: str) -> None:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Project name cannot be empty.", code="PROJECT_NAME_EMPTY")
        self._task_store.project_name = name
        domain_events.project_changed.emit(name)

    def new_project(self, name: str = DEFAULT_PROJECT_NAME) -> None:
        self._task_store.replace_all([], project_name=name)
        self._notify()

    def load_sample_project(self, start: Optional[date] = None) -> None:
        tasks = build_sample_project(start or date.today())
        self._task_store.replace_all(tasks, project_name=SAMPLE_PROJECT_NAME)
        self._notify()

    def save_project(self, name: Optional[str] = None) -> str:
        name = (name or self._task_store.project_name or "").strip()
        if not name:
            raise ValidationError("Project name cannot be empty.", code="PROJECT_NAME_EMPTY")
        try:
            self._project_repo.save(name, self._task_store.list_all())
            self._session.commit()
        except Exception as exc:
            self._session.rollback()
            logger.error(f"Error saving project '{name}': {exc}")
            raise
        self._task_store.project_name = name
        logger.info("Saved project '%s' with %d task(s)", name, self._task_store.count())
        return name

    def load_project(self, name: str) -> None:
        tasks = self._project_repo.load(name)
        self._task_store.replace_all(tasks, project_name=name)
        logger.info("Loaded project '%s' with %d task(s)", name, len(tasks))
        self._notify()

    def delete_saved_project(self, name: str) -> None:
        try:
            self._project_repo.delete(name)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Deleted saved project '%s'", name)

    def list_saved_projects(self) -> List[SavedProjectInfo]:
        return self._project_repo.list_projects()

    def load_last_project(self) -> Optional[str]:
        name = self._project_repo.last_saved_name()
        if name is not None:
            self.load_project(name)
        return name

    def _notify(self) -> None:
        domain_events.project_changed.emit(self._task_store.project_name)
        domain_events.tasks_changed.emit(self._task_store.project_name)


__all__ = ["ProjectService"]
