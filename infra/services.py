from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from core.models import DEFAULT_PROJECT_NAME
from core.services.project import ProjectService
from core.services.scheduling import SchedulingEngine
from core.services.task import TaskService, TaskStore
from infra.db.repositories import SqlAlchemyProjectRepository


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    task_store: TaskStore
    task_service: TaskService
    project_service: ProjectService
    scheduling_engine: SchedulingEngine
    project_repo: SqlAlchemyProjectRepository

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "task_store": self.task_store,
            "task_service": self.task_service,
            "project_service": self.project_service,
            "scheduling_engine": self.scheduling_engine,
            "project_repo": self.project_repo,
        }


def build_service_graph(session: Session, project_name: str = DEFAULT_PROJECT_NAME) -> ServiceGraph:
    task_store = TaskStore(project_name=project_name)
    project_repo = SqlAlchemyProjectRepository(session)

    task_service = TaskService(task_store)
    project_service = ProjectService(session, project_repo, task_store)
    scheduling_engine = SchedulingEngine(task_store)

    return ServiceGraph(
        session=session,
        task_store=task_store,
        task_service=task_service,
        project_service=project_service,
        scheduling_engine=scheduling_engine,
        project_repo=project_repo,
    )
