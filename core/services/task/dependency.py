from __future__ import annotations

import logging
from typing import Union

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.models import DependencyType, TaskDependency
from core.services.task.store import TaskStore

logger = logging.getLogger(__name__)


class TaskDependencyMixin:
    _task_repo: TaskStore

    def add_dependency(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: Union[DependencyType, str] = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> TaskDependency:
        self._validate_not_self_dependency(predecessor_id, successor_id)
        dep_type = self._validate_dependency_type(dependency_type)

        if not self._task_repo.get(predecessor_id):
            raise NotFoundError("Predecessor task not found.", code="TASK_NOT_FOUND")
        successor = self._task_repo.get(successor_id)
        if not successor:
            raise NotFoundError("Successor task not found.", code="TASK_NOT_FOUND")

        proposed = TaskDependency(
            predecessor_task_id=predecessor_id,
            dependency_type=dep_type,
            lag_days=int(lag_days),
        )
        self._check_no_circular_dependency(successor, proposed)

        dep = successor.add_predecessor(predecessor_id, dep_type, int(lag_days))
        if dep is None:
            raise ValidationError(
                "The selected predecessor->successor relationship already exists.",
                code="DEPENDENCY_DUPLICATE",
            )
        logger.info(
            "Added dependency %s -> %s (%s, lag %s)",
            predecessor_id, successor_id, dep_type.value, dep.lag_days,
        )
        domain_events.tasks_changed.emit(self._task_repo.project_name)
        return dep

    def remove_dependency(
        self,
        predecessor_id: str,
        successor_id: str,
        dependency_type: Union[DependencyType, str, None] = None,
    ) -> int:
        successor = self._task_repo.get(successor_id)
        if not successor:
            raise NotFoundError("Successor task not found.", code="TASK_NOT_FOUND")
        removed = successor.remove_predecessor(predecessor_id, dependency_type)
        if not removed:
            raise NotFoundError("Dependency not found.", code="DEPENDENCY_NOT_FOUND")
        logger.info("Removed %d dependency link(s) %s -> %s", removed, predecessor_id, successor_id)
        domain_events.tasks_changed.emit(self._task_repo.project_name)
        return removed

    def list_dependencies(self, successor_id: str) -> list[TaskDependency]:
        successor = self._task_repo.get(successor_id)
        if not successor:
            raise NotFoundError("Task not found.", code="TASK_NOT_FOUND")
        return list(successor.predecessors)

    def get_successor_ids(self, task_id: str) -> list[str]:
        result: list[str] = []
        for task in self._task_repo.list_all():
            if any(d.predecessor_task_id == task_id for d in task.predecessors):
                result.append(task.id)
        return result

