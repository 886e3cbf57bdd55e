from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from core.exceptions import NotFoundError, ValidationError
from core.interfaces import TaskRepository
from core.models import DEFAULT_PROJECT_NAME, Task

logger = logging.getLogger(__name__)


class TaskStore(TaskRepository):
    """In-memory task collection; iteration order is insertion order."""

    def __init__(self, project_name: str = DEFAULT_PROJECT_NAME):
        self._tasks: Dict[str, Task] = {}
        self.project_name: str = project_name

    def add(self, task: Task) -> None:
        if task.id in self._tasks:
            raise ValidationError(
                f"Task with ID {task.id} already exists", code="TASK_DUPLICATE_ID"
            )
        self._tasks[task.id] = task

    def get(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    def list_all(self) -> List[Task]:
        return list(self._tasks.values())

    def remove(self, task_id: str) -> None:
        if task_id not in self._tasks:
            raise NotFoundError(f"Task with ID {task_id} not found", code="TASK_NOT_FOUND")
        del self._tasks[task_id]
        for task in self._tasks.values():
            task.remove_predecessor(task_id)

    def clear(self) -> None:
        self._tasks.clear()
        self.project_name = DEFAULT_PROJECT_NAME

    def count(self) -> int:
        return len(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    def replace_all(self, tasks: Iterable[Task], project_name: str | None = None) -> None:
        """Swap the whole collection, e.g. after loading or importing a project."""
        incoming: Dict[str, Task] = {}
        for task in tasks:
            if task.id in incoming:
                raise ValidationError(
                    f"Task with ID {task.id} already exists", code="TASK_DUPLICATE_ID"
                )
            incoming[task.id] = task
        self._tasks = incoming
        if project_name is not None:
            self.project_name = project_name
        logger.info("Task store now holds %d task(s) for '%s'", len(incoming), self.project_name)


__all__ = ["TaskStore"]
