from __future__ import annotations

from typing import List

from core.exceptions import NotFoundError
from core.models import Task
from core.services.task.store import TaskStore
from core.services.task.validation import TaskGraphIssue, validate_task_graph


class TaskQueryMixin:
    _task_repo: TaskStore

    def get_task(self, task_id: str) -> Task:
        task = self._task_repo.get(task_id)
        if not task:
            raise NotFoundError("Task not found.", code="TASK_NOT_FOUND")
        return task

    def list_tasks(self) -> List[Task]:
        return self._task_repo.list_all()

    def query_tasks(
        self,
        text: str | None = None,
        critical_only: bool = False,
        milestones_only: bool = False,
    ) -> List[Task]:
        needle = (text or "").strip().lower()
        result: List[Task] = []
        for task in self._task_repo.list_all():
            if needle and needle not in task.name.lower() and needle not in task.id.lower():
                continue
            if critical_only and not task.is_critical:
                continue
            if milestones_only and not task.is_milestone:
                continue
            result.append(task)
        return result

    def validate(self) -> List[TaskGraphIssue]:
        return validate_task_graph(self._task_repo.list_all())
