from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError
from core.models import Task
from core.services.task.store import TaskStore


logger = logging.getLogger(__name__)


class TaskLifecycleMixin:
    _task_repo: TaskStore

    def create_task(
        self,
        name: str,
        start_date: date,
        duration_days: int = 1,
        percent_complete: float = 0.0,
        is_milestone: bool = False,
        notes: str = "",
        task_id: Optional[str] = None,
    ) -> Task:
        self._validate_task_name(name)
        self._validate_duration(duration_days)
        self._validate_percent_complete(percent_complete)

        task = Task.create(
            name=name.strip(),
            start_date=start_date,
            duration_days=0 if is_milestone else int(duration_days),
            percent_complete=float(percent_complete),
            is_milestone=is_milestone,
            notes=notes,
        )
        if task_id:
            task.id = task_id

        self._task_repo.add(task)
        logger.info(f"Created task {task.id} - {task.name}")
        domain_events.tasks_changed.emit(self._task_repo.project_name)
        return task

    def update_task(
        self,
        task_id: str,
        name: Optional[str] = None,
        start_date: Optional[date] = None,
        duration_days: Optional[int] = None,
        percent_complete: Optional[float] = None,
        is_milestone: Optional[bool] = None,
        notes: Optional[str] = None,
    ) -> Task:
        task = self._task_repo.get(task_id)
        if not task:
            raise NotFoundError("Task not found.", code="TASK_NOT_FOUND")

        if name is not None:
            self._validate_task_name(name)
            task.name = name.strip()
        if start_date is not None:
            task.start_date = start_date
        if duration_days is not None:
            self._validate_duration(duration_days)
            task.duration_days = int(duration_days)
        if percent_complete is not None:
            self._validate_percent_complete(percent_complete)
            task.percent_complete = float(percent_complete)
        if is_milestone is not None:
            task.is_milestone = bool(is_milestone)
            if task.is_milestone:
                task.duration_days = 0
        if notes is not None:
            task.notes = notes

        logger.info(f"Updated task {task.id} - {task.name}")
        domain_events.tasks_changed.emit(self._task_repo.project_name)
        return task

    def delete_task(self, task_id: str) -> None:
        task = self._task_repo.get(task_id)
        if not task:
            raise NotFoundError("Task not found.", code="TASK_NOT_FOUND")
        self._task_repo.remove(task_id)
        logger.info(f"Deleted task {task_id} - {task.name}")
        domain_events.tasks_changed.emit(self._task_repo.project_name)
