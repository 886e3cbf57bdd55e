from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from core.exceptions import BusinessRuleError, ValidationError
from core.interfaces import TaskRepository
from core.models import DependencyType, Task, TaskDependency
from core.services.scheduling.graph import build_dependency_graph, find_cycle


@dataclass(frozen=True)
class TaskGraphIssue:
    task_id: str
    code: str
    message: str


def validate_task_graph(tasks: Iterable[Task]) -> List[TaskGraphIssue]:
    """
    Non-blocking checks over a task collection. The scheduling engine never
    calls this; dangling links and unknown types are tolerated there.
    """
    tasks = list(tasks)
    known_ids = {task.id for task in tasks}
    issues: List[TaskGraphIssue] = []

    for task in tasks:
        if int(task.duration_days or 0) < 0:
            issues.append(TaskGraphIssue(
                task.id, "DURATION_NEGATIVE",
                f"Task {task.id}: Duration cannot be negative",
            ))
        if not 0 <= float(task.percent_complete or 0) <= 100:
            issues.append(TaskGraphIssue(
                task.id, "PERCENT_OUT_OF_RANGE",
                f"Task {task.id}: Percent complete must be between 0 and 100",
            ))
        for dep in task.predecessors:
            if dep.predecessor_task_id == task.id:
                issues.append(TaskGraphIssue(
                    task.id, "DEPENDENCY_SELF",
                    f"Task {task.id}: A task cannot depend on itself",
                ))
            elif dep.predecessor_task_id not in known_ids:
                issues.append(TaskGraphIssue(
                    task.id, "PREDECESSOR_NOT_FOUND",
                    f"Task {task.id}: Predecessor {dep.predecessor_task_id} does not exist",
                ))
            if DependencyType.from_code(dep.dependency_type) is None:
                issues.append(TaskGraphIssue(
                    task.id, "DEPENDENCY_TYPE_INVALID",
                    f'Task {task.id}: Invalid dependency type "{dep.type_code}"',
                ))

    return issues


class TaskValidationMixin:
    _task_repo: TaskRepository

    def _validate_task_name(self, name: str) -> None:
        if not (name or "").strip():
            raise ValidationError("Task name cannot be empty.", code="TASK_NAME_EMPTY")

    def _validate_duration(self, duration_days) -> None:
        if duration_days is None:
            raise ValidationError("Task duration_days is required.", code="TASK_DURATION_INVALID")
        if int(duration_days) < 0:
            raise ValidationError(
                "Task duration_days cannot be negative.", code="TASK_DURATION_INVALID"
            )

    def _validate_percent_complete(self, percent) -> None:
        if not 0 <= float(percent) <= 100:
            raise ValidationError(
                "Percent complete must be between 0 and 100.", code="TASK_PERCENT_INVALID"
            )

    def _validate_not_self_dependency(self, predecessor_id: str, successor_id: str) -> None:
        if predecessor_id == successor_id:
            raise ValidationError("A task cannot depend on itself.", code="DEPENDENCY_SELF")

    def _validate_dependency_type(self, dependency_type) -> DependencyType:
        dep_type = DependencyType.coerce(dependency_type)
        if dep_type is None:
            raise ValidationError(
                f'Invalid dependency type "{dependency_type}".', code="DEPENDENCY_TYPE_INVALID"
            )
        return dep_type

    def _check_no_circular_dependency(self, successor: Task, proposed: TaskDependency) -> None:
        """Trial-run the cycle check with the proposed edge attached."""
        trial = Task(
            id=successor.id,
            name=successor.name,
            start_date=successor.start_date,
            duration_days=successor.duration_days,
            predecessors=[*successor.predecessors, proposed],
        )
        tasks = [trial if t.id == successor.id else t for t in self._task_repo.list_all()]
        cycle = find_cycle(build_dependency_graph(tasks))
        if cycle:
            raise BusinessRuleError(
                "Adding this dependency would create a circular dependency.\n"
                f"Cycle path: {' -> '.join(cycle)}",
                code="DEPENDENCY_CYCLE",
            )


__all__ = ["TaskGraphIssue", "validate_task_graph", "TaskValidationMixin"]
