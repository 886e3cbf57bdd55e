from __future__ import annotations

from core.models import DependencyType, Task, TaskDependency
from infra.db.models import TaskDependencyORM, TaskORM


def dependency_to_orm(dependency: TaskDependency, position: int) -> TaskDependencyORM:
    return TaskDependencyORM(
        position=position,
        predecessor_task_id=dependency.predecessor_task_id,
        dependency_type=dependency.type_code,
        lag_days=dependency.lag_days,
    )


def dependency_from_orm(obj: TaskDependencyORM) -> TaskDependency:
    return TaskDependency(
        predecessor_task_id=obj.predecessor_task_id,
        dependency_type=DependencyType.from_code(obj.dependency_type) or obj.dependency_type,
        lag_days=obj.lag_days,
    )


def task_to_orm(task: Task, project_id: str, position: int) -> TaskORM:
    return TaskORM(
        project_id=project_id,
        task_id=task.id,
        position=position,
        name=task.name,
        start_date=task.start_date,
        duration_days=task.duration_days,
        is_milestone=task.is_milestone,
        percent_complete=task.percent_complete,
        notes=task.notes,
        early_start=task.early_start,
        early_finish=task.early_finish,
        late_start=task.late_start,
        late_finish=task.late_finish,
        free_float_days=task.free_float_days,
        total_float_days=task.total_float_days,
        is_critical=task.is_critical,
        predecessors=[dependency_to_orm(d, i) for i, d in enumerate(task.predecessors)],
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.task_id,
        name=obj.name,
        start_date=obj.start_date,
        duration_days=obj.duration_days,
        is_milestone=obj.is_milestone,
        percent_complete=obj.percent_complete,
        notes=obj.notes or "",
        predecessors=[dependency_from_orm(d) for d in obj.predecessors],
        early_start=obj.early_start,
        early_finish=obj.early_finish,
        late_start=obj.late_start,
        late_finish=obj.late_finish,
        free_float_days=obj.free_float_days or 0,
        total_float_days=obj.total_float_days or 0,
        is_critical=bool(obj.is_critical),
    )


__all__ = [
    "task_to_orm",
    "task_from_orm",
    "dependency_to_orm",
    "dependency_from_orm",
]
