from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Union

from core.domain.enums import DependencyType
from core.domain.identifiers import generate_id


@dataclass
class TaskDependency:
    """Precedence edge owned by the successor task."""

    predecessor_task_id: str
    dependency_type: Union[DependencyType, str] = DependencyType.FINISH_TO_START
    lag_days: int = 0  # negative for lead time

    @property
    def type_code(self) -> str:
        return getattr(self.dependency_type, "value", str(self.dependency_type))


@dataclass
class Task:
    id: str
    name: str
    start_date: date
    duration_days: int = 1
    is_milestone: bool = False
    percent_complete: float = 0.0
    predecessors: List[TaskDependency] = field(default_factory=list)
    notes: str = ""

    # Calculated by the scheduling engine, never edited by hand
    early_start: Optional[date] = None
    early_finish: Optional[date] = None
    late_start: Optional[date] = None
    late_finish: Optional[date] = None
    free_float_days: int = 0
    total_float_days: int = 0
    is_critical: bool = False

    @staticmethod
    def create(name: str, start_date: date, duration_days: int = 1, **extra) -> "Task":
        return Task(
            id=generate_id(),
            name=name,
            start_date=start_date,
            duration_days=duration_days,
            **extra,
        )

    @property
    def end_date(self) -> date:
        return self.start_date + timedelta(days=int(self.duration_days or 0))

    def reset_schedule(self) -> None:
        self.early_start = None
        self.early_finish = None
        self.late_start = None
        self.late_finish = None
        self.free_float_days = 0
        self.total_float_days = 0
        self.is_critical = False

    def add_predecessor(
        self,
        task_id: str,
        dependency_type: Union[DependencyType, str] = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> Optional[TaskDependency]:
        """Append an edge; returns None when the same id/type link already exists."""
        code = getattr(dependency_type, "value", dependency_type)
        for dep in self.predecessors:
            if dep.predecessor_task_id == task_id and dep.type_code == code:
                return None
        dep = TaskDependency(
            predecessor_task_id=task_id,
            dependency_type=dependency_type,
            lag_days=int(lag_days),
        )
        self.predecessors.append(dep)
        return dep

    def remove_predecessor(
        self,
        task_id: str,
        dependency_type: Union[DependencyType, str, None] = None,
    ) -> int:
        before = len(self.predecessors)
        if dependency_type is None:
            self.predecessors = [
                d for d in self.predecessors if d.predecessor_task_id != task_id
            ]
        else:
            code = getattr(dependency_type, "value", dependency_type)
            self.predecessors = [
                d
                for d in self.predecessors
                if not (d.predecessor_task_id == task_id and d.type_code == code)
            ]
        return before - len(self.predecessors)

    def predecessor_string(self) -> str:
        return "; ".join(
            f"{d.predecessor_task_id},{d.type_code},{d.lag_days}" for d in self.predecessors
        )


__all__ = ["Task", "TaskDependency"]
