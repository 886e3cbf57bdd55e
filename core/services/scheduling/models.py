from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass(frozen=True)
class TaskFloat:
    total_float_days: int
    free_float_days: int
    is_critical: bool


@dataclass
class ScheduleResult:
    topo_order: List[str]
    project_finish: Optional[date]
    critical_task_ids: List[str] = field(default_factory=list)

    @property
    def task_count(self) -> int:
        return len(self.topo_order)


@dataclass(frozen=True)
class ProjectScheduleSummary:
    project_name: str
    start_date: Optional[date]
    end_date: Optional[date]
    duration_days: int
    tasks_total: int
    critical_tasks: int
    critical_path_percentage: int
    is_stale: bool
