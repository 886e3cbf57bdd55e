from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from core.models import Task
from core.services.scheduling.models import ProjectScheduleSummary


@dataclass
class GanttTaskBar:
    task_id: str
    name: str
    start: Optional[date]
    end: Optional[date]
    is_critical: bool
    is_milestone: bool
    percent_complete: float


@dataclass
class ScheduleReportContext:
    summary: ProjectScheduleSummary
    tasks: List[Task]
    as_of: date


def build_gantt_bars(tasks: Iterable[Task]) -> List[GanttTaskBar]:
    """Early dates when calculated, authored dates otherwise."""
    return [
        GanttTaskBar(
            task_id=t.id,
            name=t.name,
            start=t.early_start or t.start_date,
            end=t.early_finish or t.end_date,
            is_critical=t.is_critical,
            is_milestone=t.is_milestone,
            percent_complete=t.percent_complete,
        )
        for t in tasks
    ]
