from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from core.models import DependencyType
from core.services.scheduling.graph import DependencyGraph
from core.services.scheduling.models import ScheduleResult, TaskFloat

_FREE_FLOAT_TYPES = (DependencyType.FINISH_TO_START, DependencyType.START_TO_START)


def _day_diff(later: date, earlier: date) -> int:
    return (later - earlier).days


def compute_task_float(
    graph: DependencyGraph,
    task_id: str,
    es: Dict[str, date],
    ef: Dict[str, date],
    ls: Dict[str, date],
) -> TaskFloat:
    total_float = _day_diff(ls[task_id], es[task_id])

    outgoing = graph.successor_edges(task_id)
    gaps: List[int] = [
        _day_diff(es[edge.successor_id], ef[task_id]) + int(edge.dependency.lag_days or 0)
        for edge in outgoing
        if DependencyType.from_code(edge.dependency.dependency_type) in _FREE_FLOAT_TYPES
    ]
    if gaps:
        free_float = max(0, min(gaps))
    else:
        # no successors, or only FF/SF links: free float is not bounded by them
        free_float = total_float

    return TaskFloat(
        total_float_days=total_float,
        free_float_days=free_float,
        is_critical=total_float <= 0,
    )


def apply_schedule(
    graph: DependencyGraph,
    topo_order: List[str],
    es: Dict[str, date],
    ef: Dict[str, date],
    ls: Dict[str, date],
    lf: Dict[str, date],
    project_finish: Optional[date],
) -> ScheduleResult:
    """Publish both passes onto the tasks; only called once every stage succeeded."""
    floats = {
        task_id: compute_task_float(graph, task_id, es, ef, ls)
        for task_id in graph.tasks_by_id
    }

    critical_ids: List[str] = []
    for task_id, task in graph.tasks_by_id.items():
        info = floats[task_id]
        task.early_start = es[task_id]
        task.early_finish = ef[task_id]
        task.late_start = ls[task_id]
        task.late_finish = lf[task_id]
        task.total_float_days = info.total_float_days
        task.free_float_days = info.free_float_days
        task.is_critical = info.is_critical
        if info.is_critical:
            critical_ids.append(task_id)

    return ScheduleResult(
        topo_order=list(topo_order),
        project_finish=project_finish,
        critical_task_ids=critical_ids,
    )


__all__ = ["compute_task_float", "apply_schedule"]
