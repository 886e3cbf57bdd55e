from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List, Optional

from core.models import DependencyType, Task, TaskDependency
from core.services.scheduling.graph import DependencyGraph, SuccessorEdge


def _days(n: int) -> timedelta:
    return timedelta(days=int(n or 0))


def _duration(task: Task) -> int:
    return int(task.duration_days or 0)


def forward_constraint(
    task: Task,
    dep: TaskDependency,
    predecessor: Task,
    pred_es: date,
    pred_ef: date,
) -> date:
    """Earliest start of ``task`` allowed by one incoming edge."""
    lag = _days(dep.lag_days)
    dep_type = DependencyType.from_code(dep.dependency_type)

    if dep_type == DependencyType.START_TO_START:
        return pred_es + lag
    if dep_type == DependencyType.FINISH_TO_FINISH:
        # EF_s >= EF_p + lag
        return pred_ef + lag - _days(_duration(task))
    if dep_type == DependencyType.START_TO_FINISH:
        # anchored on the predecessor's authored start, not its early start
        return predecessor.start_date + lag - _days(_duration(task))
    # FS, and any unrecognized code
    return pred_ef + lag


def backward_constraint(
    task: Task,
    edge: SuccessorEdge,
    successor: Task,
    succ_ls: date,
    succ_lf: date,
) -> date:
    """Latest finish of ``task`` allowed by one outgoing edge."""
    dep = edge.dependency
    lag = _days(dep.lag_days)
    dep_type = DependencyType.from_code(dep.dependency_type)

    if dep_type == DependencyType.START_TO_START:
        return succ_lf + lag
    if dep_type == DependencyType.FINISH_TO_FINISH:
        return succ_ls - lag
    if dep_type == DependencyType.START_TO_FINISH:
        return successor.start_date + lag + _days(_duration(task))
    # FS, and any unrecognized code
    return succ_ls - lag


def run_forward_pass(
    graph: DependencyGraph,
    topo_order: List[str],
) -> tuple[Dict[str, date], Dict[str, date]]:
    es: Dict[str, date] = {}
    ef: Dict[str, date] = {}

    for task_id in topo_order:
        task = graph.tasks_by_id[task_id]
        est = task.start_date

        for dep in graph.predecessor_edges(task_id):
            pred_id = dep.predecessor_task_id
            candidate = forward_constraint(
                task,
                dep,
                graph.tasks_by_id[pred_id],
                es[pred_id],
                ef[pred_id],
            )
            if candidate > est:
                est = candidate

        es[task_id] = est
        ef[task_id] = est if task.is_milestone else est + _days(_duration(task))

    return es, ef


def project_finish_date(
    graph: DependencyGraph,
    ef: Dict[str, date],
) -> Optional[date]:
    finishes = [ef.get(task_id) or task.end_date for task_id, task in graph.tasks_by_id.items()]
    return max(finishes) if finishes else None


def run_backward_pass(
    graph: DependencyGraph,
    topo_order: List[str],
    ef: Dict[str, date],
) -> tuple[Dict[str, date], Dict[str, date], Optional[date]]:
    ls: Dict[str, date] = {}
    lf: Dict[str, date] = {}

    project_finish = project_finish_date(graph, ef)
    if project_finish is None:
        return ls, lf, None

    for task_id, task in graph.tasks_by_id.items():
        lf[task_id] = project_finish
        ls[task_id] = project_finish if task.is_milestone else project_finish - _days(_duration(task))

    for task_id in reversed(topo_order):
        outgoing = graph.successor_edges(task_id)
        if not outgoing:
            continue

        task = graph.tasks_by_id[task_id]
        lft = min(
            backward_constraint(
                task,
                edge,
                graph.tasks_by_id[edge.successor_id],
                ls[edge.successor_id],
                lf[edge.successor_id],
            )
            for edge in outgoing
        )
        lf[task_id] = lft
        ls[task_id] = lft if task.is_milestone else lft - _days(_duration(task))

    return ls, lf, project_finish


__all__ = [
    "forward_constraint",
    "backward_constraint",
    "run_forward_pass",
    "project_finish_date",
    "run_backward_pass",
]
