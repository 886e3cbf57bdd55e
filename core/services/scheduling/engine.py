# core/services/scheduling/engine.py
from __future__ import annotations

import logging
import math
from datetime import date
from threading import Lock
from typing import List, Optional

from core.events.domain_events import domain_events
from core.exceptions import CircularDependencyError
from core.interfaces import TaskRepository
from core.models import Task
from core.services.scheduling.graph import build_dependency_graph, find_cycle, topological_order
from core.services.scheduling.models import ProjectScheduleSummary, ScheduleResult
from core.services.scheduling.passes import run_backward_pass, run_forward_pass
from core.services.scheduling.results import apply_schedule

logger = logging.getLogger(__name__)


class SchedulingEngine:
    """
    CPM scheduling engine:
    - Cycle check (DFS over successors), then Kahn topological order
    - Forward pass: ES/EF
    - Backward pass: LS/LF anchored on the latest early finish
    - Total/free float and critical flag
    - FS, SS, FF, SF with signed lag_days, consecutive calendar days
    """

    def __init__(self, task_repo: TaskRepository, project_name: Optional[str] = None):
        self._task_repo: TaskRepository = task_repo
        self._project_name: Optional[str] = project_name
        self._lock: Lock = Lock()
        self._state_lock: Lock = Lock()
        self._stale: bool = True
        # bumped on every change; a run clears the stale flag only if it did not move
        self._change_seq: int = 0
        domain_events.tasks_changed.connect(self._on_tasks_changed)

    @property
    def is_stale(self) -> bool:
        """True until a calculation has completed since the last task change."""
        return self._stale

    def mark_stale(self) -> None:
        with self._state_lock:
            self._change_seq += 1
            self._stale = True

    def _on_tasks_changed(self, _project_name: str) -> None:
        self.mark_stale()

    def close(self) -> None:
        domain_events.tasks_changed.disconnect(self._on_tasks_changed)

    @property
    def project_name(self) -> str:
        if self._project_name is not None:
            return self._project_name
        return getattr(self._task_repo, "project_name", "")

    def calculate(self) -> ScheduleResult:
        """
        Full CPM calculation over every task in the repository.
        Raises CircularDependencyError, leaving all calculated fields cleared.
        """
        with self._lock:
            with self._state_lock:
                self._stale = True
                seq_at_start = self._change_seq
            tasks = self._task_repo.list_all()
            for task in tasks:
                task.reset_schedule()

            graph = build_dependency_graph(tasks)

            cycle = find_cycle(graph)
            if cycle:
                logger.warning("Schedule not calculated, circular dependency: %s", " -> ".join(cycle))
                raise CircularDependencyError(cycle)

            topo_order = topological_order(graph)
            es, ef = run_forward_pass(graph, topo_order)
            ls, lf, project_finish = run_backward_pass(graph, topo_order, ef)
            result = apply_schedule(graph, topo_order, es, ef, ls, lf, project_finish)
            with self._state_lock:
                self._stale = self._change_seq != seq_at_start

        logger.info(
            f"Calculated schedule for {len(tasks)} task(s): finish={project_finish}, "
            f"critical={len(result.critical_task_ids)}"
        )
        domain_events.schedule_recalculated.emit(self.project_name)
        return result

    def auto_schedule(self) -> ScheduleResult:
        """
        Move every task's authored start onto its early start, then recalculate
        so the calculated fields describe the moved dates.
        """
        self.calculate()
        moved = 0
        for task in self._task_repo.list_all():
            if task.early_start is not None and task.start_date != task.early_start:
                task.start_date = task.early_start
                moved += 1
        logger.info("Auto-schedule moved %d task(s)", moved)
        if moved:
            domain_events.tasks_changed.emit(self.project_name)
        return self.calculate()

    # ------------------------------------------------------------------
    # Project-level reads
    # ------------------------------------------------------------------

    def project_start_date(self) -> Optional[date]:
        tasks = self._task_repo.list_all()
        if not tasks:
            return None
        return min(task.start_date for task in tasks)

    def project_end_date(self) -> Optional[date]:
        tasks = self._task_repo.list_all()
        if not tasks:
            return None
        return max(task.early_finish or task.end_date for task in tasks)

    def project_duration_days(self) -> int:
        start = self.project_start_date()
        end = self.project_end_date()
        if start is None or end is None:
            return 0
        return (end - start).days

    def critical_tasks(self) -> List[Task]:
        return [task for task in self._task_repo.list_all() if task.is_critical]

    def critical_path_percentage(self) -> int:
        tasks = self._task_repo.list_all()
        if not tasks:
            return 0
        critical = sum(1 for task in tasks if task.is_critical)
        # half-up, e.g. 1 of 8 -> 13
        return int(math.floor(critical * 100 / len(tasks) + 0.5))

    def summary(self) -> ProjectScheduleSummary:
        tasks = self._task_repo.list_all()
        return ProjectScheduleSummary(
            project_name=self.project_name,
            start_date=self.project_start_date(),
            end_date=self.project_end_date(),
            duration_days=self.project_duration_days(),
            tasks_total=len(tasks),
            critical_tasks=sum(1 for task in tasks if task.is_critical),
            critical_path_percentage=self.critical_path_percentage(),
            is_stale=self._stale,
        )
