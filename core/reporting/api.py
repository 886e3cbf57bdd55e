"""Reporting API wrappers around renderer classes."""
from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

from core.reporting.contexts import ScheduleReportContext, build_gantt_bars
from core.reporting.renderers.excel import ScheduleExcelRenderer
from core.reporting.renderers.gantt import GanttPngRenderer
from core.services.scheduling import SchedulingEngine
from core.services.task.store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_calculated(engine: SchedulingEngine) -> None:
    # CircularDependencyError propagates; a report of stale dates is never written
    if engine.is_stale:
        engine.calculate()


def generate_gantt_png(
    engine: SchedulingEngine,
    task_store: TaskStore,
    output_path: str | Path,
    today: Optional[date] = None,
) -> Path:
    _ensure_calculated(engine)
    path = GanttPngRenderer().render(
        build_gantt_bars(task_store.list_all()),
        Path(output_path),
        title=f"{task_store.project_name} - Gantt",
        today=today,
    )
    logger.info("Gantt chart written to %s", path)
    return path


def generate_schedule_excel(
    engine: SchedulingEngine,
    task_store: TaskStore,
    output_path: str | Path,
    as_of: Optional[date] = None,
) -> Path:
    _ensure_calculated(engine)
    ctx = ScheduleReportContext(
        summary=engine.summary(),
        tasks=task_store.list_all(),
        as_of=as_of or date.today(),
    )
    path = ScheduleExcelRenderer().render(ctx, Path(output_path))
    logger.info("Schedule workbook written to %s", path)
    return path
