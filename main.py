# main.py
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from core.exceptions import CircularDependencyError, DomainError
from core.reporting.api import generate_gantt_png, generate_schedule_excel
from core.reporting.csv_io import export_tasks_csv, import_tasks_csv
from core.reporting.json_io import export_project_json, import_project_json
from infra.db.base import build_engine, build_session_factory
from infra.logging_config import setup_logging
from infra.operational_support import bind_trace_id
from infra.services import ServiceGraph, build_service_graph

logger = logging.getLogger(__name__)


def _load_input(services: ServiceGraph, source: str | None) -> None:
    if source is None:
        services.project_service.load_sample_project(date.today())
        return
    path = Path(source)
    if path.suffix.lower() == ".csv":
        tasks = import_tasks_csv(path.read_text(encoding="utf-8"))
        services.task_store.replace_all(tasks, project_name=path.stem)
    elif path.suffix.lower() == ".json":
        doc = import_project_json(path.read_text(encoding="utf-8"))
        services.task_store.replace_all(doc.tasks, project_name=doc.project_name)
    else:
        services.project_service.load_project(source)


def run(source: str | None, output_dir: Path, save: bool) -> int:
    session_factory = build_session_factory(build_engine())
    session = session_factory()
    try:
        services = build_service_graph(session)
        _load_input(services, source)

        for issue in services.task_service.validate():
            logger.warning("%s: %s", issue.code, issue.message)

        try:
            services.scheduling_engine.calculate()
        except CircularDependencyError as exc:
            logger.error("Cannot schedule: %s", exc)
            return 2

        summary = services.scheduling_engine.summary()
        logger.info(
            "%s: %s -> %s (%d days), %d/%d critical (%d%%)",
            summary.project_name, summary.start_date, summary.end_date, summary.duration_days,
            summary.critical_tasks, summary.tasks_total, summary.critical_path_percentage,
        )

        store = services.task_store
        output_dir.mkdir(parents=True, exist_ok=True)
        (output_dir / "schedule.csv").write_text(export_tasks_csv(store.list_all()), encoding="utf-8")
        (output_dir / "schedule.json").write_text(
            export_project_json(store.project_name, store.list_all()), encoding="utf-8"
        )
        generate_schedule_excel(services.scheduling_engine, store, output_dir / "schedule.xlsx")
        generate_gantt_png(services.scheduling_engine, store, output_dir / "gantt.png", today=date.today())

        if save:
            services.project_service.save_project()
        return 0
    except DomainError as exc:
        logger.error("%s (%s)", exc, exc.code)
        return 1
    finally:
        session.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Calculate a CPM schedule and write reports.")
    parser.add_argument("source", nargs="?", help="CSV/JSON file or saved project name (default: sample)")
    parser.add_argument("-o", "--output", default="schedule-out", help="report directory")
    parser.add_argument("--save", action="store_true", help="save the project to the database")
    args = parser.parse_args(argv)

    setup_logging()
    with bind_trace_id():
        return run(args.source, Path(args.output), args.save)


if __name__ == "__main__":
    sys.exit(main())
