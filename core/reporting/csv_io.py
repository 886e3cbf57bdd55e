# reporting/csv_io.py
from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional

from core.exceptions import ValidationError
from core.models import DependencyType, Task, TaskDependency, generate_id

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "ID",
    "Name",
    "StartDate",
    "Duration",
    "PercentComplete",
    "IsMilestone",
    "Predecessors",
    "Notes",
    "EarlyStart",
    "EarlyFinish",
    "LateStart",
    "LateFinish",
    "FreeFloat",
    "TotalFloat",
    "IsCritical",
]
REQUIRED_HEADERS = ("id", "name", "startdate", "duration")
TEMPLATE_HEADERS = ["ID", "Name", "StartDate", "Duration", "PercentComplete", "IsMilestone", "Predecessors", "Notes"]

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y")


@dataclass
class CsvValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)


def _format_date(value: Optional[date]) -> str:
    return value.isoformat() if value else ""


def _flag(value: bool) -> str:
    return "TRUE" if value else "FALSE"


def parse_csv_date(value: str) -> date:
    text = (value or "").strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Invalid date format: {value}")


def parse_predecessors(value: str) -> List[TaskDependency]:
    """Parse ``"T1,FS,0; T2,SS,3"``; type defaults to FS and lag to 0."""
    deps: List[TaskDependency] = []
    for chunk in (value or "").split(";"):
        parts = [p.strip() for p in chunk.split(",")]
        if not parts or not parts[0]:
            continue
        code = parts[1] if len(parts) > 1 and parts[1] else "FS"
        lag = int(parts[2]) if len(parts) > 2 and parts[2] else 0
        dep_type = DependencyType.coerce(code) or code
        deps.append(TaskDependency(parts[0], dep_type, lag))
    return deps


def export_tasks_csv(tasks: Iterable[Task]) -> str:
    tasks = list(tasks)
    if not tasks:
        raise ValidationError("No tasks to export", code="EXPORT_EMPTY")

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for task in tasks:
        writer.writerow([
            task.id,
            task.name,
            _format_date(task.start_date),
            task.duration_days,
            task.percent_complete,
            _flag(task.is_milestone),
            task.predecessor_string(),
            task.notes,
            _format_date(task.early_start or task.start_date),
            _format_date(task.early_finish or task.end_date),
            _format_date(task.late_start),
            _format_date(task.late_finish),
            task.free_float_days,
            task.total_float_days,
            _flag(task.is_critical),
        ])
    return buffer.getvalue()


def _read_rows(content: str) -> tuple[list[str], list[list[str]]]:
    rows = [row for row in csv.reader(io.StringIO((content or "").strip())) if any(c.strip() for c in row)]
    if not rows:
        return [], []
    headers = [h.strip().lower() for h in rows[0]]
    return headers, rows[1:]


def _row_dict(headers: list[str], values: list[str]) -> dict[str, str]:
    return {h: (values[i].strip() if i < len(values) else "") for i, h in enumerate(headers)}


def import_tasks_csv(content: str) -> List[Task]:
    """
    Build tasks from CSV text. Row problems are collected and raised together
    as one ValidationError; nothing is returned in that case.
    """
    headers, rows = _read_rows(content)
    if not rows:
        raise ValidationError("CSV file is empty or has no data rows", code="CSV_EMPTY")

    missing = [h for h in REQUIRED_HEADERS if h not in headers]
    if missing:
        raise ValidationError(
            f"Missing required headers: {', '.join(missing)}", code="CSV_MISSING_HEADERS"
        )

    tasks: List[Task] = []
    seen_ids: set[str] = set()
    errors: List[str] = []

    for line_no, values in enumerate(rows, start=2):
        row = _row_dict(headers, values)
        try:
            duration = int(row["duration"] or 1)
            is_milestone = row.get("ismilestone", "").upper() == "TRUE"
            task = Task(
                id=row["id"] or generate_id(),
                name=row["name"] or "New Task",
                start_date=parse_csv_date(row["startdate"]),
                duration_days=duration,
                is_milestone=is_milestone,
                percent_complete=float(row.get("percentcomplete") or 0),
                predecessors=parse_predecessors(row.get("predecessors", "")),
                notes=row.get("notes", ""),
            )
        except ValueError as exc:
            errors.append(f"Row {line_no}: {exc}")
            continue

        if task.id in seen_ids:
            new_id = generate_id()
            logger.warning("Duplicate task id %s on row %d, using %s", task.id, line_no, new_id)
            task.id = new_id
        seen_ids.add(task.id)
        tasks.append(task)

    if errors:
        raise ValidationError("Import errors:\n" + "\n".join(errors), code="CSV_IMPORT_ERRORS")

    logger.info("Imported %d task(s) from CSV", len(tasks))
    return tasks


def validate_csv(content: str) -> CsvValidationResult:
    headers, rows = _read_rows(content)
    if not rows:
        return CsvValidationResult(False, ["CSV file must have at least one data row"])

    errors: List[str] = []
    for required, label in zip(REQUIRED_HEADERS, ("ID", "Name", "StartDate", "Duration")):
        if required not in headers:
            errors.append(f"Missing required column: {label}")

    seen: set[str] = set()
    for line_no, values in enumerate(rows, start=2):
        row = _row_dict(headers, values)
        task_id = row.get("id", "")
        if task_id:
            if task_id in seen:
                errors.append(f"Duplicate ID found: {task_id} (row {line_no})")
            seen.add(task_id)
        if "startdate" in headers and row["startdate"]:
            try:
                parse_csv_date(row["startdate"])
            except ValueError:
                errors.append(f"Invalid date format: {row['startdate']} (row {line_no})")
        if "duration" in headers:
            try:
                if int(row["duration"]) < 0:
                    raise ValueError
            except ValueError:
                errors.append(f"Invalid duration: {row['duration']} (row {line_no})")

    return CsvValidationResult(valid=not errors, errors=errors)


def sample_csv_template(today: Optional[date] = None) -> str:
    day = (today or date.today()).isoformat()
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(TEMPLATE_HEADERS)
    writer.writerows([
        ["T1", "Project Planning", day, "5", "0", "FALSE", "", "Initial planning phase"],
        ["T2", "Design Phase", day, "10", "0", "FALSE", "T1,FS,0", "Design tasks"],
        ["T3", "Development", day, "20", "0", "FALSE", "T2,FS,0", "Development phase"],
        ["T4", "Testing", day, "7", "0", "FALSE", "T3,FS,0", "QA Testing"],
        ["T5", "Project Complete", day, "0", "0", "TRUE", "T4,FS,0", "Project milestone"],
    ])
    return buffer.getvalue()


__all__ = [
    "CsvValidationResult",
    "EXPORT_HEADERS",
    "parse_csv_date",
    "parse_predecessors",
    "export_tasks_csv",
    "import_tasks_csv",
    "validate_csv",
    "sample_csv_template",
]
