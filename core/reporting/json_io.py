# reporting/json_io.py
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from core.exceptions import ValidationError
from core.models import DependencyType, Task, TaskDependency


@dataclass
class ProjectDocument:
    project_name: str
    project_start_date: Optional[date]
    tasks: List[Task]


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_date(value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        # full timestamp, e.g. "2023-12-31T22:00:00.000Z" written by a browser
        # in UTC+2 for local midnight on 2024-01-01: read it in local time
        stamp = datetime.fromisoformat(text.replace("Z", "+00:00"))
        if stamp.tzinfo is not None:
            stamp = stamp.astimezone()
        return stamp.date()
    raise ValueError(f"Unsupported date value: {value!r}")


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "name": task.name,
        "startDate": _iso(task.start_date),
        "duration": task.duration_days,
        "endDate": _iso(task.end_date),
        "percentComplete": task.percent_complete,
        "isMilestone": task.is_milestone,
        "predecessors": [
            {"taskId": d.predecessor_task_id, "type": d.type_code, "lag": d.lag_days}
            for d in task.predecessors
        ],
        "notes": task.notes,
        "earlyStart": _iso(task.early_start),
        "earlyFinish": _iso(task.early_finish),
        "lateStart": _iso(task.late_start),
        "lateFinish": _iso(task.late_finish),
        "freeFloat": task.free_float_days,
        "totalFloat": task.total_float_days,
        "isCritical": task.is_critical,
    }


def task_from_dict(data: Dict[str, Any]) -> Task:
    start = _parse_date(data.get("startDate"))
    if start is None:
        raise ValueError(f"Task {data.get('id')!r} has no startDate")
    predecessors = [
        TaskDependency(
            predecessor_task_id=str(p["taskId"]),
            dependency_type=DependencyType.coerce(p.get("type", "FS")) or p.get("type"),
            lag_days=int(p.get("lag") or 0),
        )
        for p in data.get("predecessors") or []
    ]
    task = Task(
        id=str(data["id"]),
        name=data.get("name") or "New Task",
        start_date=start,
        duration_days=int(data.get("duration") or 0),
        is_milestone=bool(data.get("isMilestone", False)),
        percent_complete=float(data.get("percentComplete") or 0),
        predecessors=predecessors,
        notes=data.get("notes") or "",
    )
    task.early_start = _parse_date(data.get("earlyStart"))
    task.early_finish = _parse_date(data.get("earlyFinish"))
    task.late_start = _parse_date(data.get("lateStart"))
    task.late_finish = _parse_date(data.get("lateFinish"))
    task.free_float_days = int(data.get("freeFloat") or 0)
    task.total_float_days = int(data.get("totalFloat") or 0)
    task.is_critical = bool(data.get("isCritical", False))
    return task


def export_project_json(
    project_name: str,
    tasks: List[Task],
    project_start_date: Optional[date] = None,
) -> str:
    if project_start_date is None and tasks:
        project_start_date = min(t.start_date for t in tasks)
    payload = {
        "projectName": project_name,
        "projectStartDate": _iso(project_start_date),
        "tasks": [task_to_dict(t) for t in tasks],
        "exportedAt": datetime.now().isoformat(timespec="seconds"),
    }
    return json.dumps(payload, indent=2)


def import_project_json(content: str) -> ProjectDocument:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Failed to parse JSON: {exc}", code="JSON_INVALID") from exc

    if not isinstance(data, dict) or not data.get("projectName") or "tasks" not in data:
        raise ValidationError("Invalid project file format", code="JSON_INVALID")

    try:
        tasks = [task_from_dict(item) for item in data["tasks"]]
        start = _parse_date(data.get("projectStartDate"))
    except (KeyError, TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid task data: {exc}", code="JSON_INVALID") from exc

    return ProjectDocument(
        project_name=data["projectName"],
        project_start_date=start,
        tasks=tasks,
    )


__all__ = [
    "ProjectDocument",
    "task_to_dict",
    "task_from_dict",
    "export_project_json",
    "import_project_json",
]
