from __future__ import annotations

from datetime import date
from typing import List

from core.models import DependencyType, Task, TaskDependency

SAMPLE_PROJECT_NAME = "Sample Construction Project"

FS = DependencyType.FINISH_TO_START
SS = DependencyType.START_TO_START
FF = DependencyType.FINISH_TO_FINISH

# (id, name, duration, [(predecessor, type, lag), ...])
_SAMPLE_ROWS = [
    ("T1", "Project Planning", 5, []),
    ("T2", "Site Preparation", 7, [("T1", FS, 0)]),
    ("T3", "Foundation Work", 10, [("T2", FS, 0)]),
    ("T4", "Structural Framing", 14, [("T3", FS, 0)]),
    ("T5", "Roofing", 5, [("T4", FS, 0)]),
    ("T6", "Exterior Finishing", 10, [("T5", FS, 0)]),
    ("T7", "Electrical Rough-In", 7, [("T4", SS, 3)]),
    ("T8", "Plumbing Rough-In", 7, [("T4", SS, 5)]),
    ("T9", "HVAC Installation", 5, [("T7", FF, -2)]),
    ("T10", "Interior Framing", 8, [("T4", FS, 7)]),
    ("T11", "Drywall Installation", 6, [("T10", FS, 0)]),
    ("T12", "Electrical Finish", 4, [("T11", FS, 0)]),
    ("T13", "Plumbing Finish", 4, [("T11", FS, 0)]),
    ("T14", "Painting", 8, [("T11", FS, 2)]),
    ("T15", "Flooring", 5, [("T14", FS, 0)]),
    ("T16", "Fixtures & Appliances", 5, [("T12", FS, 0), ("T13", FS, 0), ("T15", FS, 0)]),
    ("T17", "Final Inspection", 2, [("T6", FS, 0), ("T9", FS, 0), ("T16", FS, 0)]),
    ("T18", "Project Closeout", 3, [("T17", FS, 0)]),
]


def build_sample_project(start: date) -> List[Task]:
    """Eighteen-task building schedule, every task authored on ``start``."""
    return [
        Task(
            id=task_id,
            name=name,
            start_date=start,
            duration_days=duration,
            predecessors=[TaskDependency(pred, dep_type, lag) for pred, dep_type, lag in links],
        )
        for task_id, name, duration, links in _SAMPLE_ROWS
    ]


__all__ = ["SAMPLE_PROJECT_NAME", "build_sample_project"]
