from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_PROJECT_NAME = "Untitled Project"


@dataclass(frozen=True)
class SavedProjectInfo:
    name: str
    saved_at: datetime
    task_count: int


__all__ = ["DEFAULT_PROJECT_NAME", "SavedProjectInfo"]
