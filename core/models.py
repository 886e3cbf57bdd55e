# core/models.py
from core.domain import (
    DEFAULT_PROJECT_NAME,
    DependencyType,
    SavedProjectInfo,
    Task,
    TaskDependency,
    generate_id,
)

__all__ = [
    "generate_id",
    "DependencyType",
    "DEFAULT_PROJECT_NAME",
    "SavedProjectInfo",
    "Task",
    "TaskDependency",
]
