from core.domain.enums import DependencyType
from core.domain.identifiers import generate_id
from core.domain.project import DEFAULT_PROJECT_NAME, SavedProjectInfo
from core.domain.task import Task, TaskDependency

__all__ = [
    "generate_id",
    "DependencyType",
    "DEFAULT_PROJECT_NAME",
    "SavedProjectInfo",
    "Task",
    "TaskDependency",
]
