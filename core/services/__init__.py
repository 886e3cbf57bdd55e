from .project import ProjectService
from .scheduling import ProjectScheduleSummary, ScheduleResult, SchedulingEngine
from .task import TaskService, TaskStore

__all__ = [
    "ProjectService",
    "TaskService",
    "TaskStore",
    "SchedulingEngine",
    "ScheduleResult",
    "ProjectScheduleSummary",
]
