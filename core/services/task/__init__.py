from core.services.task.service import TaskService
from core.services.task.store import TaskStore
from core.services.task.validation import TaskGraphIssue, validate_task_graph

__all__ = ["TaskService", "TaskStore", "TaskGraphIssue", "validate_task_graph"]
