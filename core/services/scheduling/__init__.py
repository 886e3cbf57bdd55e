from .engine import SchedulingEngine
from .graph import DependencyGraph, build_dependency_graph, find_cycle, topological_order
from .models import ProjectScheduleSummary, ScheduleResult, TaskFloat

__all__ = [
    "SchedulingEngine",
    "DependencyGraph",
    "build_dependency_graph",
    "find_cycle",
    "topological_order",
    "ProjectScheduleSummary",
    "ScheduleResult",
    "TaskFloat",
]
