from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from core.exceptions import BusinessRuleError
from core.models import Task, TaskDependency


@dataclass(frozen=True)
class SuccessorEdge:
    successor_id: str
    dependency: TaskDependency


@dataclass
class DependencyGraph:
    """
    Adjacency index rebuilt from the task collection on every calculation.
    Only edges whose predecessor id resolves to a task are indexed.
    """

    tasks_by_id: Dict[str, Task]
    successors: Dict[str, List[SuccessorEdge]] = field(default_factory=dict)
    predecessors: Dict[str, List[TaskDependency]] = field(default_factory=dict)

    def successor_edges(self, task_id: str) -> List[SuccessorEdge]:
        return self.successors.get(task_id, [])

    def predecessor_edges(self, task_id: str) -> List[TaskDependency]:
        return self.predecessors.get(task_id, [])

    def distinct_successor_ids(self, task_id: str) -> Iterator[str]:
        seen: set[str] = set()
        for edge in self.successor_edges(task_id):
            if edge.successor_id not in seen:
                seen.add(edge.successor_id)
                yield edge.successor_id


def build_dependency_graph(tasks: Iterable[Task]) -> DependencyGraph:
    tasks_by_id: Dict[str, Task] = {task.id: task for task in tasks}
    graph = DependencyGraph(
        tasks_by_id=tasks_by_id,
        successors={task_id: [] for task_id in tasks_by_id},
        predecessors={task_id: [] for task_id in tasks_by_id},
    )
    for task_id, task in tasks_by_id.items():
        for dep in task.predecessors:
            if dep.predecessor_task_id not in tasks_by_id:
                continue
            graph.successors[dep.predecessor_task_id].append(SuccessorEdge(task_id, dep))
            graph.predecessors[task_id].append(dep)
    return graph


def find_cycle(graph: DependencyGraph) -> Optional[List[str]]:
    """
    Depth-first search along successor edges.

    Returns the first cycle found as ``[a, b, ..., a]`` or None. The walk keeps
    its own frame stack so that a found cycle returns straight out of every
    nesting level.
    """
    visited: set[str] = set()
    on_stack: set[str] = set()
    path: List[str] = []

    for root in graph.tasks_by_id:
        if root in visited:
            continue

        visited.add(root)
        on_stack.add(root)
        path.append(root)
        frames: List[Iterator[str]] = [graph.distinct_successor_ids(root)]

        while frames:
            successor_id = next(frames[-1], None)
            if successor_id is None:
                frames.pop()
                on_stack.discard(path.pop())
                continue
            if successor_id in on_stack:
                start = path.index(successor_id)
                return path[start:] + [successor_id]
            if successor_id in visited:
                continue
            visited.add(successor_id)
            on_stack.add(successor_id)
            path.append(successor_id)
            frames.append(graph.distinct_successor_ids(successor_id))

    return None


def topological_order(graph: DependencyGraph) -> List[str]:
    """Kahn's algorithm; ties are broken by task insertion order."""
    indegree: Dict[str, int] = {task_id: 0 for task_id in graph.tasks_by_id}
    for task_id in graph.tasks_by_id:
        indegree[task_id] = len(graph.predecessor_edges(task_id))

    queue: deque[str] = deque(task_id for task_id, degree in indegree.items() if degree == 0)
    order: List[str] = []
    while queue:
        task_id = queue.popleft()
        order.append(task_id)
        for edge in graph.successor_edges(task_id):
            indegree[edge.successor_id] -= 1
            if indegree[edge.successor_id] == 0:
                queue.append(edge.successor_id)

    if len(order) != len(graph.tasks_by_id):
        raise BusinessRuleError(
            "Cannot schedule project: circular dependency detected.",
            code="SCHEDULE_CYCLE",
        )
    return order


__all__ = [
    "SuccessorEdge",
    "DependencyGraph",
    "build_dependency_graph",
    "find_cycle",
    "topological_order",
]
