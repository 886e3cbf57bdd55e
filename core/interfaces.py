# core/interfaces.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import SavedProjectInfo, Task


class TaskRepository(ABC):
    """Insertion-ordered task collection the scheduling engine reads from."""

    @abstractmethod
    def add(self, task: Task) -> None: ...
    @abstractmethod
    def get(self, task_id: str) -> Optional[Task]: ...
    @abstractmethod
    def list_all(self) -> List[Task]: ...
    @abstractmethod
    def remove(self, task_id: str) -> None: ...
    @abstractmethod
    def clear(self) -> None: ...


class ProjectRepository(ABC):
    @abstractmethod
    def save(self, name: str, tasks: List[Task]) -> None: ...
    @abstractmethod
    def load(self, name: str) -> List[Task]: ...
    @abstractmethod
    def delete(self, name: str) -> None: ...
    @abstractmethod
    def list_projects(self) -> List[SavedProjectInfo]: ...
    @abstractmethod
    def last_saved_name(self) -> Optional[str]: ...
