"""Track changes in the task collection and schedule recalculations."""
from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.project_changed: Signal[str] = Signal()        # project name
        self.tasks_changed: Signal[str] = Signal()          # project name
        self.schedule_recalculated: Signal[str] = Signal()  # project name


# SINGLE global instance
domain_events = DomainEvents()
