from datetime import date

from core.events.domain_events import domain_events
from core.models import Task
from core.services.scheduling import SchedulingEngine
from core.services.task import TaskStore


def _build_chain(ts):
    start = date(2024, 1, 1)
    ts.create_task("A", start, duration_days=5, task_id="A")
    ts.create_task("B", start, duration_days=3, task_id="B")
    ts.create_task("C", start, duration_days=2, task_id="C")
    ts.add_dependency("A", "B")
    ts.add_dependency("B", "C")


def test_project_dates_and_critical_percentage(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    _build_chain(ts)
    ts.create_task("D", date(2024, 1, 1), duration_days=4, task_id="D")
    ts.add_dependency("A", "D", "SS", lag_days=2)

    sched.calculate()

    assert sched.project_start_date() == date(2024, 1, 1)
    assert sched.project_end_date() == date(2024, 1, 11)
    assert sched.project_duration_days() == 10
    assert sched.critical_path_percentage() == 75

    summary = sched.summary()
    assert summary.tasks_total == 4
    assert summary.critical_tasks == 3
    assert summary.critical_path_percentage == 75
    assert summary.project_name == services["task_store"].project_name
    assert not summary.is_stale


def test_critical_percentage_rounds_half_up():
    store = TaskStore()
    engine = SchedulingEngine(store)
    try:
        for i in range(8):
            store.add(Task(id=f"T{i}", name=f"T{i}", start_date=date(2024, 1, 1), duration_days=1))
        store.get("T0").is_critical = True

        assert engine.critical_path_percentage() == 13
    finally:
        engine.close()


def test_empty_project_metrics(services):
    sched = services["scheduling_engine"]

    result = sched.calculate()

    assert result.task_count == 0
    assert result.project_finish is None
    assert sched.project_start_date() is None
    assert sched.project_end_date() is None
    assert sched.project_duration_days() == 0
    assert sched.critical_path_percentage() == 0
    assert sched.critical_tasks() == []


def test_end_date_uses_authored_dates_before_calculation(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    _build_chain(ts)

    # nothing calculated yet: every task ends at start + duration
    assert sched.project_end_date() == date(2024, 1, 6)


def test_engine_goes_stale_on_task_changes(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    _build_chain(ts)
    assert sched.is_stale

    sched.calculate()
    assert not sched.is_stale

    ts.update_task("C", duration_days=4)
    assert sched.is_stale
    assert sched.summary().is_stale

    sched.calculate()
    assert services["task_store"].get("C").early_finish == date(2024, 1, 13)


def test_schedule_recalculated_event_carries_project_name(services):
    seen = []
    domain_events.schedule_recalculated.connect(seen.append)
    try:
        services["project_service"].rename_project("Metrics Project")
        services["scheduling_engine"].calculate()
    finally:
        domain_events.schedule_recalculated.disconnect(seen.append)

    assert seen == ["Metrics Project"]


def test_change_during_calculation_keeps_engine_stale():
    class _EditedMidRunStore(TaskStore):
        edits_pending = 1

        def list_all(self):
            tasks = super().list_all()
            if self.edits_pending:
                self.edits_pending -= 1
                # another writer changes the tasks while the passes run
                domain_events.tasks_changed.emit(self.project_name)
            return tasks

    store = _EditedMidRunStore()
    store.add(Task(id="A", name="A", start_date=date(2024, 1, 1), duration_days=2))
    engine = SchedulingEngine(store)
    try:
        engine.calculate()
        assert engine.is_stale
        assert store.get("A").early_finish == date(2024, 1, 3)

        engine.calculate()
        assert not engine.is_stale
    finally:
        engine.close()
