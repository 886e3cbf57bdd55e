from datetime import date

from core.models import DependencyType
from core.services.scheduling.passes import forward_constraint


def _chain(ts):
    # A(5) -> B(3) -> C(2), every task authored on 2024-01-01
    start = date(2024, 1, 1)
    a = ts.create_task("Task A", start, duration_days=5, task_id="A")
    b = ts.create_task("Task B", start, duration_days=3, task_id="B")
    c = ts.create_task("Task C", start, duration_days=2, task_id="C")
    ts.add_dependency("A", "B", DependencyType.FINISH_TO_START)
    ts.add_dependency("B", "C", DependencyType.FINISH_TO_START)
    return a, b, c


def test_cpm_forward_backward_basic_chain(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    a, b, c = _chain(ts)

    result = sched.calculate()

    assert (a.early_start, a.early_finish) == (date(2024, 1, 1), date(2024, 1, 6))
    assert (b.early_start, b.early_finish) == (date(2024, 1, 6), date(2024, 1, 9))
    assert (c.early_start, c.early_finish) == (date(2024, 1, 9), date(2024, 1, 11))

    for task in (a, b, c):
        assert task.late_start == task.early_start
        assert task.late_finish == task.early_finish
        assert task.total_float_days == 0
        assert task.free_float_days == 0
        assert task.is_critical

    assert result.topo_order == ["A", "B", "C"]
    assert result.project_finish == date(2024, 1, 11)
    assert result.critical_task_ids == ["A", "B", "C"]


def test_cpm_start_to_start_lag_creates_float(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    a, b, c = _chain(ts)
    d = ts.create_task("Task D", date(2024, 1, 1), duration_days=4, task_id="D")
    ts.add_dependency("A", "D", DependencyType.START_TO_START, lag_days=2)

    sched.calculate()

    assert d.early_start == date(2024, 1, 3)
    assert d.early_finish == date(2024, 1, 7)
    assert d.late_finish == date(2024, 1, 11)
    assert d.total_float_days == 4
    assert d.free_float_days == 4
    assert not d.is_critical
    # the SS edge does not pull A's late finish past B's late start
    assert a.late_finish == date(2024, 1, 6)
    assert a.is_critical


def test_cpm_finish_to_finish_allows_negative_float(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    p = ts.create_task("P", date(2024, 1, 1), duration_days=5, task_id="P")
    s = ts.create_task("S", date(2024, 1, 1), duration_days=2, task_id="S")
    ts.add_dependency("P", "S", DependencyType.FINISH_TO_FINISH)

    sched.calculate()

    assert (s.early_start, s.early_finish) == (date(2024, 1, 4), date(2024, 1, 6))
    assert s.total_float_days == 0
    assert p.late_finish == date(2024, 1, 4)
    assert p.late_start == date(2023, 12, 30)
    assert p.total_float_days == -2
    assert p.is_critical


def test_cpm_start_to_finish_uses_predecessor_authored_start(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    ts.create_task("P", date(2024, 1, 10), duration_days=3, task_id="P")
    s = ts.create_task("S", date(2024, 1, 1), duration_days=2, task_id="S")
    ts.add_dependency("P", "S", DependencyType.START_TO_FINISH)

    sched.calculate()

    assert s.early_start == date(2024, 1, 8)
    assert s.early_finish == date(2024, 1, 10)


def test_cpm_milestone_has_zero_length(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    _chain(ts)
    m = ts.create_task("Go live", date(2024, 1, 1), duration_days=5, is_milestone=True, task_id="M")
    ts.add_dependency("C", "M")

    sched.calculate()

    assert m.duration_days == 0
    assert m.early_start == m.early_finish == date(2024, 1, 11)
    assert m.late_start == m.late_finish == date(2024, 1, 11)
    assert m.is_critical


def test_cpm_authored_start_is_a_floor(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    a = ts.create_task("A", date(2024, 1, 1), duration_days=5, task_id="A")
    b = ts.create_task("B", date(2024, 1, 10), duration_days=2, task_id="B")
    ts.add_dependency("A", "B")

    sched.calculate()

    assert b.early_start == date(2024, 1, 10)
    assert b.is_critical
    assert a.late_finish == date(2024, 1, 10)
    assert a.total_float_days == 4
    assert a.free_float_days == 4
    assert not a.is_critical


def test_cpm_unknown_dependency_type_behaves_as_finish_to_start(services):
    store = services["task_store"]
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    a = ts.create_task("A", date(2024, 1, 1), duration_days=5, task_id="A")
    b = ts.create_task("B", date(2024, 1, 1), duration_days=2, task_id="B")
    store.get("B").add_predecessor("A", "XX", 1)

    sched.calculate()

    assert b.early_start == date(2024, 1, 7)
    assert a.late_finish == date(2024, 1, 6)
    assert a.total_float_days == 0

    ts.update_task("B", start_date=date(2024, 1, 10))
    sched.calculate()

    assert b.early_start == date(2024, 1, 10)
    assert a.late_finish == date(2024, 1, 9)
    assert a.total_float_days == 3
    # not an FS/SS link, so free float falls back to total float
    assert a.free_float_days == 3


def test_cpm_free_float_measures_gap_to_successor(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    a = ts.create_task("A", date(2024, 1, 1), duration_days=2, task_id="A")
    b = ts.create_task("B", date(2024, 1, 1), duration_days=10, task_id="B")
    c = ts.create_task("C", date(2024, 1, 1), duration_days=1, task_id="C")
    ts.add_dependency("A", "C")
    ts.add_dependency("B", "C")

    sched.calculate()

    assert c.early_start == date(2024, 1, 11)
    assert a.free_float_days == 8
    assert a.total_float_days == 8
    assert b.free_float_days == 0


def test_cpm_recalculation_is_idempotent(services):
    services["project_service"].load_sample_project(date(2024, 3, 4))
    sched = services["scheduling_engine"]
    store = services["task_store"]

    def snapshot():
        return [
            (t.id, t.early_start, t.early_finish, t.late_start, t.late_finish,
             t.free_float_days, t.total_float_days, t.is_critical)
            for t in store.list_all()
        ]

    sched.calculate()
    first = snapshot()
    sched.calculate()

    assert snapshot() == first


def test_cpm_critical_flag_matches_total_float(services):
    services["project_service"].load_sample_project(date(2024, 3, 4))
    sched = services["scheduling_engine"]

    result = sched.calculate()
    tasks = services["task_store"].list_all()

    assert result.critical_task_ids == [t.id for t in tasks if t.total_float_days <= 0]
    assert [t.id for t in sched.critical_tasks()] == result.critical_task_ids
    assert "T1" in result.critical_task_ids
    assert "T18" in result.critical_task_ids
    for task in tasks:
        assert task.early_finish >= task.early_start
        assert task.late_start is not None


def test_auto_schedule_moves_starts_onto_early_start(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    a, b, c = _chain(ts)

    sched.auto_schedule()

    assert [t.start_date for t in (a, b, c)] == [
        date(2024, 1, 1),
        date(2024, 1, 6),
        date(2024, 1, 9),
    ]
    assert all(t.start_date == t.early_start for t in (a, b, c))
    assert all(t.total_float_days == 0 for t in (a, b, c))
    assert not sched.is_stale


def test_cpm_lower_case_type_code_is_not_recognised(services):
    store = services["task_store"]
    ts = services["task_service"]
    ts.create_task("A", date(2024, 1, 1), duration_days=5, task_id="A")
    b = ts.create_task("B", date(2024, 1, 1), duration_days=3, task_id="B")
    store.get("B").add_predecessor("A", "ss", 2)

    services["scheduling_engine"].calculate()

    # scheduled as FS + 2, not SS + 2
    assert b.early_start == date(2024, 1, 8)
    assert [(i.task_id, i.code) for i in ts.validate()] == [("B", "DEPENDENCY_TYPE_INVALID")]
    assert DependencyType.from_code("ss") is None
    assert DependencyType.coerce(" ss ") is DependencyType.START_TO_START


def test_cpm_negative_lag_in_both_passes(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    a = ts.create_task("A", date(2024, 1, 1), duration_days=5, task_id="A")
    b = ts.create_task("B", date(2024, 1, 1), duration_days=3, task_id="B")
    ts.add_dependency("A", "B", DependencyType.FINISH_TO_START, lag_days=-2)

    sched.calculate()

    assert (b.early_start, b.early_finish) == (date(2024, 1, 4), date(2024, 1, 7))
    assert (b.late_start, b.late_finish) == (date(2024, 1, 4), date(2024, 1, 7))
    # late finish of A is B's late start minus a lead of -2
    assert a.late_finish == date(2024, 1, 6)
    assert a.total_float_days == 0
    assert a.free_float_days == 0


def test_cpm_backward_start_to_start_uses_successor_late_finish(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    a = ts.create_task("A", date(2024, 1, 1), duration_days=2, task_id="A")
    b = ts.create_task("B", date(2024, 1, 1), duration_days=3, task_id="B")
    ts.create_task("Long", date(2024, 1, 1), duration_days=10, task_id="L")
    ts.add_dependency("A", "B", DependencyType.START_TO_START, lag_days=1)

    sched.calculate()

    assert (b.early_start, b.early_finish) == (date(2024, 1, 2), date(2024, 1, 5))
    assert b.late_finish == date(2024, 1, 11)
    assert a.late_finish == date(2024, 1, 12)
    assert a.late_start == date(2024, 1, 10)
    assert a.total_float_days == 9
    assert a.free_float_days == 0


def test_cpm_backward_start_to_finish_uses_successor_authored_start(services):
    ts = services["task_service"]
    sched = services["scheduling_engine"]
    p = ts.create_task("P", date(2024, 1, 10), duration_days=3, task_id="P")
    s = ts.create_task("S", date(2024, 1, 1), duration_days=2, task_id="S")
    ts.add_dependency("P", "S", DependencyType.START_TO_FINISH, lag_days=2)

    sched.calculate()

    assert (s.early_start, s.early_finish) == (date(2024, 1, 10), date(2024, 1, 12))
    assert s.total_float_days == 1
    # S authored on 1/1: 1/1 + lag 2 + duration(P) 3
    assert p.late_finish == date(2024, 1, 6)
    assert p.late_start == date(2024, 1, 3)
    assert p.total_float_days == -7
    assert p.is_critical


def test_auto_scheduled_sample_is_topologically_consistent(services):
    services["project_service"].load_sample_project(date(2024, 3, 4))
    store = services["task_store"]

    services["scheduling_engine"].auto_schedule()

    for task in store.list_all():
        assert task.total_float_days >= 0
        assert task.free_float_days >= 0

        bounds = []
        for dep in task.predecessors:
            pred = store.get(dep.predecessor_task_id)
            bounds.append(forward_constraint(task, dep, pred, pred.early_start, pred.early_finish))
        if not bounds:
            assert task.early_start == task.start_date
            continue
        assert all(task.early_start >= bound for bound in bounds)
        # tight for at least one predecessor
        assert task.early_start == max(bounds)
