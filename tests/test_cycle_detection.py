from datetime import date

import pytest

from core.exceptions import BusinessRuleError, CircularDependencyError
from core.models import DependencyType, Task, TaskDependency
from core.services.scheduling import build_dependency_graph, find_cycle, topological_order

START = date(2024, 1, 1)


def _task(task_id, *preds, duration=1):
    return Task(
        id=task_id,
        name=f"Task {task_id}",
        start_date=START,
        duration_days=duration,
        predecessors=[TaskDependency(p) for p in preds],
    )


def _assert_links_follow(cycle, store):
    assert cycle[0] == cycle[-1]
    for before, after in zip(cycle, cycle[1:]):
        pred_ids = [d.predecessor_task_id for d in store.get(after).predecessors]
        assert before in pred_ids


def test_two_task_cycle_is_reported_in_traversal_order(services):
    store = services["task_store"]
    sched = services["scheduling_engine"]
    store.add(_task("A", "B"))
    store.add(_task("B", "A"))

    with pytest.raises(CircularDependencyError) as exc_info:
        sched.calculate()

    err = exc_info.value
    assert err.cycle == ["A", "B", "A"]
    assert err.code == "SCHEDULE_CYCLE"
    assert "A -> B -> A" in str(err)
    assert isinstance(err, BusinessRuleError)
    _assert_links_follow(err.cycle, store)


def test_self_loop_is_a_cycle(services):
    store = services["task_store"]
    store.add(_task("A", "A"))

    with pytest.raises(CircularDependencyError) as exc_info:
        services["scheduling_engine"].calculate()

    assert exc_info.value.cycle == ["A", "A"]


def test_longer_cycle_behind_acyclic_prefix(services):
    store = services["task_store"]
    store.add(_task("START"))
    store.add(_task("A", "START", "C"))
    store.add(_task("B", "A"))
    store.add(_task("C", "B"))
    store.add(_task("D", "C"))

    with pytest.raises(CircularDependencyError) as exc_info:
        services["scheduling_engine"].calculate()

    cycle = exc_info.value.cycle
    assert cycle == ["A", "B", "C", "A"]
    assert "START" not in cycle
    _assert_links_follow(cycle, store)


def test_cycle_leaves_calculated_fields_cleared(services):
    store = services["task_store"]
    sched = services["scheduling_engine"]
    store.add(_task("A", duration=3))
    store.add(_task("B", "A", duration=2))
    store.add(_task("OTHER", duration=4))
    sched.calculate()
    assert store.get("B").early_start == date(2024, 1, 4)

    store.get("A").add_predecessor("B")
    with pytest.raises(CircularDependencyError):
        sched.calculate()

    for task in store.list_all():
        assert task.early_start is None
        assert task.early_finish is None
        assert task.late_start is None
        assert task.late_finish is None
        assert task.total_float_days == 0
        assert task.free_float_days == 0
        assert not task.is_critical
    assert sched.is_stale


def test_add_dependency_rejects_cycle_before_calculation(services):
    ts = services["task_service"]
    ts.create_task("A", START, task_id="A")
    ts.create_task("B", START, task_id="B")
    ts.add_dependency("A", "B")

    with pytest.raises(BusinessRuleError) as exc_info:
        ts.add_dependency("B", "A", DependencyType.START_TO_START)

    assert exc_info.value.code == "DEPENDENCY_CYCLE"
    assert ts.list_dependencies("A") == []
    services["scheduling_engine"].calculate()


def test_topological_order_breaks_ties_by_insertion_order():
    tasks = [_task("C", "A"), _task("A"), _task("B"), _task("D", "C", "B")]

    order = topological_order(build_dependency_graph(tasks))

    assert order == ["A", "B", "C", "D"]


def test_duplicate_edges_do_not_block_sorting():
    a = _task("A")
    b = _task("B")
    b.predecessors = [
        TaskDependency("A", DependencyType.FINISH_TO_START),
        TaskDependency("A", DependencyType.START_TO_START, 2),
    ]
    graph = build_dependency_graph([b, a])

    assert find_cycle(graph) is None
    assert topological_order(graph) == ["A", "B"]


def test_dangling_predecessor_is_ignored_by_the_engine(services):
    store = services["task_store"]
    store.add(_task("A", "MISSING", duration=2))

    services["scheduling_engine"].calculate()

    task = store.get("A")
    assert task.early_start == START
    assert task.early_finish == date(2024, 1, 3)
    codes = [issue.code for issue in services["task_service"].validate()]
    assert codes == ["PREDECESSOR_NOT_FOUND"]


def test_deep_chain_does_not_hit_recursion_limit():
    tasks = [_task("N0")]
    for i in range(1, 3000):
        tasks.append(_task(f"N{i}", f"N{i - 1}"))
    tasks[0].predecessors.append(TaskDependency("N2999"))

    cycle = find_cycle(build_dependency_graph(tasks))

    assert cycle is not None
    assert len(cycle) == 3001
    assert cycle[0] == cycle[-1] == "N0"
