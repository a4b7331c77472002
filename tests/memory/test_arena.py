from backtracking.memory.arena import StepArena
from backtracking.reasoner.models import ReasoningStep


def _step(step_id: str, parent_id: str | None = None) -> ReasoningStep:
    return ReasoningStep(id=step_id, content=step_id, parent_id=parent_id)


def test_lineage_is_root_first():
    arena = StepArena()
    arena.add(_step("root"))
    arena.add(_step("child", "root"))
    arena.add(_step("grandchild", "child"))

    assert [s.id for s in arena.lineage("grandchild")] == ["root", "child", "grandchild"]


def test_lineage_stops_at_unknown_parent():
    arena = StepArena()
    arena.add(_step("orphan", "missing"))
    assert [s.id for s in arena.lineage("orphan")] == ["orphan"]


def test_lineage_of_unknown_step_is_empty():
    assert StepArena().lineage("nope") == []


def test_lineage_survives_cycles():
    arena = StepArena()
    arena.add(_step("a", "b"))
    arena.add(_step("b", "a"))
    assert [s.id for s in arena.lineage("a")] == ["b", "a"]


def test_container_protocol():
    arena = StepArena()
    step = arena.add(_step("x"))
    assert "x" in arena
    assert "y" not in arena
    assert len(arena) == 1
    assert arena.get("x") is step
