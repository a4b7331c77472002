import pytest

from backtracking.memory.reasoning_memory import DisabledMemory, ReasoningMemory, create_memory
from backtracking.reasoner.exceptions import NoBacktrackPoint
from backtracking.reasoner.models import ReasoningStep


def _step(step_id: str) -> ReasoningStep:
    return ReasoningStep(id=step_id, content=f"content of {step_id}")


def test_backtrack_point_is_most_recent_success():
    memory = ReasoningMemory()
    memory.record_success(_step("a"))
    memory.record_success(_step("b"))
    assert memory.find_backtrack_point().id == "b"
    assert [s.id for s in memory.successful_paths] == ["b", "a"]


def test_empty_memory_has_no_backtrack_point():
    with pytest.raises(NoBacktrackPoint):
        ReasoningMemory().find_backtrack_point()


def test_failures_are_most_recent_first():
    memory = ReasoningMemory()
    memory.record_failure(_step("a"))
    memory.record_failure(_step("b"))
    assert [s.id for s in memory.failed_attempts] == ["b", "a"]


def test_violations_and_confidence_are_appended():
    memory = ReasoningMemory()
    memory.record_violation("a", "no_numbers")
    memory.record_confidence("a", 0.6)
    memory.record_confidence("b", 0.8)
    assert memory.constraint_violations == [("a", "no_numbers")]
    assert memory.confidence_history == [("a", 0.6), ("b", 0.8)]


def test_disabled_memory_drops_writes():
    memory = DisabledMemory()
    memory.record_success(_step("a"))
    memory.record_failure(_step("b"))
    memory.record_violation("a", "rule")
    memory.record_confidence("a", 0.5)

    assert memory.enabled is False
    assert memory.successful_paths == []
    assert memory.failed_attempts == []
    assert memory.constraint_violations == []
    assert memory.confidence_history == []
    with pytest.raises(NoBacktrackPoint):
        memory.find_backtrack_point()


def test_create_memory():
    assert type(create_memory()) is ReasoningMemory
    assert isinstance(create_memory(enabled=False), DisabledMemory)
    assert create_memory() is not create_memory()
