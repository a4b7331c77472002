import pytest

from backtracking.reasoner.exceptions import NoReasoningPath
from backtracking.reasoner.models import ReasoningStep
from backtracking.reasoner.selector import select_best_step


def _step(step_id: str, confidence: float) -> ReasoningStep:
    return ReasoningStep(id=step_id, content=step_id, confidence=confidence)


def test_highest_confidence_wins():
    assert select_best_step([_step("a", 0.6), _step("b", 0.9), _step("c", 0.7)]).id == "b"


def test_first_step_wins_a_tie():
    assert select_best_step([_step("a", 0.8), _step("b", 0.8)]).id == "a"


def test_empty_input_raises():
    with pytest.raises(NoReasoningPath):
        select_best_step([])
