import pytest

from backtracking.memory.reasoning_memory import ReasoningMemory
from backtracking.reasoner.evaluator import confidence as heuristic_confidence
from backtracking.reasoner.models import BacktrackDecision, BacktrackReason, Decision, ReasoningStep
from backtracking.reasoner.policy.threshold import ThresholdBacktrackPolicy


def _step(confidence: float, satisfied: bool = True, content: str = "some reasoning") -> ReasoningStep:
    return ReasoningStep(id="s1", content=content, confidence=confidence, constraints_satisfied=satisfied)


@pytest.fixture
def policy() -> ThresholdBacktrackPolicy:
    return ThresholdBacktrackPolicy(confidence_threshold=0.7)


def test_low_confidence_backtracks(policy):
    decision = policy(_step(0.6), ReasoningMemory())
    assert decision == BacktrackDecision.backtrack(BacktrackReason.LOW_CONFIDENCE)


def test_low_confidence_wins_over_constraint_violation(policy):
    decision = policy(_step(0.6, satisfied=False), ReasoningMemory())
    assert decision.reason is BacktrackReason.LOW_CONFIDENCE


def test_constraint_violation_backtracks(policy):
    decision = policy(_step(0.8, satisfied=False), ReasoningMemory())
    assert decision == BacktrackDecision.backtrack(BacktrackReason.CONSTRAINT_VIOLATION)


def test_similar_to_failure_backtracks(policy):
    memory = ReasoningMemory()
    memory.record_failure(ReasoningStep(id="old", content="some reasoning"))
    decision = policy(_step(0.95), memory)
    assert decision == BacktrackDecision.backtrack(BacktrackReason.SIMILAR_TO_FAILURE)


def test_high_confidence_terminates(policy):
    assert policy(_step(0.95), ReasoningMemory()).decision is Decision.TERMINATE


def test_exactly_point_nine_continues(policy):
    text = "This is clearly right and definitely checked.".ljust(600, ".")
    step = _step(heuristic_confidence(text), content=text)
    assert policy(step, ReasoningMemory()) == BacktrackDecision.proceed()


def test_threshold_is_inclusive(policy):
    assert policy(_step(0.7), ReasoningMemory()).decision is Decision.CONTINUE


def test_threshold_above_one_always_backtracks():
    policy = ThresholdBacktrackPolicy(confidence_threshold=1.1)
    decision = policy(_step(1.0), ReasoningMemory())
    assert decision.reason is BacktrackReason.LOW_CONFIDENCE


def test_decision_str():
    assert str(BacktrackDecision.backtrack(BacktrackReason.LOW_CONFIDENCE)) == "backtrack(low_confidence)"
    assert str(BacktrackDecision.terminate()) == "terminate"
    assert str(BacktrackDecision.proceed()) == "continue"


def test_reason_descriptions():
    assert BacktrackReason.LOW_CONFIDENCE.description == "low confidence in reasoning"
    assert BacktrackReason.CONSTRAINT_VIOLATION.description == "constraint violation detected"
    assert BacktrackReason.SIMILAR_TO_FAILURE.description == "similar to previous failed attempt"
