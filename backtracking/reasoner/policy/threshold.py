from __future__ import annotations

from backtracking.memory.reasoning_memory import ReasoningMemory
from backtracking.reasoner.evaluator import is_similar_to_failure
from backtracking.reasoner.models import BacktrackDecision, BacktrackReason, ReasoningStep
from backtracking.reasoner.policy.base import BacktrackPolicy

TERMINATE_ABOVE = 0.9


class ThresholdBacktrackPolicy(BacktrackPolicy):
    """Priority cascade, first matching rule wins:

    - confidence < threshold           → Backtrack(LOW_CONFIDENCE)
    - constraints not satisfied        → Backtrack(CONSTRAINT_VIOLATION)
    - resembles a failed attempt       → Backtrack(SIMILAR_TO_FAILURE)
    - confidence > 0.9 and constraints → Terminate
    - otherwise                        → Continue
    """

    def __init__(self, confidence_threshold: float = 0.7, terminate_above: float = TERMINATE_ABOVE) -> None:
        self.confidence_threshold = confidence_threshold
        self.terminate_above = terminate_above

    def __call__(self, step: ReasoningStep, memory: ReasoningMemory) -> BacktrackDecision:
        if step.confidence < self.confidence_threshold:
            return BacktrackDecision.backtrack(BacktrackReason.LOW_CONFIDENCE)
        if not step.constraints_satisfied:
            return BacktrackDecision.backtrack(BacktrackReason.CONSTRAINT_VIOLATION)
        if is_similar_to_failure(step, memory):
            return BacktrackDecision.backtrack(BacktrackReason.SIMILAR_TO_FAILURE)
        if step.confidence > self.terminate_above and step.constraints_satisfied:
            return BacktrackDecision.terminate()
        return BacktrackDecision.proceed()
