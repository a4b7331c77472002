from __future__ import annotations

from typing import Sequence

from backtracking.reasoner.exceptions import NoReasoningPath
from backtracking.reasoner.models import ReasoningStep


def select_best_step(steps: Sequence[ReasoningStep]) -> ReasoningStep:
    """Highest-confidence step; the first one seen wins a tie."""
    if not steps:
        raise NoReasoningPath("No reasoning steps to select from")
    best = steps[0]
    for step in steps[1:]:
        if step.confidence > best.confidence:
            best = step
    return best
