"""Heuristic scoring of reasoning steps.

Confidence is a cheap lexical heuristic, not a model judgement:

    0.5 + min(len / 500, 0.3) + 0.05 * assertive words - 0.1 * hedge words

clamped to [0, 1]. Each listed word counts once if it appears anywhere in
the text (case-insensitive substring match).
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from backtracking.memory.reasoning_memory import ReasoningMemory
from backtracking.reasoner.config import ConstraintFunction
from backtracking.reasoner.models import ReasoningStep

from utils.logger import get_logger

logger = get_logger(__name__)

BASE_CONFIDENCE = 0.5
LENGTH_SCALE = 500.0
MAX_LENGTH_BONUS = 0.3
UNCERTAINTY_WORDS = ("maybe", "possibly", "might", "could", "perhaps", "unsure")
UNCERTAINTY_PENALTY = 0.1
CONFIDENCE_WORDS = ("definitely", "certainly", "clearly", "obviously", "sure")
CONFIDENCE_BONUS = 0.05
FAILURE_SIMILARITY_THRESHOLD = 0.8


@dataclass(frozen=True)
class ConstraintOutcome:
    """Result of running one constraint predicate.

    ``error`` is set when the predicate raised; such outcomes are never
    satisfied.
    """

    name: str
    satisfied: bool
    error: Optional[str] = None

    @property
    def failed_to_run(self) -> bool:
        return self.error is not None


def _count_present(text: str, words: Sequence[str]) -> int:
    lowered = text.lower()
    return sum(1 for word in words if word in lowered)


def confidence(content: str) -> float:
    length_factor = min(len(content) / LENGTH_SCALE, MAX_LENGTH_BONUS)
    penalty = UNCERTAINTY_PENALTY * _count_present(content, UNCERTAINTY_WORDS)
    bonus = CONFIDENCE_BONUS * _count_present(content, CONFIDENCE_WORDS)
    # Rounded so threshold comparisons are not at the mercy of float noise
    score = round(BASE_CONFIDENCE + length_factor + bonus - penalty, 10)
    return max(0.0, min(1.0, score))


def constraint_name(fn: ConstraintFunction) -> str:
    return getattr(fn, "__name__", None) or repr(fn)


def check_constraints(
    step: ReasoningStep, inputs: Dict[str, Any], fns: Sequence[ConstraintFunction]
) -> List[ConstraintOutcome]:
    outcomes: List[ConstraintOutcome] = []
    for fn in fns:
        name = constraint_name(fn)
        try:
            outcomes.append(ConstraintOutcome(name=name, satisfied=bool(fn(step, inputs))))
        except Exception as exc:
            # Fail closed: a predicate that cannot run does not vouch for the step
            logger.warning("constraint_raised", constraint=name, step_id=step.id, error=str(exc))
            outcomes.append(ConstraintOutcome(name=name, satisfied=False, error=f"{type(exc).__name__}: {exc}"))
    return outcomes


def constraints_satisfied(
    step: ReasoningStep, inputs: Dict[str, Any], fns: Sequence[ConstraintFunction]
) -> bool:
    return all(outcome.satisfied for outcome in check_constraints(step, inputs, fns))


def similarity(a: str, b: str) -> float:
    """Word-level Jaccard similarity of lower-cased, whitespace-split tokens."""
    words_a = set(a.lower().split())
    words_b = set(b.lower().split())
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def is_similar_to_failure(step: ReasoningStep, memory: ReasoningMemory) -> bool:
    return any(
        similarity(step.content, failed.content) > FAILURE_SIMILARITY_THRESHOLD
        for failed in memory.failed_attempts
    )


class StepEvaluator:
    """Scores a freshly generated step and writes the results into memory."""

    def __init__(self, constraint_functions: Sequence[ConstraintFunction] | None = None) -> None:
        self.constraint_functions = list(constraint_functions or [])

    def evaluate(
        self, step: ReasoningStep, inputs: Dict[str, Any], memory: ReasoningMemory | None = None
    ) -> Tuple[ReasoningStep, List[ConstraintOutcome]]:
        outcomes = check_constraints(step, inputs, self.constraint_functions)
        evaluated = replace(
            step,
            confidence=confidence(step.content),
            constraints_satisfied=all(o.satisfied for o in outcomes),
        )

        if memory is not None:
            memory.record_confidence(evaluated.id, evaluated.confidence)
            for outcome in outcomes:
                if not outcome.satisfied:
                    memory.record_violation(evaluated.id, outcome.name)

        logger.debug(
            "step_evaluated",
            step_id=evaluated.id,
            depth=evaluated.depth,
            confidence=round(evaluated.confidence, 3),
            constraints_satisfied=evaluated.constraints_satisfied,
            violations=[o.name for o in outcomes if not o.satisfied],
            errored=[o.name for o in outcomes if o.failed_to_run],
        )
        return evaluated, outcomes
