from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class StepKind(Enum):
    INITIAL = "initial"
    CONTINUATION = "continuation"
    ALTERNATIVE = "alternative"


class BacktrackReason(Enum):
    """Why the current step was abandoned."""

    LOW_CONFIDENCE = "low_confidence"
    CONSTRAINT_VIOLATION = "constraint_violation"
    SIMILAR_TO_FAILURE = "similar_to_failure"
    # Not produced by the policy; used when forward generation itself fails
    GENERATION_FAILED = "generation_failed"

    @property
    def description(self) -> str:
        """Text handed to the LLM when asking for an alternative."""
        return _REASON_TEXT[self]


_REASON_TEXT = {
    BacktrackReason.LOW_CONFIDENCE: "low confidence in reasoning",
    BacktrackReason.CONSTRAINT_VIOLATION: "constraint violation detected",
    BacktrackReason.SIMILAR_TO_FAILURE: "similar to previous failed attempt",
    BacktrackReason.GENERATION_FAILED: "generation failed",
}


class Decision(Enum):
    CONTINUE = "continue"
    BACKTRACK = "backtrack"
    TERMINATE = "terminate"


@dataclass(frozen=True)
class BacktrackDecision:
    """Policy output: Continue | Backtrack(reason) | Terminate."""

    decision: Decision
    reason: Optional[BacktrackReason] = None

    @classmethod
    def proceed(cls) -> "BacktrackDecision":
        return cls(Decision.CONTINUE)

    @classmethod
    def backtrack(cls, reason: BacktrackReason) -> "BacktrackDecision":
        return cls(Decision.BACKTRACK, reason)

    @classmethod
    def terminate(cls) -> "BacktrackDecision":
        return cls(Decision.TERMINATE)

    def __str__(self) -> str:
        if self.reason is None:
            return self.decision.value
        return f"{self.decision.value}({self.reason.value})"


@dataclass
class ReasoningStep:
    """One unit of generated reasoning plus its evaluation metadata.

    ``confidence`` and ``constraints_satisfied`` hold placeholders until the
    evaluator has scored the step.
    """

    id: str
    content: str
    depth: int = 0
    parent_id: Optional[str] = None
    confidence: float = 0.5
    constraints_satisfied: bool = True
    kind: StepKind = StepKind.INITIAL
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
