"""Per-run ledger of successful steps, failed attempts, violations and confidence."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from backtracking.reasoner.exceptions import NoBacktrackPoint
from backtracking.reasoner.models import ReasoningStep


@dataclass
class ReasoningMemory:
    """Append-only ledger for a single exploration run.

    Both step lists are kept most-recent-first so the head of
    ``successful_paths`` is the natural backtrack point.
    """

    successful_paths: List[ReasoningStep] = field(default_factory=list)
    failed_attempts: List[ReasoningStep] = field(default_factory=list)
    constraint_violations: List[Tuple[str, str]] = field(default_factory=list)
    confidence_history: List[Tuple[str, float]] = field(default_factory=list)

    enabled = True

    def record_success(self, step: ReasoningStep) -> None:
        self.successful_paths.insert(0, step)

    def record_failure(self, step: ReasoningStep) -> None:
        self.failed_attempts.insert(0, step)

    def record_violation(self, step_id: str, constraint_name: str) -> None:
        self.constraint_violations.append((step_id, constraint_name))

    def record_confidence(self, step_id: str, confidence: float) -> None:
        self.confidence_history.append((step_id, confidence))

    def find_backtrack_point(self) -> ReasoningStep:
        """Most recently recorded successful step (LIFO)."""
        if not self.successful_paths:
            raise NoBacktrackPoint("No successful step recorded to backtrack to")
        return self.successful_paths[0]


class DisabledMemory(ReasoningMemory):
    """Memory with recording switched off: writes are dropped, lookups fail."""

    enabled = False

    def record_success(self, step: ReasoningStep) -> None:
        return None

    def record_failure(self, step: ReasoningStep) -> None:
        return None

    def record_violation(self, step_id: str, constraint_name: str) -> None:
        return None

    def record_confidence(self, step_id: str, confidence: float) -> None:
        return None

    def find_backtrack_point(self) -> ReasoningStep:
        raise NoBacktrackPoint("Memory is disabled; there is nothing to backtrack to")


def create_memory(enabled: bool = True) -> ReasoningMemory:
    """Fresh memory for one run. Never share an instance between runs."""
    return ReasoningMemory() if enabled else DisabledMemory()
