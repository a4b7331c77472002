from __future__ import annotations

from typing import Dict, List, Optional

from backtracking.reasoner.models import ReasoningStep


class StepArena:
    """Every step generated in a run, indexed by id."""

    def __init__(self) -> None:
        self._steps: Dict[str, ReasoningStep] = {}

    def add(self, step: ReasoningStep) -> ReasoningStep:
        self._steps[step.id] = step
        return step

    def get(self, step_id: str) -> ReasoningStep:
        return self._steps[step_id]

    def lineage(self, step_id: str) -> List[ReasoningStep]:
        """Root-first chain of ancestors ending at ``step_id``."""
        chain: List[ReasoningStep] = []
        seen = set()
        current: Optional[str] = step_id
        while current is not None and current in self._steps and current not in seen:
            seen.add(current)
            chain.append(self._steps[current])
            current = self._steps[current].parent_id
        chain.reverse()
        return chain

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._steps

    def __len__(self) -> int:
        return len(self._steps)
