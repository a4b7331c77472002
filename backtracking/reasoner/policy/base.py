from __future__ import annotations

from abc import ABC, abstractmethod

from backtracking.memory.reasoning_memory import ReasoningMemory
from backtracking.reasoner.models import BacktrackDecision, ReasoningStep


class BacktrackPolicy(ABC):
    """Decides what the explorer does with an evaluated step.

    Role
    - Given the evaluated step and the run's memory, return one of
      Continue, Backtrack(reason) or Terminate.

    Why a standalone component
    - The explorer loop stays a plain state machine; the rules that steer it
      live here and can be swapped without touching the loop.
    - Policies are pure functions of (step, memory) and can be unit-tested
      without an LLM.

    Contract
    - Must not mutate the step or the memory.
    - Must not raise for well-formed input; always return a decision.
    """

    @abstractmethod
    def __call__(self, step: ReasoningStep, memory: ReasoningMemory) -> BacktrackDecision:
        ...
