from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping

from backtracking.memory.arena import StepArena
from backtracking.memory.reasoning_memory import ReasoningMemory
from backtracking.reasoner.config import BacktrackingConfig
from backtracking.reasoner.evaluator import StepEvaluator
from backtracking.reasoner.generator import StepGenerator
from backtracking.reasoner.models import ReasoningStep
from backtracking.reasoner.policy.base import BacktrackPolicy


class Termination(str, Enum):
    """Why exploration stopped."""

    EARLY_TERMINAL = "early_terminal"
    TERMINATE = "terminate"
    MAX_DEPTH = "max_depth"
    NO_BACKTRACK_POINT = "no_backtrack_point"
    ALTERNATIVE_FAILED = "alternative_failed"
    BACKTRACK_LIMIT = "backtrack_limit"


@dataclass
class ExplorationResult:
    """What one exploration run produced.

    ``final_path`` holds the finalized step only; the full ancestry of that
    step is available through ``arena.lineage``.
    """

    final_path: List[ReasoningStep]
    termination: Termination
    memory: ReasoningMemory
    arena: StepArena
    iterations: int = 0
    backtracks: int = 0
    depth: int = 0

    @property
    def final_step(self) -> ReasoningStep:
        return self.final_path[-1]


class PathExplorer(ABC):
    """Drives step generation for one run and decides where the search goes next."""

    def __init__(
        self,
        *,
        generator: StepGenerator,
        evaluator: StepEvaluator,
        policy: BacktrackPolicy,
        config: BacktrackingConfig,
    ) -> None:
        self.generator = generator
        self.evaluator = evaluator
        self.policy = policy
        self.config = config

    @abstractmethod
    def explore(self, inputs: Mapping[str, Any], memory: ReasoningMemory) -> ExplorationResult:
        ...
