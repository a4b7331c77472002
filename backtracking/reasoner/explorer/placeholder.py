from __future__ import annotations

from typing import Any, Mapping

from backtracking.memory.reasoning_memory import ReasoningMemory
from backtracking.reasoner.exceptions import StrategyNotImplementedError
from backtracking.reasoner.explorer.base import ExplorationResult, PathExplorer


class BreadthFirstExplorer(PathExplorer):
    # Needs concurrent branch evaluation, each branch with its own memory and id namespace
    def explore(self, inputs: Mapping[str, Any], memory: ReasoningMemory) -> ExplorationResult:
        raise StrategyNotImplementedError("Breadth-first exploration is not implemented")


class DepthFirstExplorer(PathExplorer):
    def explore(self, inputs: Mapping[str, Any], memory: ReasoningMemory) -> ExplorationResult:
        raise StrategyNotImplementedError("Depth-first exploration is not implemented")
