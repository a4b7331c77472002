from __future__ import annotations

from typing import Dict, Type

from backtracking.reasoner.config import ExplorationStrategy
from backtracking.reasoner.explorer.adaptive import AdaptiveExplorer
from backtracking.reasoner.explorer.base import PathExplorer
from backtracking.reasoner.explorer.placeholder import BreadthFirstExplorer, DepthFirstExplorer

EXPLORERS: Dict[ExplorationStrategy, Type[PathExplorer]] = {
    ExplorationStrategy.ADAPTIVE: AdaptiveExplorer,
    ExplorationStrategy.BREADTH_FIRST: BreadthFirstExplorer,
    ExplorationStrategy.DEPTH_FIRST: DepthFirstExplorer,
}

_unmapped = set(ExplorationStrategy) - set(EXPLORERS)
if _unmapped:
    raise RuntimeError(f"No explorer registered for: {sorted(s.value for s in _unmapped)}")


def explorer_class(strategy: ExplorationStrategy) -> Type[PathExplorer]:
    return EXPLORERS[ExplorationStrategy(strategy)]
