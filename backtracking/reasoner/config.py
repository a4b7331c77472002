from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List

ConstraintFunction = Callable[[Any, Dict[str, Any]], bool]


class ExplorationStrategy(str, Enum):
    """How the search traverses the step space. Only ADAPTIVE explores today."""

    ADAPTIVE = "adaptive"
    BREADTH_FIRST = "breadth_first"
    DEPTH_FIRST = "depth_first"


@dataclass
class BacktrackingConfig:
    """Knobs for one adaptive backtracking run."""

    max_retries: int = 3
    confidence_threshold: float = 0.7
    max_backtrack_depth: int = 5
    constraint_functions: List[ConstraintFunction] = field(default_factory=list)
    exploration_strategy: ExplorationStrategy = ExplorationStrategy.ADAPTIVE
    memory_enabled: bool = True

    # Backtracking does not consume depth, so this is the only bound on retreats
    max_backtracks: int = 10
    retry_delay: float = 1.0
    examples: List[Dict[str, Any]] = field(default_factory=list)
    adaptive_depth: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.exploration_strategy, str) and not isinstance(self.exploration_strategy, ExplorationStrategy):
            self.exploration_strategy = ExplorationStrategy(self.exploration_strategy)
        for name in ("max_retries", "max_backtrack_depth", "max_backtracks"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.retry_delay < 0:
            raise ValueError(f"retry_delay must be >= 0, got {self.retry_delay}")
        if self.confidence_threshold < 0:
            raise ValueError(f"confidence_threshold must be >= 0, got {self.confidence_threshold}")
