from __future__ import annotations

from typing import Any, Mapping

from backtracking.memory.arena import StepArena
from backtracking.memory.reasoning_memory import ReasoningMemory
from backtracking.reasoner.exceptions import GenerationError, NoBacktrackPoint
from backtracking.reasoner.explorer.base import ExplorationResult, PathExplorer, Termination
from backtracking.reasoner.models import BacktrackReason, Decision, ReasoningStep

from utils.logger import get_logger

logger = get_logger(__name__)

EARLY_TERMINAL_CONFIDENCE = 0.95


class AdaptiveExplorer(PathExplorer):
    """Depth-bounded explore/backtrack loop.

    States: generate initial → evaluate → (early terminal) → explore at
    depth 1 → {continue | backtrack | terminate | max depth} → final path.

    - Continue: generate the next step at the current depth, record it as
      successful and move one level deeper. A failed generation is handled
      as a backtrack from the current step.
    - Backtrack: retreat to the most recent successful step, ask for an
      alternative, record the abandoned step as failed and the alternative
      as successful. The depth counter is left untouched; ``max_backtracks``
      bounds how often this can happen.
    - Any dead end (no backtrack point, alternative generation failed,
      backtrack limit) finalizes the current step instead of raising.

    Only a failure to generate the very first step propagates.
    """

    def explore(self, inputs: Mapping[str, Any], memory: ReasoningMemory) -> ExplorationResult:
        arena = StepArena()
        max_depth = self.config.max_backtrack_depth
        logger.info(
            "explore_start",
            strategy="adaptive",
            max_depth=max_depth,
            threshold=self.config.confidence_threshold,
            memory_enabled=memory.enabled,
        )

        current = self._evaluate(self.generator.initial(inputs), inputs, memory, arena)

        if current.confidence >= EARLY_TERMINAL_CONFIDENCE and current.constraints_satisfied:
            return self._finish(current, Termination.EARLY_TERMINAL, memory, arena, iterations=0, backtracks=0, depth=0)

        depth = 1
        iterations = 0
        backtracks = 0

        while True:
            if depth >= max_depth:
                logger.info("max_depth_reached", depth=depth, max_depth=max_depth, step_id=current.id)
                return self._finish(current, Termination.MAX_DEPTH, memory, arena, iterations, backtracks, depth)

            iterations += 1
            decision = self.policy(current, memory)
            logger.info(
                "policy_decision",
                decision=str(decision),
                step_id=current.id,
                depth=depth,
                confidence=round(current.confidence, 3),
            )

            if decision.decision is Decision.TERMINATE:
                return self._finish(current, Termination.TERMINATE, memory, arena, iterations, backtracks, depth)

            reason = decision.reason
            if decision.decision is Decision.CONTINUE:
                try:
                    step = self.generator.next_step(inputs, current, depth)
                except GenerationError as exc:
                    logger.warning("continuation_failed", step_id=current.id, depth=depth, error=str(exc))
                    reason = BacktrackReason.GENERATION_FAILED
                else:
                    current = self._evaluate(step, inputs, memory, arena)
                    memory.record_success(current)
                    depth += 1
                    continue

            try:
                point = memory.find_backtrack_point()
            except NoBacktrackPoint:
                logger.info("no_backtrack_point", step_id=current.id, reason=reason.value)
                return self._finish(current, Termination.NO_BACKTRACK_POINT, memory, arena, iterations, backtracks, depth)

            if backtracks >= self.config.max_backtracks:
                logger.warning("backtrack_limit_reached", backtracks=backtracks, step_id=current.id)
                return self._finish(current, Termination.BACKTRACK_LIMIT, memory, arena, iterations, backtracks, depth)

            backtracks += 1
            logger.info("backtrack", from_step=current.id, to_step=point.id, reason=reason.value, depth=depth)
            try:
                alternative = self.generator.alternative(inputs, point, reason)
            except GenerationError as exc:
                logger.warning("alternative_failed", backtrack_point=point.id, error=str(exc))
                return self._finish(current, Termination.ALTERNATIVE_FAILED, memory, arena, iterations, backtracks, depth)

            alternative = self._evaluate(alternative, inputs, memory, arena)
            memory.record_failure(current)
            memory.record_success(alternative)
            current = alternative

    def _evaluate(
        self, step: ReasoningStep, inputs: Mapping[str, Any], memory: ReasoningMemory, arena: StepArena
    ) -> ReasoningStep:
        evaluated, _ = self.evaluator.evaluate(step, dict(inputs), memory)
        return arena.add(evaluated)

    def _finish(
        self,
        step: ReasoningStep,
        termination: Termination,
        memory: ReasoningMemory,
        arena: StepArena,
        iterations: int,
        backtracks: int,
        depth: int,
    ) -> ExplorationResult:
        logger.info(
            "explore_complete",
            termination=termination.value,
            step_id=step.id,
            confidence=round(step.confidence, 3),
            iterations=iterations,
            backtracks=backtracks,
            steps_generated=len(arena),
        )
        return ExplorationResult(
            final_path=[step],
            termination=termination,
            memory=memory,
            arena=arena,
            iterations=iterations,
            backtracks=backtracks,
            depth=depth,
        )
