"""
Adaptive backtracking reasoner

Explores a chain of LLM reasoning steps, scoring each one, and retreats to
the last good step for an alternative whenever a step is low-confidence,
breaks a constraint or repeats a known failure. The best step found is
handed to the synthesizer for the final structured answer.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping

from backtracking.llm.base_llm import BaseLLM
from backtracking.memory.reasoning_memory import ReasoningMemory, create_memory
from backtracking.prompts import load_prompts
from backtracking.reasoner.base import BaseReasoner
from backtracking.reasoner.config import BacktrackingConfig
from backtracking.reasoner.evaluator import StepEvaluator
from backtracking.reasoner.explorer.base import ExplorationResult
from backtracking.reasoner.explorer.strategies import explorer_class
from backtracking.reasoner.generator import PROMPT_PROFILE, REQUIRED_PROMPTS, StepGenerator
from backtracking.reasoner.ids import StepIdFactory, uuid_step_id
from backtracking.reasoner.policy.base import BacktrackPolicy
from backtracking.reasoner.policy.threshold import ThresholdBacktrackPolicy
from backtracking.reasoner.selector import select_best_step
from backtracking.reasoner.synthesizer.base import AnswerSynthesizer
from backtracking.reasoner.synthesizer.default import DefaultAnswerSynthesizer
from backtracking.signature.prediction import Prediction
from backtracking.signature.signature import Signature

from utils.logger import get_logger
from utils.observability import observe

logger = get_logger(__name__)


class AdaptiveBacktrackingReasoner(BaseReasoner):

    def __init__(
        self,
        *,
        llm: BaseLLM,
        config: BacktrackingConfig | None = None,
        policy: BacktrackPolicy | None = None,
        synthesizer: AnswerSynthesizer | None = None,
        id_factory: StepIdFactory = uuid_step_id,
        memory_factory: Callable[[bool], ReasoningMemory] = create_memory,
    ) -> None:
        super().__init__(llm=llm)
        self.config = config or BacktrackingConfig()
        self.prompts = load_prompts(PROMPT_PROFILE, REQUIRED_PROMPTS)
        self.policy = policy or ThresholdBacktrackPolicy(self.config.confidence_threshold)
        self.synthesizer = synthesizer or DefaultAnswerSynthesizer(
            llm=llm,
            max_retries=self.config.max_retries,
            retry_delay=self.config.retry_delay,
            instructions=self.prompts["synthesis"],
        )
        self.id_factory = id_factory
        self.memory_factory = memory_factory

    @observe(root=True)
    def run(self, signature: Signature | str, inputs: Mapping[str, Any]) -> Prediction:
        if isinstance(signature, str):
            signature = Signature.define(signature)
        signature.validate_inputs(inputs)

        logger.info(
            "adaptive_backtracking_start",
            signature=signature.name,
            strategy=self.config.exploration_strategy.value,
        )
        result = self.explore(signature, inputs)

        best = select_best_step(result.final_path)
        outputs = self.synthesizer(signature, inputs, [best])

        lineage = [step.id for step in result.arena.lineage(best.id)]
        logger.info(
            "adaptive_backtracking_complete",
            termination=result.termination.value,
            confidence=round(best.confidence, 3),
            backtracks=result.backtracks,
            lineage_length=len(lineage),
        )
        return Prediction(
            outputs=outputs,
            metadata={
                "confidence": best.confidence,
                "selected_step_id": best.id,
                "reasoning": best.content,
                "termination": result.termination.value,
                "iterations": result.iterations,
                "backtracks": result.backtracks,
                "steps_generated": len(result.arena),
                "failed_attempts": len(result.memory.failed_attempts),
                "lineage": lineage,
            },
        )

    def explore(self, signature: Signature, inputs: Mapping[str, Any]) -> ExplorationResult:
        """Run the configured exploration strategy with fresh per-run memory."""
        generator = StepGenerator(
            llm=self.llm,
            signature=signature,
            id_factory=self.id_factory,
            max_retries=self.config.max_retries,
            retry_delay=self.config.retry_delay,
            examples=self.config.examples,
            prompts=self.prompts,
        )
        explorer = explorer_class(self.config.exploration_strategy)(
            generator=generator,
            evaluator=StepEvaluator(self.config.constraint_functions),
            policy=self.policy,
            config=self.config,
        )
        return explorer.explore(inputs, self.memory_factory(self.config.memory_enabled))
