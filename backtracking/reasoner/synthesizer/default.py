from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from backtracking.llm.base_llm import BaseLLM, DEFAULT_RETRY_DELAY, generate_with_retries
from backtracking.prompts import load_prompts
from backtracking.reasoner.generator import PROMPT_PROFILE, REQUIRED_PROMPTS
from backtracking.reasoner.models import ReasoningStep
from backtracking.reasoner.synthesizer.base import AnswerSynthesizer
from backtracking.signature.parser import parse_outputs
from backtracking.signature.prompt import build_prompt
from backtracking.signature.signature import Signature, SignatureField

from utils.logger import get_logger, trace_method
logger = get_logger(__name__)

REASONING_PATH_FIELD = "reasoning_path"
_SUMMARY_LINE_RE = re.compile(r"^Step (\d+) \(confidence: ([0-9.]+)\): (.*)$")


def summarize_path(path: Sequence[ReasoningStep]) -> str:
    """One ``Step i (confidence: c): content`` line per step, 1-based."""
    return "\n".join(
        f"Step {index} (confidence: {round(step.confidence, 2)}): {step.content}"
        for index, step in enumerate(path, 1)
    )


def parse_summary(summary: str) -> List[Tuple[int, float, str]]:
    """Inverse of :func:`summarize_path` for single-line step contents."""
    entries: List[Tuple[int, float, str]] = []
    for line in summary.splitlines():
        match = _SUMMARY_LINE_RE.match(line)
        if match:
            entries.append((int(match.group(1)), float(match.group(2)), match.group(3)))
    return entries


def synthesis_signature(base: Signature, instructions: str) -> Signature:
    return base.extend(
        inputs=[SignatureField(name=REASONING_PATH_FIELD, description="Summary of reasoning path")],
        prepend_inputs=True,
        instructions=instructions,
    )


class DefaultAnswerSynthesizer(AnswerSynthesizer):
    """Asks the LLM for the final answer given a summary of the reasoning path.

    Generation and parse failures propagate; there is no sensible fallback
    answer for an arbitrary signature.
    """

    def __init__(
        self,
        *,
        llm: BaseLLM,
        max_retries: int = 3,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        instructions: str | None = None,
    ) -> None:
        super().__init__(llm=llm)
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.instructions = instructions or load_prompts(PROMPT_PROFILE, REQUIRED_PROMPTS)["synthesis"]

    @trace_method
    def __call__(
        self, signature: Signature, inputs: Mapping[str, Any], path: Sequence[ReasoningStep]
    ) -> Dict[str, Any]:
        summary = summarize_path(path)
        target = synthesis_signature(signature, self.instructions)
        prompt = build_prompt(target, {**inputs, REASONING_PATH_FIELD: summary})

        reply = generate_with_retries(self.llm, prompt, self.max_retries, delay=self.retry_delay)
        outputs = parse_outputs(target, reply)
        logger.info("answer_synthesized", signature=signature.name, fields=sorted(outputs), path_length=len(path))
        return outputs
