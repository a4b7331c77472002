from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from backtracking.llm.base_llm import BaseLLM, DEFAULT_RETRY_DELAY, generate_with_retries
from backtracking.prompts import load_prompts
from backtracking.reasoner.exceptions import OutputParseError
from backtracking.reasoner.ids import StepIdFactory, uuid_step_id
from backtracking.reasoner.models import BacktrackReason, ReasoningStep, StepKind
from backtracking.signature.parser import parse_outputs, signature_labels
from backtracking.signature.prompt import build_prompt
from backtracking.signature.signature import FieldType, Signature, SignatureField

from utils.logger import get_logger

logger = get_logger(__name__)

PROMPT_PROFILE = "reasoners/backtracking"
REQUIRED_PROMPTS = ["initial", "continuation", "alternative", "synthesis"]

_PREVIOUS_REASONING = "previous_reasoning"
_BACKTRACK_REASON = "backtrack_reason"
_DEPTH = "depth"


def _reasoning_field(description: str) -> SignatureField:
    return SignatureField(name="reasoning", description=description)


def derive_signatures(base: Signature, prompts: Mapping[str, str]) -> Dict[StepKind, Signature]:
    """Signatures for the three kinds of step request, layered on the user's signature.

    A user field named like one of the step fields raises ``SignatureConflictError``.
    """
    return {
        StepKind.INITIAL: base.extend(
            outputs=[
                _reasoning_field("Initial reasoning step"),
                SignatureField(
                    name="confidence_self_assessment",
                    description="Self-assessment of confidence",
                    required=False,
                ),
            ],
            instructions=prompts["initial"],
        ),
        StepKind.CONTINUATION: base.extend(
            inputs=[
                SignatureField(name=_PREVIOUS_REASONING, description="Previous reasoning step"),
                SignatureField(name=_DEPTH, type=FieldType.INTEGER, description="Current reasoning depth"),
            ],
            outputs=[_reasoning_field("Next reasoning step")],
            instructions=prompts["continuation"],
        ),
        StepKind.ALTERNATIVE: base.extend(
            inputs=[
                SignatureField(name=_PREVIOUS_REASONING, description="Previous reasoning that needs alternative"),
                SignatureField(name=_BACKTRACK_REASON, description="Reason for backtracking"),
                SignatureField(name=_DEPTH, type=FieldType.INTEGER, description="Current reasoning depth"),
            ],
            outputs=[_reasoning_field("Alternative reasoning approach")],
            instructions=prompts["alternative"],
        ),
    }


class StepGenerator:
    """Asks the LLM for reasoning steps and wraps the replies as unevaluated steps."""

    def __init__(
        self,
        *,
        llm: BaseLLM,
        signature: Signature,
        id_factory: StepIdFactory = uuid_step_id,
        max_retries: int = 3,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        examples: Sequence[Any] | None = None,
        prompts: Mapping[str, str] | None = None,
    ) -> None:
        self.llm = llm
        self.id_factory = id_factory
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.examples = list(examples or [])
        self.signatures = derive_signatures(signature, prompts or load_prompts(PROMPT_PROFILE, REQUIRED_PROMPTS))

    def initial(self, inputs: Mapping[str, Any]) -> ReasoningStep:
        content = self._generate(StepKind.INITIAL, dict(inputs), self.examples)
        return ReasoningStep(id=self.id_factory(), content=content, depth=0, kind=StepKind.INITIAL)

    def next_step(self, inputs: Mapping[str, Any], parent: ReasoningStep, depth: int) -> ReasoningStep:
        enhanced = {**inputs, _PREVIOUS_REASONING: parent.content, _DEPTH: depth}
        content = self._generate(StepKind.CONTINUATION, enhanced)
        return ReasoningStep(
            id=self.id_factory(),
            content=content,
            depth=depth,
            parent_id=parent.id,
            kind=StepKind.CONTINUATION,
        )

    def alternative(
        self, inputs: Mapping[str, Any], backtrack_point: ReasoningStep, reason: BacktrackReason
    ) -> ReasoningStep:
        depth = backtrack_point.depth + 1
        enhanced = {
            **inputs,
            _PREVIOUS_REASONING: backtrack_point.content,
            _BACKTRACK_REASON: reason.description,
            _DEPTH: depth,
        }
        content = self._generate(StepKind.ALTERNATIVE, enhanced)
        return ReasoningStep(
            id=self.id_factory(),
            content=content,
            depth=depth,
            parent_id=backtrack_point.id,
            kind=StepKind.ALTERNATIVE,
        )

    def _generate(self, kind: StepKind, inputs: Dict[str, Any], examples: List[Any] | None = None) -> str:
        signature = self.signatures[kind]
        prompt = build_prompt(signature, inputs, examples)
        reply = generate_with_retries(self.llm, prompt, self.max_retries, delay=self.retry_delay)

        # Only the reasoning fields matter here; the user's outputs come at synthesis time
        reasoning_only = signature.model_copy(
            update={"output_fields": [f for f in signature.output_fields if f.name in ("reasoning", "confidence_self_assessment")]}
        )
        try:
            parsed = parse_outputs(reasoning_only, reply, stop_labels=signature_labels(signature))
            content = str(parsed["reasoning"])
        except OutputParseError:
            logger.warning("reasoning_label_missing", kind=kind.value, reply_preview=reply[:200])
            content = reply.strip()

        logger.info("step_generated", kind=kind.value, depth=inputs.get(_DEPTH, 0), length=len(content))
        return content
