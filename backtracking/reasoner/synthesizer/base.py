from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Sequence

from backtracking.llm.base_llm import BaseLLM
from backtracking.reasoner.models import ReasoningStep
from backtracking.signature.signature import Signature


class AnswerSynthesizer(ABC):
    """Abstract base class for turning a selected reasoning path into final outputs."""

    def __init__(self, *, llm: BaseLLM):
        self.llm = llm

    @abstractmethod
    def __call__(
        self, signature: Signature, inputs: Mapping[str, Any], path: Sequence[ReasoningStep]
    ) -> Dict[str, Any]:
        """Produce the signature's output fields from the reasoning path.

        Args:
            signature: The user's signature; its output fields define the answer.
            inputs: The original inputs of the run.
            path: The selected reasoning steps, in order.

        Returns:
            A mapping of output field name to parsed value.
        """
        ...
