from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from backtracking.llm.base_llm import BaseLLM
from backtracking.signature.prediction import Prediction
from backtracking.signature.signature import Signature


class BaseReasoner(ABC):
    """Contract for a reasoning module: signature + inputs in, prediction out.

    A reasoner owns its LLM and configuration only; anything scoped to a
    single run (memory, step arena) is created inside ``run``.
    """

    def __init__(self, *, llm: BaseLLM) -> None:
        self.llm = llm

    @abstractmethod
    def run(self, signature: Signature | str, inputs: Mapping[str, Any]) -> Prediction:
        raise NotImplementedError
