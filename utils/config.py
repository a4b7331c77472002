from __future__ import annotations
import dataclasses

from backtracking.reasoner.config import BacktrackingConfig


@dataclasses.dataclass
class LLM:
    model: str
    temperature: float | None = None
    max_tokens: int | None = None


@dataclasses.dataclass
class Config:
    llm: LLM
    backtracking: BacktrackingConfig = dataclasses.field(default_factory=BacktrackingConfig)
