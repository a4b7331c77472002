import pytest
from typing import Dict, List

from backtracking.llm.base_llm import BaseLLM
from backtracking.reasoner.ids import SequentialStepIds
from backtracking.signature.signature import Signature


class DummyLLM(BaseLLM):
    """Replies from a queue; queued exceptions are raised. Every prompt is recorded."""

    def __init__(self, *, text_queue: List[str | Exception] | None = None, default: str = ""):
        # Intentionally do not call super().__init__ to avoid model env requirement
        self.text_queue = list(text_queue or [])
        self.default = default
        self.prompts: List[str] = []

    def completion(self, messages: List[Dict[str, str]], **kwargs) -> str:  # type: ignore[override]
        return self.prompt(messages[-1]["content"], **kwargs)

    def prompt(self, text: str, **kwargs) -> str:  # type: ignore[override]
        self.prompts.append(text)
        if not self.text_queue:
            return self.default
        item = self.text_queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture(autouse=True)
def no_retry_sleep(monkeypatch):
    monkeypatch.setattr("tenacity.nap.time.sleep", lambda _seconds: None)


@pytest.fixture
def dummy_llm() -> DummyLLM:
    return DummyLLM()


@pytest.fixture
def qa_signature() -> Signature:
    return Signature.define("question -> answer")


@pytest.fixture
def step_ids() -> SequentialStepIds:
    return SequentialStepIds()
