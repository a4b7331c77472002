"""Step id factories. Reasoners take any zero-argument callable returning a str."""
from __future__ import annotations

import itertools
from typing import Callable
from uuid import uuid4

StepIdFactory = Callable[[], str]


def uuid_step_id() -> str:
    return f"step_{uuid4().hex[:12]}"


class SequentialStepIds:
    """Deterministic ids (``step_1``, ``step_2``, ...) for tests and replays."""

    def __init__(self, prefix: str = "step_", start: int = 1) -> None:
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}{next(self._counter)}"
