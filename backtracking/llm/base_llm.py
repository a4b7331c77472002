"""Lightweight LLM wrapper interface used by the step generator and synthesizer."""
from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from backtracking.reasoner.exceptions import GenerationError

from utils.logger import get_logger
logger = get_logger(__name__)

DEFAULT_RETRY_DELAY = 1.0


class BaseLLM(ABC):
    """Minimal synchronous chat-LLM interface.

    • Accepts a list[dict] *messages* like the OpenAI Chat format.
    • Returns *content* (str) of the assistant reply.
    • Implementations SHOULD be stateless; auth + model name given at init.
    """

    def __init__(self, model: str | None = None, temperature: float | None = None) -> None:
        self.model = model or os.getenv("LLM_MODEL")
        if not self.model:
            raise ValueError("No LLM model configured. Set LLM_MODEL or pass model=...")
        self.temperature = temperature

    @abstractmethod
    def completion(self, messages: List[Dict[str, str]], **kwargs) -> str: ...

    def prompt(self, content: str, **kwargs) -> str:
        """Convenience method for single user prompts."""
        return self.completion([{"role": "user", "content": content}], **kwargs)


def _is_blank(reply: Any) -> bool:
    return not (reply and str(reply).strip())


def generate_with_retries(
    llm: BaseLLM,
    prompt: str,
    max_retries: int,
    *,
    delay: float = DEFAULT_RETRY_DELAY,
    **kwargs: Any,
) -> str:
    """Prompt the LLM, retrying up to ``max_retries`` times with a fixed delay.

    An exception or an empty reply counts as a failed attempt.

    Raises:
        GenerationError: once ``1 + max_retries`` attempts have all failed.
    """
    attempts = max_retries + 1

    def _log_failed_attempt(retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        error = outcome.exception() if outcome.failed else "LLM returned empty content"
        logger.warning("llm_attempt_failed", attempt=retry_state.attempt_number, max_attempts=attempts, error=str(error))

    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(delay),
        retry=retry_if_exception_type(Exception) | retry_if_result(_is_blank),
        after=_log_failed_attempt,
    )
    try:
        return retrying(llm.prompt, prompt, **kwargs)
    except RetryError as exc:
        last = exc.last_attempt
        cause = last.exception() if last.failed else ValueError("LLM returned empty content")
        raise GenerationError(f"LLM generation failed after {attempts} attempt(s): {cause}") from cause
