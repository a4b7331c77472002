from backtracking.llm.base_llm import BaseLLM
from typing import List, Dict, Any
import litellm

from utils.logger import get_logger
from utils.observability import observe
logger = get_logger(__name__)


class LiteLLM(BaseLLM):
    """Wrapper around litellm.completion."""

    def __init__(
        self,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> None:
        super().__init__(model=model, temperature=temperature)
        self.max_tokens = max_tokens

    @observe(llm=True)
    def completion(self, messages: List[Dict[str, str]], **kwargs) -> str:
        effective_temperature = kwargs.get("temperature", self.temperature)
        effective_max_tokens = kwargs.get("max_tokens", self.max_tokens)

        completion_kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
        }
        if effective_temperature is not None:
            completion_kwargs["temperature"] = effective_temperature
        if effective_max_tokens is not None:
            completion_kwargs["max_tokens"] = effective_max_tokens

        # Pass through anything else (stop sequences, response_format, ...)
        for key, value in kwargs.items():
            if key not in ["temperature", "max_tokens"]:
                completion_kwargs[key] = value

        resp = litellm.completion(**completion_kwargs)

        text = ""
        try:
            text = (resp.choices[0].message.content or "").strip()
        except (IndexError, AttributeError):
            logger.warning("llm_response_without_content", model=self.model)

        prompt_tokens, completion_tokens, total_tokens = self._extract_token_usage(resp)
        logger.debug(
            "llm_completion",
            model=self.model,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=total_tokens,
        )
        return text

    def _extract_token_usage(self, resp: Any) -> tuple[int | None, int | None, int | None]:
        """Extract token usage from provider response with fallbacks for different providers."""
        def _get_token(obj: Any, *keys: str) -> int | None:
            for key in keys:
                if isinstance(obj, dict):
                    val = obj.get(key)
                elif hasattr(obj, key):
                    val = getattr(obj, key, None)
                else:
                    continue
                if isinstance(val, int):
                    return val
            return None

        usage = getattr(resp, "usage", None) or (resp.get("usage") if isinstance(resp, dict) else None)
        if usage is None:
            return None, None, None

        prompt_tokens = _get_token(usage, "prompt_tokens", "input_tokens")
        completion_tokens = _get_token(usage, "completion_tokens", "output_tokens")
        total_tokens = _get_token(usage, "total_tokens")

        if total_tokens is None and prompt_tokens is not None and completion_tokens is not None:
            total_tokens = prompt_tokens + completion_tokens

        return prompt_tokens, completion_tokens, total_tokens
