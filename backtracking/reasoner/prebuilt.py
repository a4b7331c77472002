import os

from backtracking.llm.litellm import LiteLLM
from backtracking.reasoner.adaptive_backtracking import AdaptiveBacktrackingReasoner
from backtracking.reasoner.config import BacktrackingConfig
from utils.config import Config


def _validate_litellm_environment(model: str | None = None) -> None:
    """
    Check that an API key for the model's provider is present.

    LiteLLM supports many providers; the provider is guessed from the model
    name and the matching environment variables are checked.

    Raises:
        ValueError: If no usable API key is set for the model
    """
    if not model:
        model = os.getenv("LLM_MODEL")
        if not model:
            # BaseLLM raises its own error for a missing model
            return

    provider_env_vars = {
        "gpt": ["OPENAI_API_KEY"],
        "claude": ["ANTHROPIC_API_KEY"],
        "gemini": ["GEMINI_API_KEY", "GOOGLE_API_KEY"],
        "command": ["COHERE_API_KEY"],
        "mistral": ["MISTRAL_API_KEY"],
        "azure": ["AZURE_API_KEY", "AZURE_API_BASE"],
        "bedrock": ["AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"],
        "ollama": [],
    }

    model_lower = model.lower()
    required_vars = None
    for provider_prefix, env_vars in provider_env_vars.items():
        if provider_prefix in model_lower:
            required_vars = env_vars
            break

    if required_vars is None:
        common_vars = ["OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"]
        if any(os.getenv(var) for var in common_vars):
            return
        raise ValueError(
            f"No API key found for model '{model}'. "
            f"Please set one of the following environment variables: "
            f"{', '.join(common_vars)}, or other provider-specific API keys. "
            f"See https://docs.litellm.ai/docs/providers for full list of supported providers."
        )

    # Local providers need no key
    if required_vars and all(not os.getenv(var) for var in required_vars):
        raise ValueError(
            f"Missing required environment variables for model '{model}'. "
            f"Please set one of: {', '.join(required_vars)}"
        )


class LiteLLMBacktrackingReasoner(AdaptiveBacktrackingReasoner):
    """
    A pre-configured AdaptiveBacktrackingReasoner talking to LiteLLM.

    Uses the threshold backtrack policy and the default answer synthesizer.
    """

    def __init__(
        self,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        config: BacktrackingConfig | None = None,
    ):
        """
        Args:
            model: LiteLLM model string; falls back to LLM_MODEL.
            temperature: Sampling temperature passed on every call.
            max_tokens: Completion token cap passed on every call.
            config: Backtracking knobs; defaults apply when omitted.

        Raises:
            ValueError: If required environment variables for the LLM provider are missing
        """
        _validate_litellm_environment(model)
        llm = LiteLLM(model=model, temperature=temperature, max_tokens=max_tokens)
        super().__init__(llm=llm, config=config)

    @classmethod
    def from_config(cls, config: Config) -> "LiteLLMBacktrackingReasoner":
        return cls(
            model=config.llm.model,
            temperature=config.llm.temperature,
            max_tokens=config.llm.max_tokens,
            config=config.backtracking,
        )
