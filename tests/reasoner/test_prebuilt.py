import pytest

from backtracking.reasoner.config import BacktrackingConfig
from backtracking.reasoner.prebuilt import LiteLLMBacktrackingReasoner, _validate_litellm_environment
from utils.config import LLM, Config

PROVIDER_KEYS = ["OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"]


@pytest.fixture
def clean_env(monkeypatch):
    for key in PROVIDER_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_claude_model_needs_anthropic_key(clean_env):
    with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
        _validate_litellm_environment("claude-sonnet-4")
    clean_env.setenv("ANTHROPIC_API_KEY", "sk-test")
    _validate_litellm_environment("claude-sonnet-4")


def test_unknown_model_accepts_any_common_key(clean_env):
    with pytest.raises(ValueError, match="No API key found"):
        _validate_litellm_environment("some-new-model")
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    _validate_litellm_environment("some-new-model")


def test_local_models_need_no_key(clean_env):
    _validate_litellm_environment("ollama/llama3")


def test_from_config(clean_env):
    clean_env.setenv("ANTHROPIC_API_KEY", "sk-test")
    backtracking = BacktrackingConfig(confidence_threshold=0.6, max_backtrack_depth=3)
    config = Config(llm=LLM(model="claude-sonnet-4", temperature=0.2), backtracking=backtracking)

    reasoner = LiteLLMBacktrackingReasoner.from_config(config)

    assert reasoner.llm.model == "claude-sonnet-4"
    assert reasoner.llm.temperature == pytest.approx(0.2)
    assert reasoner.config is backtracking
    assert reasoner.policy.confidence_threshold == pytest.approx(0.6)
