import pytest

from backtracking.reasoner.config import BacktrackingConfig, ExplorationStrategy
from utils.load_config import load_config


def test_default_config_file_loads():
    config = load_config()
    assert config.llm.model
    assert isinstance(config.backtracking, BacktrackingConfig)
    assert config.backtracking.exploration_strategy is ExplorationStrategy.ADAPTIVE


def test_custom_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        '[llm]\nmodel = "gpt-4o"\nmax_tokens = 512\n\n'
        '[backtracking]\nconfidence_threshold = 0.6\nmax_backtrack_depth = 3\n'
        'exploration_strategy = "breadth_first"\nmemory_enabled = false\nretry_delay = 0.0\n'
    )
    config = load_config(path)

    assert config.llm.model == "gpt-4o"
    assert config.llm.max_tokens == 512
    assert config.llm.temperature is None
    assert config.backtracking.confidence_threshold == pytest.approx(0.6)
    assert config.backtracking.max_backtrack_depth == 3
    assert config.backtracking.exploration_strategy is ExplorationStrategy.BREADTH_FIRST
    assert config.backtracking.memory_enabled is False
    # untouched knobs keep their defaults
    assert config.backtracking.max_retries == 3
    assert config.backtracking.max_backtracks == 10


def test_backtracking_section_is_optional(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[llm]\nmodel = "gpt-4o"\n')
    assert load_config(path).backtracking == BacktrackingConfig()


def test_invalid_values_are_rejected(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[llm]\nmodel = "gpt-4o"\n\n[backtracking]\nmax_retries = -1\n')
    with pytest.raises(ValueError, match="max_retries"):
        load_config(path)


def test_unknown_strategy_is_rejected():
    with pytest.raises(ValueError):
        BacktrackingConfig(exploration_strategy="random_walk")
