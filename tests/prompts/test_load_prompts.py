import pytest

from backtracking.prompts import load_prompts
from backtracking.reasoner.generator import PROMPT_PROFILE, REQUIRED_PROMPTS


def test_backtracking_profile_has_every_prompt():
    prompts = load_prompts(PROMPT_PROFILE, REQUIRED_PROMPTS)
    assert set(REQUIRED_PROMPTS) <= set(prompts)
    assert prompts["initial"].startswith("Begin reasoning about this problem step by step.")
    assert prompts["synthesis"].endswith("Use the insights and conclusions from the reasoning process.")


def test_missing_profile_raises():
    with pytest.raises(FileNotFoundError):
        load_prompts("reasoners/does_not_exist", [])


def test_missing_key_raises():
    with pytest.raises(KeyError, match="critique"):
        load_prompts(PROMPT_PROFILE, ["initial", "critique"])
