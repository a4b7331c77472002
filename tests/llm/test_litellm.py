# test_litellm.py

import pytest
from unittest.mock import patch, MagicMock
from backtracking.llm.litellm import LiteLLM


class TestLiteLLM:
    # Tests default initialisation with the model taken from the environment
    def test_env_model_used(self, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "claude-sonnet-4")
        svc = LiteLLM()
        assert svc.model == "claude-sonnet-4"

    # Tests that temperature and max tokens are stored
    def test_parameters_stored(self, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "claude-sonnet-4")
        svc = LiteLLM(temperature=0.7, max_tokens=10000)
        assert svc.temperature == pytest.approx(0.7)
        assert svc.max_tokens == 10000

    # Tests that an explicit model overrides the environment
    def test_model_parameter_override(self, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "claude-sonnet-4")
        svc = LiteLLM(model="gemini/gemini-2.0-flash")
        assert svc.model == "gemini/gemini-2.0-flash"

    # Tests that a missing model is rejected
    def test_missing_model_raises(self, monkeypatch):
        monkeypatch.delenv("LLM_MODEL", raising=False)
        with pytest.raises(ValueError, match="No LLM model configured"):
            LiteLLM()

    @patch('backtracking.llm.litellm.litellm.completion')
    # Tests completion method
    def test_completion(self, mock_litellm_completion):
        mock_response = MagicMock()
        mock_response.choices[0].message.content = "  Mocked response content  "
        mock_litellm_completion.return_value = mock_response

        svc = LiteLLM(model="gemini/gemini-2.0-flash", temperature=0.7)

        messages = [{"role": "user", "content": "Hello"}]
        result = svc.completion(messages)

        assert result == "Mocked response content"
        mock_litellm_completion.assert_called_once_with(
            model="gemini/gemini-2.0-flash",
            messages=messages,
            temperature=0.7
        )

    @patch('backtracking.llm.litellm.litellm.completion')
    # Tests that unset parameters are not sent and call-time kwargs are passed through
    def test_completion_kwargs(self, mock_litellm_completion):
        mock_response = MagicMock()
        mock_response.choices[0].message.content = "ok"
        mock_litellm_completion.return_value = mock_response

        svc = LiteLLM(model="gpt-4o")
        svc.completion([{"role": "user", "content": "Hi"}], max_tokens=50, stop=["\n\n"])

        mock_litellm_completion.assert_called_once_with(
            model="gpt-4o",
            messages=[{"role": "user", "content": "Hi"}],
            max_tokens=50,
            stop=["\n\n"],
        )

    @patch('backtracking.llm.litellm.litellm.completion')
    # Tests that prompt wraps the text as a single user message
    def test_prompt(self, mock_litellm_completion):
        mock_response = MagicMock()
        mock_response.choices[0].message.content = "Answer: 42"
        mock_litellm_completion.return_value = mock_response

        svc = LiteLLM(model="gpt-4o")
        assert svc.prompt("What is 6*7?") == "Answer: 42"
        assert mock_litellm_completion.call_args.kwargs["messages"] == [
            {"role": "user", "content": "What is 6*7?"}
        ]

    @patch('backtracking.llm.litellm.litellm.completion')
    # Tests that a response without choices yields an empty string
    def test_completion_without_choices(self, mock_litellm_completion):
        mock_response = MagicMock()
        mock_response.choices = []
        mock_litellm_completion.return_value = mock_response

        svc = LiteLLM(model="gpt-4o")
        assert svc.completion([{"role": "user", "content": "Hi"}]) == ""

    # Tests token usage extraction across provider formats
    def test_extract_token_usage(self):
        svc = LiteLLM(model="gpt-4o")

        openai_style = MagicMock()
        openai_style.usage = {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15}
        assert svc._extract_token_usage(openai_style) == (10, 5, 15)

        anthropic_style = MagicMock()
        anthropic_style.usage = {"input_tokens": 3, "output_tokens": 4}
        assert svc._extract_token_usage(anthropic_style) == (3, 4, 7)

        no_usage = MagicMock()
        no_usage.usage = None
        assert svc._extract_token_usage(no_usage) == (None, None, None)
