# tests/test_llm_client.py
#
# Tests for LLMClient: one request per call, per provider.
# Every SDK client is a MagicMock — no network access.

import pytest
from unittest.mock import patch, MagicMock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from agents.llm_client import LLMClient


class TestProviderSelection:

    def test_unknown_provider_raises(self):
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            LLMClient(provider="mystery", client=MagicMock())

    @patch('agents.llm_client.genai')
    def test_gemini_client_built_with_key(self, mock_genai):
        LLMClient(provider="gemini", api_key="g-key")

        mock_genai.Client.assert_called_once_with(api_key="g-key")

    @patch('agents.llm_client.OpenAI')
    def test_openrouter_client_points_at_openrouter(self, mock_openai):
        LLMClient(provider="openrouter", api_key="or-key")

        kwargs = mock_openai.call_args.kwargs
        assert kwargs["api_key"] == "or-key"
        assert "openrouter.ai" in kwargs["base_url"]

    @patch('agents.llm_client.Anthropic')
    def test_anthropic_client_built_with_key(self, mock_anthropic):
        LLMClient(provider="anthropic", api_key="a-key")

        mock_anthropic.assert_called_once_with(api_key="a-key")


class TestGenerate:

    def test_gemini(self):
        client = MagicMock()
        client.models.generate_content.return_value.text = '[{"title": "x"}]'
        llm = LLMClient(provider="gemini", model="gemini-test", client=client)

        assert llm.generate("prompt") == '[{"title": "x"}]'
        client.models.generate_content.assert_called_once_with(
            model="gemini-test", contents="prompt",
        )

    def test_gemini_without_text(self):
        client = MagicMock()
        client.models.generate_content.return_value.text = None

        assert LLMClient(provider="gemini", client=client).generate("p") == ""

    def test_openrouter(self):
        client = MagicMock()
        client.chat.completions.create.return_value.choices = [
            MagicMock(message=MagicMock(content="[]"))
        ]
        llm = LLMClient(provider="openrouter", model="some/model", client=client)

        assert llm.generate("prompt") == "[]"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "some/model"
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    def test_anthropic_joins_text_blocks(self):
        client = MagicMock()
        client.messages.create.return_value.content = [
            MagicMock(type="text", text="[{"),
            MagicMock(type="tool_use"),
            MagicMock(type="text", text="}]"),
        ]
        llm = LLMClient(provider="anthropic", client=client)

        assert llm.generate("prompt") == "[{}]"
        client.messages.create.assert_called_once()

    def test_errors_are_not_retried(self):
        client = MagicMock()
        client.models.generate_content.side_effect = RuntimeError("503")
        llm = LLMClient(provider="gemini", client=client)

        with pytest.raises(RuntimeError):
            llm.generate("prompt")
        assert client.models.generate_content.call_count == 1
