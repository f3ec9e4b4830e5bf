# tests/test_config.py
#
# Tests for configuration constants and the required-environment check.

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import (
    GMAIL_MAX_RESULTS,
    GMAIL_SCOPES,
    MAX_TOKENS,
    PROVIDER_KEY_ENV,
    required_env,
    missing_required_env,
)


ALL_REQUIRED = [
    "TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "GEMINI_API_KEY",
    "WHATSAPP_FROM", "WHATSAPP_TO",
]


class TestConfigConstants:
    """Validate configuration values."""

    def test_gmail_fetch_is_capped_at_ten(self):
        assert GMAIL_MAX_RESULTS == 10

    def test_gmail_scope_is_read_only(self):
        assert GMAIL_SCOPES == ['https://www.googleapis.com/auth/gmail.readonly']

    def test_max_tokens_is_positive(self):
        assert MAX_TOKENS > 0

    def test_every_provider_has_a_key_variable(self):
        assert set(PROVIDER_KEY_ENV) == {"gemini", "openrouter", "anthropic"}


class TestRequiredEnv:
    """required_env / missing_required_env."""

    def test_gemini_requires_five_variables(self):
        assert required_env("gemini") == ALL_REQUIRED

    def test_other_provider_swaps_the_key_variable(self):
        names = required_env("anthropic")
        assert "ANTHROPIC_API_KEY" in names
        assert "GEMINI_API_KEY" not in names

    def test_unknown_provider_raises(self):
        with pytest.raises(ValueError, match="Unknown LLM_PROVIDER"):
            required_env("mystery")

    def test_all_missing(self, monkeypatch):
        for name in ALL_REQUIRED:
            monkeypatch.delenv(name, raising=False)
        assert missing_required_env("gemini") == ALL_REQUIRED

    def test_nothing_missing(self, monkeypatch):
        for name in ALL_REQUIRED:
            monkeypatch.setenv(name, "x")
        assert missing_required_env("gemini") == []

    def test_empty_value_counts_as_missing(self, monkeypatch):
        for name in ALL_REQUIRED:
            monkeypatch.setenv(name, "x")
        monkeypatch.setenv("WHATSAPP_TO", "")
        assert missing_required_env("gemini") == ["WHATSAPP_TO"]
