# agents/llm_client.py
#
# ============================================================================
# WHAT THIS FILE DOES:
# A thin wrapper that sends ONE prompt to an LLM and hands back the text
# of its answer. The rest of the assistant never needs to know which
# company's model is behind it.
#
# MULTI-PROVIDER SUPPORT:
#   1. Gemini (default):  Google's "google-genai" SDK.
#   2. OpenRouter:        the OpenAI SDK pointed at OpenRouter's URL, which
#                          can route to many models.
#   3. Anthropic:         Claude, directly.
#
# Exactly one request is made per call. If it fails, the error goes back
# to the caller; nothing is retried and nothing falls back to another
# provider.
# ============================================================================

# Google GenAI SDK (Gemini)
from google import genai

# OpenAI SDK (used for OpenRouter, which has an OpenAI-compatible API)
from openai import OpenAI

# Anthropic SDK
from anthropic import Anthropic

from config.settings import (
    LLM_PROVIDER, MAX_TOKENS,
    GEMINI_API_KEY, GEMINI_MODEL,
    OPENROUTER_API_KEY, OPENROUTER_BASE_URL, OPENROUTER_MODEL,
    ANTHROPIC_API_KEY, ANTHROPIC_MODEL,
)


# ── PROVIDER TABLES ────────────────────────────────────────────────────

# The names accepted in LLM_PROVIDER (case-insensitive).
PROVIDERS = ('gemini', 'openrouter', 'anthropic')

# Which model and which API key each provider uses unless the caller
# overrides them. Both come from config/settings.py (i.e. from .env).
_DEFAULT_MODELS = {
    'gemini': GEMINI_MODEL,
    'openrouter': OPENROUTER_MODEL,
    'anthropic': ANTHROPIC_MODEL,
}

_DEFAULT_KEYS = {
    'gemini': GEMINI_API_KEY,
    'openrouter': OPENROUTER_API_KEY,
    'anthropic': ANTHROPIC_API_KEY,
}


class LLMClient:
    """
    One-shot text generation against the configured provider.

    The SDK client is created once, in __init__, and reused for every
    call. Tests pass their own "client" to avoid any network access.
    """

    def __init__(self, provider: str = None, model: str = None,
                 api_key: str = None, client=None):
        # An unknown name is rejected here, before any request is made.
        self.provider = (provider or LLM_PROVIDER).lower()
        if self.provider not in PROVIDERS:
            raise ValueError(
                f"Unknown LLM provider '{self.provider}'. "
                f"Choose one of: {', '.join(PROVIDERS)}"
            )

        self.model = model or _DEFAULT_MODELS[self.provider]

        # "client" lets tests hand in a fake SDK client; otherwise we build
        # the real one here, ONCE, and reuse it for every request.
        self.client = client or self._make_client(api_key or _DEFAULT_KEYS[self.provider])

        print(f"[LLM] Provider: {self.provider} ({self.model})")

    def _make_client(self, api_key: str):
        # Each SDK has its own client class; only the API key is shared.
        if self.provider == 'gemini':
            return genai.Client(api_key=api_key)

        if self.provider == 'openrouter':
            return OpenAI(base_url=OPENROUTER_BASE_URL, api_key=api_key)

        return Anthropic(api_key=api_key)

    # ── THE ONE CALL ─────────────────────────────────────────────────

    def generate(self, prompt: str) -> str:
        """Send "prompt" and return the model's full text answer."""
        if self.provider == 'gemini':
            return self._call_gemini(prompt)
        if self.provider == 'openrouter':
            return self._call_openrouter(prompt)
        return self._call_anthropic(prompt)

    def _call_gemini(self, prompt: str) -> str:
        # Gemini takes the prompt as "contents" and exposes the answer as
        # one string on ".text" (None if the model returned nothing).
        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
        )
        return response.text or ""

    def _call_openrouter(self, prompt: str) -> str:
        # OpenAI-style chat API: our prompt is a single "user" message and
        # the answer is the first choice's message.
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=MAX_TOKENS,
        )
        return response.choices[0].message.content or ""

    def _call_anthropic(self, prompt: str) -> str:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=MAX_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )
        # Claude answers with a list of content blocks; keep the text ones.
        return "".join(
            block.text for block in response.content
            if getattr(block, 'type', None) == 'text'
        )
