# config/settings.py
#
# ============================================================================
# WHAT THIS FILE DOES:
# This is the "control panel" for the daily schedule assistant. Every
# setting that might change (file paths, API keys, model names, the time
# of the daily run) lives here in one place.
#
# Values come from environment variables (usually a .env file loaded by
# main.py) with sensible defaults where a default makes sense. Secrets
# never have defaults.
# ============================================================================

import os
from pathlib import Path


# ── FILE PATHS ─────────────────────────────────────────────────────────
# Both files live in the working directory the assistant is started from,
# unless overridden.

# The OAuth client secret file downloaded from Google Cloud Console.
CREDENTIALS_PATH = Path(os.environ.get("CREDENTIALS_PATH", "credentials.json"))

# Where we save the Gmail token after the first (interactive) login.
# Once saved, the assistant runs unattended until the token is revoked.
TOKEN_PATH = Path(os.environ.get("TOKEN_PATH", "token.json"))


# ── GMAIL SETTINGS ─────────────────────────────────────────────────────

# Read-only: we can READ emails but never modify, delete, or send them.
GMAIL_SCOPES = ['https://www.googleapis.com/auth/gmail.readonly']

# How many of today's emails are fetched per run. Each one costs a
# separate round trip, so this also caps how long a run can take.
GMAIL_MAX_RESULTS = 10


# ── LLM (Large Language Model) SETTINGS ────────────────────────────────
# "LLM_PROVIDER" picks which service reads the emails:
#   gemini      → Google Gemini (default)
#   openrouter  → any model behind OpenRouter's OpenAI-compatible API
#   anthropic   → Claude, directly
LLM_PROVIDER = os.environ.get("LLM_PROVIDER", "gemini").strip().lower()

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")

OPENROUTER_API_KEY = os.environ.get("OPENROUTER_API_KEY", "")
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_MODEL = os.environ.get("OPENROUTER_MODEL", "google/gemini-2.0-flash-001")

ANTHROPIC_API_KEY = os.environ.get("ANTHROPIC_API_KEY", "")
ANTHROPIC_MODEL = os.environ.get("ANTHROPIC_MODEL", "claude-sonnet-4-20250514")

# Maximum length of the extraction answer. A day's events fit easily.
MAX_TOKENS = 2048

# The environment variable holding the key for each provider.
PROVIDER_KEY_ENV = {
    "gemini": "GEMINI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


# ── WHATSAPP (TWILIO) SETTINGS ─────────────────────────────────────────

TWILIO_ACCOUNT_SID = os.environ.get("TWILIO_ACCOUNT_SID", "")
TWILIO_AUTH_TOKEN = os.environ.get("TWILIO_AUTH_TOKEN", "")

# Both in Twilio's WhatsApp form, e.g. "whatsapp:+14155238886".
WHATSAPP_FROM = os.environ.get("WHATSAPP_FROM", "")
WHATSAPP_TO = os.environ.get("WHATSAPP_TO", "")


# ── SCHEDULE ───────────────────────────────────────────────────────────
# The daily run fires at SCHEDULE_HOUR:SCHEDULE_MINUTE in the host's local
# time zone (cron "0 7 * * *" by default).
SCHEDULE_HOUR = int(os.environ.get("SCHEDULE_HOUR", "7"))
SCHEDULE_MINUTE = int(os.environ.get("SCHEDULE_MINUTE", "0"))


# ── REQUIRED ENVIRONMENT ───────────────────────────────────────────────

def required_env(provider: str = None) -> list[str]:
    """Names of the environment variables a run cannot do without."""
    provider = provider or LLM_PROVIDER
    key_env = PROVIDER_KEY_ENV.get(provider)
    if key_env is None:
        raise ValueError(
            f"Unknown LLM_PROVIDER '{provider}'. "
            f"Choose one of: {', '.join(PROVIDER_KEY_ENV)}"
        )
    return [
        "TWILIO_ACCOUNT_SID",
        "TWILIO_AUTH_TOKEN",
        key_env,
        "WHATSAPP_FROM",
        "WHATSAPP_TO",
    ]


def missing_required_env(provider: str = None) -> list[str]:
    """Return the required variables that are unset or empty."""
    return [name for name in required_env(provider) if not os.environ.get(name)]
