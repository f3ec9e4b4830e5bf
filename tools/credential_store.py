# tools/credential_store.py
#
# ============================================================================
# WHAT THIS FILE DOES:
# Reads and writes the two small files the assistant needs on disk:
#
#   1. credentials.json: the OAuth "client secret" you download from
#      Google Cloud Console. We only ever READ this file.
#   2. token.json:       the Gmail login token. Written once after the
#      first login, then read on every run so nobody has to log in again.
#
# Nothing in here talks to the network.
# ============================================================================

import json
from pathlib import Path

from config.settings import CREDENTIALS_PATH, TOKEN_PATH


class CredentialsError(RuntimeError):
    """The client secret file is missing or unusable."""


# Google puts desktop-app clients under "installed" and web clients
# under "web". Either one works for us.
_CLIENT_SECTIONS = ('installed', 'web')
_REQUIRED_FIELDS = ('client_id', 'client_secret', 'redirect_uris')


def load_credentials(path: Path = CREDENTIALS_PATH) -> dict:
    """
    Load the OAuth client config from the client secret file.

    Returns the whole parsed file (e.g. {"installed": {...}}) because that
    is the shape google-auth-oauthlib expects.

    Raises:
        CredentialsError: the file is missing, is not JSON, or is missing
        client_id / client_secret / redirect_uris.
    """
    path = Path(path)

    if not path.exists():
        raise CredentialsError(
            f"❌ Gmail credentials not found at {path}\n"
            "   Download them from Google Cloud Console → APIs & Services → Credentials"
        )

    try:
        config = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise CredentialsError(f"❌ {path} is not valid JSON: {e}") from e

    section = client_section(config)
    missing = [field for field in _REQUIRED_FIELDS if not section.get(field)]
    if missing:
        raise CredentialsError(
            f"❌ {path} is missing required field(s): {', '.join(missing)}"
        )

    return config


def client_section(config: dict) -> dict:
    """Return the "installed" / "web" part of a client config."""
    if isinstance(config, dict):
        for name in _CLIENT_SECTIONS:
            if isinstance(config.get(name), dict):
                return config[name]
    raise CredentialsError(
        "❌ Client secret file has no 'installed' or 'web' section."
    )


def load_token(path: Path = TOKEN_PATH) -> dict | None:
    """
    Load the saved Gmail token, or None if we have never logged in.

    A token file that exists but is not JSON is NOT treated as absent:
    json.JSONDecodeError propagates, and authorize() turns it into a
    TokenInvalidError telling the user to log in again.
    """
    path = Path(path)
    if not path.exists():
        return None
    return json.loads(path.read_text(encoding='utf-8'))


def save_token(token, path: Path = TOKEN_PATH) -> None:
    """
    Save the Gmail token for next time.

    Args:
        token: either a dict or the JSON string produced by
               Credentials.to_json().
        path:  where to write it.
    """
    path = Path(path)
    if isinstance(token, str):
        token = json.loads(token)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(token), encoding='utf-8')
