# tools/gmail_tools.py
#
# ============================================================================
# WHAT THIS FILE DOES:
# This is the "email fetcher." It logs into Gmail and downloads the plain
# text of today's emails so the Event Extractor can read them.
#
# It does THREE things:
#   1. Logs into Gmail using OAuth (a saved token, or a one-time login)
#   2. Works out "today" as a date range Gmail's search understands
#   3. Fetches each of today's emails and decodes its plain-text body
#
# IMPORTANT: This file has NO artificial intelligence in it.
# It's pure "plumbing": getting data from point A to point B.
# ============================================================================

# ── IMPORTS ────────────────────────────────────────────────────────────

import base64
import json
from datetime import datetime, timedelta
from pathlib import Path

# "Credentials" represents your Gmail login session.
from google.oauth2.credentials import Credentials

# "Flow" runs the OAuth exchange: it builds the consent URL and trades the
# code you paste back for a token.
from google_auth_oauthlib.flow import Flow

# "build" creates a Gmail API "service" object, the thing we use to
# actually fetch emails.
from googleapiclient.discovery import build

from config.settings import (
    CREDENTIALS_PATH, TOKEN_PATH, GMAIL_SCOPES, GMAIL_MAX_RESULTS,
)
from tools.credential_store import (
    load_credentials, client_section, load_token, save_token,
)


# ── ERRORS ─────────────────────────────────────────────────────────────

class AuthorizationError(RuntimeError):
    """The one-time login (code exchange) failed."""


class TokenInvalidError(AuthorizationError):
    """The saved token can't be used any more; the user must log in again."""


# ── AUTHENTICATION ─────────────────────────────────────────────────────

def authorize(code_source=input, credentials_path: Path = CREDENTIALS_PATH,
              token_path: Path = TOKEN_PATH) -> Credentials:
    """
    Return Gmail credentials, logging in first if we have never done so.

    SUBSEQUENT TIMES (saved token exists):
        Load the saved token and return straight away. No refresh, no
        network call. An expired access token is refreshed by the Google
        client library on first use, as long as we hold a refresh token.

    FIRST TIME (no saved token):
        1. Print a Google consent URL
        2. Ask "code_source" for the code Google shows after you click Allow
        3. Exchange that code for a token and save it to token.json

    Args:
        code_source: a function that takes a prompt string and returns the
                     code. Defaults to the console's input(), but a test or
                     another front end can pass anything.

    Raises:
        CredentialsError:   credentials.json is missing or broken.
        TokenInvalidError:  token.json exists but can't be used.
        AuthorizationError: the code exchange failed.
    """
    try:
        token = load_token(token_path)
    except json.JSONDecodeError as e:
        raise TokenInvalidError(
            f"❌ Saved token at {token_path} is not valid JSON ({e}).\n"
            f"   Delete {token_path} and run again to re-authorize."
        ) from e

    if token is not None:
        return _credentials_from_token(token, token_path)

    client_config = load_credentials(credentials_path)
    return _run_code_exchange(client_config, code_source, token_path)


def _credentials_from_token(token: dict, token_path: Path) -> Credentials:
    # google-auth expects a JSON object; a list or a bare string is junk.
    if not isinstance(token, dict):
        raise TokenInvalidError(
            f"❌ Saved token at {token_path} is not a JSON object.\n"
            f"   Delete {token_path} and run again to re-authorize."
        )

    try:
        creds = Credentials.from_authorized_user_info(token, GMAIL_SCOPES)
    except ValueError as e:
        raise TokenInvalidError(
            f"❌ Saved token at {token_path} is not usable ({e}).\n"
            f"   Delete {token_path} and run again to re-authorize."
        ) from e

    # Expired and nothing to renew it with: every Gmail call would fail.
    if creds.expired and not creds.refresh_token:
        raise TokenInvalidError(
            f"❌ Saved token at {token_path} has expired and has no refresh token.\n"
            f"   Delete {token_path} and run again to re-authorize."
        )

    return creds


def _run_code_exchange(client_config: dict, code_source, token_path: Path) -> Credentials:
    redirect_uri = client_section(client_config)['redirect_uris'][0]

    flow = Flow.from_client_config(
        client_config,
        scopes=GMAIL_SCOPES,
        redirect_uri=redirect_uri,
    )

    # "offline" asks Google for a refresh token, so the saved token keeps
    # working after the first hour.
    auth_url, _ = flow.authorization_url(access_type='offline', prompt='consent')

    print("\n[AUTH] Authorize this app by visiting this URL:\n")
    print(f"   {auth_url}")

    code = code_source("\nEnter the code from that page here: ")

    try:
        flow.fetch_token(code=(code or '').strip())
    except Exception as e:
        raise AuthorizationError(f"Error retrieving access token: {e}") from e

    creds = flow.credentials
    save_token(creds.to_json(), token_path)
    print(f"[OK] Token stored to {token_path}")

    return creds


def get_gmail_service(creds: Credentials):
    """Build the Gmail API "service" object for the given credentials."""
    return build('gmail', 'v1', credentials=creds, cache_discovery=False)


# ── TODAY'S DATE RANGE ─────────────────────────────────────────────────

def today_window(now: datetime = None) -> tuple[str, str]:
    """
    Return ("YYYY-MM-DD" for today, "YYYY-MM-DD" for tomorrow).

    Gmail's "after:X before:Y" search then covers exactly one calendar day.
    "now" is the host's local wall-clock time unless a test passes one in.
    """
    now = now or datetime.now()
    today = now.date()
    tomorrow = today + timedelta(days=1)
    return today.isoformat(), tomorrow.isoformat()


# ── FETCH EMAILS ───────────────────────────────────────────────────────

def fetch_todays_emails(service, now: datetime = None,
                        max_results: int = GMAIL_MAX_RESULTS) -> list[str]:
    """
    Fetch the plain-text bodies of today's emails.

    Emails are fetched one at a time, in the order Gmail lists them.
    Any Gmail or decoding error stops the whole fetch; there is no
    "skip the bad one" here.

    Returns:
        A list of body strings (possibly empty strings for emails with no
        plain-text part). An empty list when nothing arrived today.
    """
    after, before = today_window(now)
    query = f'after:{after} before:{before}'

    print(f"[FETCH] Fetching emails (query: '{query}', max: {max_results})...")

    results = service.users().messages().list(
        userId='me',
        q=query,
        maxResults=max_results,
    ).execute()

    messages = results.get('messages') or []
    if not messages:
        return []

    print(f"   Found {len(messages)} emails. Fetching details...")

    bodies = []
    for msg_ref in messages:
        msg = service.users().messages().get(
            userId='me',
            id=msg_ref['id'],
        ).execute()
        bodies.append(_extract_body(msg.get('payload', {})))

    print(f"[OK] Fetched {len(bodies)} emails")
    return bodies


# ── EMAIL PARSING ──────────────────────────────────────────────────────

def _extract_body(payload: dict) -> str:
    """
    Pick the plain-text body out of a Gmail message payload.

      - MULTIPART: the first "text/plain" part that carries data
      - SIMPLE:    the payload's own body data
      - otherwise: empty string
    """
    # A "parts" key means multipart, even when the list is empty.
    if 'parts' in payload:
        for part in payload['parts'] or []:
            if part.get('mimeType') == 'text/plain' and part.get('body', {}).get('data'):
                return _decode_body(part['body']['data'])
        return ''

    data = payload.get('body', {}).get('data')
    if data:
        return _decode_body(data)
    return ''


def _decode_body(data: str) -> str:
    """
    Decode Gmail's base64url body data into text.

    Gmail sometimes drops the trailing "=" padding, so we put it back.
    Invalid base64 raises binascii.Error, which the caller does not catch.
    """
    padded = data + '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(padded).decode('utf-8', errors='replace')
