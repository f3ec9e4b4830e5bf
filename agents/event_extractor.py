# agents/event_extractor.py
#
# ============================================================================
# WHAT THIS FILE DOES:
# This is the "reader" of the assistant. It hands today's email bodies to
# an LLM and asks for one thing back: a JSON list of today's exams,
# appointments and meetings.
#
# LLMs don't always answer in clean JSON; they like wrapping it in
# markdown code fences (```json ... ```). We strip those before parsing.
#
# If the answer STILL isn't valid JSON, we print it (so you can see what
# went wrong) and carry on as if there were no events. This is the only
# error in the whole run that we recover from.
# ============================================================================

import json
import re

from pydantic import ValidationError

from agents.event_schema import EventRecord
from agents.llm_client import LLMClient


# Emails are glued together with this line between them.
EMAIL_SEPARATOR = "\n---\n"

PROMPT_TEMPLATE = """
You are an AI personal assistant.
From the following emails, extract ONLY today's events, exams, or appointments.
For each event, return JSON in this format:
[{{"type":"Exam|Appointment|Meeting","title":"","time":"","location":"","notes":""}}]
Emails:
{emails}
"""

# A fence at the very start (``` or ```json, any case) or at the very end.
_LEADING_FENCE = re.compile(r'^\s*```(?:json)?', re.IGNORECASE)
_TRAILING_FENCE = re.compile(r'```\s*$')


class EventExtractor:
    """Turns a list of email bodies into a list of EventRecord."""

    def __init__(self, llm: LLMClient = None):
        self.llm = llm or LLMClient()

    def build_prompt(self, emails: list[str]) -> str:
        return PROMPT_TEMPLATE.format(emails=EMAIL_SEPARATOR.join(emails))

    def extract_events(self, emails: list[str]) -> list[EventRecord]:
        """
        Ask the LLM for today's events and parse its answer.

        Exactly one LLM request is made. Network/provider errors propagate;
        an unparseable answer does not, it gives an empty list.
        """
        print(f"[LLM] Extracting events from {len(emails)} emails...")
        text = self.llm.generate(self.build_prompt(emails))

        try:
            data = json.loads(strip_code_fences(text))
        except json.JSONDecodeError:
            print(f"❌ Failed to parse AI response. Raw text:\n{text}")
            return []

        return _to_records(data)


def strip_code_fences(text: str) -> str:
    """Remove a leading ``` / ```json and a trailing ``` from the text."""
    text = _LEADING_FENCE.sub('', text or '', count=1)
    text = _TRAILING_FENCE.sub('', text, count=1)
    return text.strip()


def _to_records(data) -> list[EventRecord]:
    # A single event sometimes comes back without the surrounding list.
    if isinstance(data, dict):
        data = [data]

    if not isinstance(data, list):
        print(f"[WARN] Expected a JSON list of events, got {type(data).__name__}. Ignoring it.")
        return []

    records = []
    for item in data:
        if not isinstance(item, dict):
            print(f"[WARN] Skipping event that is not a JSON object: {item!r}")
            continue
        try:
            records.append(EventRecord.model_validate(item))
        except ValidationError as e:
            print(f"[WARN] Skipping malformed event {item!r}: {e}")
    return records
