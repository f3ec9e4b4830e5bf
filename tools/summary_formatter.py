# tools/summary_formatter.py
#
# ============================================================================
# WHAT THIS FILE DOES:
# Turns the events the LLM found into the text of the WhatsApp message.
#
# Example output:
#
#   📅 Here's your schedule for today:
#
#   1. Exam — Calculus Midterm
#      🕒 Time: 10:00 AM
#      📍 Location: Room 204
#      📝 Notes: Bring a calculator
#
# It's a PURE function: the same events always give the same text.
# No clock, no network, no files. That makes it trivial to test.
# ============================================================================

# "Mapping" matches dicts and anything dict-like, so raw LLM output
# (plain dicts) can be formatted without converting it first.
from collections.abc import Mapping

from agents.event_schema import EventRecord


# ── FIXED TEXT ─────────────────────────────────────────────────────────

# Sent as-is when there is nothing scheduled.
NO_EVENTS_MESSAGE = "📭 You have no exams or appointments scheduled for today."
HEADER = "📅 Here's your schedule for today:"

# Placeholders for fields the LLM left out or left empty.
NO_TYPE = "Event"
NO_TITLE = "No title"
NOT_SPECIFIED = "Not specified"
NO_NOTES = "None"


# ── FORMATTING ─────────────────────────────────────────────────────────

def format_summary(events) -> str:
    """
    Build the human-readable schedule for "events".

    "events" may hold EventRecord objects or plain dicts straight from the
    LLM; missing or empty fields get a placeholder.
    """
    if not events:
        return NO_EVENTS_MESSAGE

    summary = f"{HEADER}\n"

    # One block per event, numbered from 1, each preceded by a blank line.
    for idx, event in enumerate(events, start=1):
        ev = _as_record(event)
        summary += (
            f"\n{idx}. {ev.type or NO_TYPE} — {ev.title or NO_TITLE}\n"
            f"   🕒 Time: {ev.time or NOT_SPECIFIED}\n"
            f"   📍 Location: {ev.location or NOT_SPECIFIED}\n"
            f"   📝 Notes: {ev.notes or NO_NOTES}\n"
        )
    return summary


def _as_record(event) -> EventRecord:
    # Running a dict through EventRecord applies the same clean-up the
    # extractor does (blank → None, "exam" → "Exam").
    if isinstance(event, EventRecord):
        return event
    if isinstance(event, Mapping):
        return EventRecord.model_validate(dict(event))
    raise TypeError(f"Cannot format event of type {type(event).__name__}")
