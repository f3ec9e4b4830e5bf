# tests/test_summary_formatter.py
#
# Tests for format_summary — the text that ends up on your phone.

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from agents.event_schema import EventRecord
from tools.summary_formatter import format_summary, NO_EVENTS_MESSAGE


MIDTERM = {"type": "Exam", "title": "Midterm", "time": "10:00", "location": "Room 5", "notes": ""}


class TestEmpty:

    def test_empty_list_gives_fixed_message(self):
        assert format_summary([]) == NO_EVENTS_MESSAGE
        assert "no exams or appointments" in NO_EVENTS_MESSAGE

    def test_none_gives_fixed_message(self):
        assert format_summary(None) == NO_EVENTS_MESSAGE


class TestFormatting:

    def test_single_exam(self):
        summary = format_summary([MIDTERM])

        assert "1. Exam — Midterm" in summary
        assert "Time: 10:00" in summary
        assert "Location: Room 5" in summary
        assert "Notes: None" in summary

    def test_header_first(self):
        assert format_summary([MIDTERM]).startswith("📅 Here's your schedule for today:")

    def test_missing_fields_use_placeholders(self):
        summary = format_summary([{"type": "Appointment"}])

        assert "1. Appointment — No title" in summary
        assert "Time: Not specified" in summary
        assert "Location: Not specified" in summary
        assert "Notes: None" in summary

    def test_missing_type_uses_generic_label(self):
        assert "1. Event — Standup" in format_summary([{"title": "Standup"}])

    def test_numbering_follows_input_order(self):
        summary = format_summary([
            {"type": "Meeting", "title": "Standup"},
            {"type": "Appointment", "title": "Dentist"},
        ])

        assert summary.index("1. Meeting — Standup") < summary.index("2. Appointment — Dentist")

    def test_records_and_dicts_format_the_same(self):
        assert format_summary([EventRecord(**MIDTERM)]) == format_summary([MIDTERM])

    def test_notes_are_shown(self):
        assert "Notes: Bring a calculator" in format_summary(
            [{"type": "Exam", "title": "Math", "notes": "Bring a calculator"}]
        )

    def test_pure_and_repeatable(self):
        events = [MIDTERM, {"type": "Meeting", "title": "Sync", "time": "14:00"}]

        assert format_summary(events) == format_summary(events)

    def test_unformattable_item_raises(self):
        with pytest.raises(TypeError):
            format_summary(["not an event"])
