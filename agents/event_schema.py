# agents/event_schema.py
#
# The shape of one extracted event. The LLM is asked to answer with a list
# of these, but nothing forces it to, so every field is optional and is
# cleaned up on the way in.

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


EVENT_TYPES = ('Exam', 'Appointment', 'Meeting')


class EventRecord(BaseModel):
    """One exam, appointment or meeting found in today's emails."""

    model_config = ConfigDict(extra='ignore')

    type: Optional[str] = None
    title: Optional[str] = None
    time: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None

    @field_validator('type', 'title', 'time', 'location', 'notes', mode='before')
    @classmethod
    def _as_text(cls, value):
        # Models sometimes answer "time": 10 or "notes": null.
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator('type')
    @classmethod
    def _canonical_type(cls, value):
        if value is None:
            return None
        for known in EVENT_TYPES:
            if value.lower() == known.lower():
                return known
        return value
