# orchestrator.py
#
# ============================================================================
# WHAT THIS FILE DOES:
# This is the "manager" of a single daily check. It calls every step in
# order and passes each step's output to the next:
#
#   Authorize → Fetch today's emails → Extract events → Format → Notify
#
# Nothing happens in parallel: each step waits for the one before it.
#
# The orchestrator doesn't build its collaborators itself: main.py
# creates the LLM client, the Twilio client, etc. once and hands them in.
# That also lets the tests swap every outside service for a fake.
# ============================================================================

# ── IMPORTS ────────────────────────────────────────────────────────────

import json

# A Lock is a "one at a time" token: whoever holds it is the only run.
import threading

# "rich" makes terminal output look nice (colors, boxes, pretty JSON).
from rich.console import Console
from rich.panel import Panel

# "Text" prints the summary literally, so a "[" in an email title isn't
# mistaken for rich's own [bold]-style markup.
from rich.text import Text

# Our own building blocks, one per step of the check
from agents.event_extractor import EventExtractor
from tools.gmail_tools import authorize, get_gmail_service, fetch_todays_emails
from tools.notifier import WhatsAppNotifier
from tools.summary_formatter import format_summary


NO_EMAILS_MESSAGE = "📭 No emails found for today."

console = Console()


class DailyCheckOrchestrator:
    """
    Runs the end-to-end daily check.

    Only one check runs at a time. If the scheduler fires while the
    previous check is still going, the new one is skipped.
    """

    def __init__(self, extractor: EventExtractor, notifier: WhatsAppNotifier,
                 authorize_fn=authorize, service_factory=get_gmail_service,
                 fetch_fn=fetch_todays_emails):
        # The two collaborators that talk to paid services (LLM, Twilio)
        self.extractor = extractor
        self.notifier = notifier

        # The Gmail steps. The defaults are the real functions from
        # tools/gmail_tools.py; tests pass fakes.
        self.authorize_fn = authorize_fn
        self.service_factory = service_factory
        self.fetch_fn = fetch_fn

        # Held for the whole of a run. See run_daily_check().
        self._running = threading.Lock()

    def run_daily_check(self, now=None) -> str | None:
        """
        Run one check.

        Returns:
            The text shown to the user: either the "no emails" message or
            the formatted schedule. None when the run was skipped because
            another one was in progress.

        Any failure other than an unparseable LLM answer propagates.
        """
        # blocking=False: don't wait for the other run to finish, just
        # report that the lock is taken.
        if not self._running.acquire(blocking=False):
            print("[SKIP] A daily check is already running, skipping this one.")
            return None

        # "finally" releases the lock even when a step raises.
        try:
            return self._run(now)
        finally:
            self._running.release()

    def _run(self, now) -> str:
        console.print(Panel("[bold]⏰ Running daily exam/appointment check...[/bold]"))

        # Step 1: Gmail login (may stop and ask for a code the first time)
        creds = self.authorize_fn()
        service = self.service_factory(creds)

        # Step 2: today's emails
        emails = self.fetch_fn(service, now=now)
        if not emails:
            console.print(NO_EMAILS_MESSAGE)
            return NO_EMAILS_MESSAGE

        # Step 3: events, then the human-readable schedule
        events = self.extractor.extract_events(emails)
        summary = format_summary(events)

        # The message as sent, then the structured events behind it.
        console.print(Panel(Text(summary), title="Today's schedule"))
        console.print("\nRaw JSON output:")
        console.print_json(json.dumps([e.model_dump() for e in events]))

        # Step 4: only bother the user's phone when there's something to say
        if events:
            self.notifier.send_summary(summary)
        else:
            console.print("ℹ️ No events found — WhatsApp message not sent.")

        return summary
