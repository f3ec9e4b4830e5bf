# main.py
#
# ============================================================================
# WHAT THIS FILE DOES:
# This is the "start button" for the daily schedule assistant. When you run
# "python main.py" in your terminal, it:
#
#   1. Loads your API keys from the .env file
#   2. Checks that every required setting and credentials.json are there
#      (exits with a helpful error if not)
#   3. Creates the LLM, Twilio and Gmail helpers ONCE
#   4. Runs the daily check right away
#   5. Schedules it to run again every day at 7:00 (host local time)
#
# USAGE:
#   python main.py                  → Run now, then every day at 07:00
#   python main.py --once           → Run now and exit
#   python main.py --authorize      → Just do the one-time Gmail login
#   python main.py --hour 6 --minute 30 → Run now, then every day at 06:30
# ============================================================================

# ── IMPORTS ────────────────────────────────────────────────────────────

import argparse
import sys

# "python-dotenv" reads the .env file in the project root and loads its
# contents as environment variables. This must happen BEFORE config.settings
# is imported, because settings reads the environment at import time.
from dotenv import load_dotenv
load_dotenv()

# "BlockingScheduler" keeps the process alive and fires jobs on time.
# "CronTrigger" describes "every day at HH:MM" the way cron does.
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from rich.console import Console

from agents.event_extractor import EventExtractor
from agents.llm_client import LLMClient
from config.settings import (
    CREDENTIALS_PATH, SCHEDULE_HOUR, SCHEDULE_MINUTE, missing_required_env,
)
from orchestrator import DailyCheckOrchestrator
from tools.credential_store import CredentialsError, load_credentials
from tools.gmail_tools import authorize
from tools.notifier import WhatsAppNotifier, make_twilio_client


console = Console()


# ── STARTUP CHECKS ─────────────────────────────────────────────────────

def check_environment() -> bool:
    """Print what's missing and return False if we can't start."""
    # An unknown LLM_PROVIDER is a config mistake like any other: say so
    # and stop, no traceback.
    try:
        missing = missing_required_env()
    except ValueError as e:
        print(f"Error: {e}")
        return False

    if missing:
        print(f"Error: missing environment variable(s): {', '.join(missing)}")
        print("   Add them to your .env file, e.g.: TWILIO_ACCOUNT_SID=AC...")
        return False

    try:
        load_credentials(CREDENTIALS_PATH)
    except CredentialsError as e:
        print(str(e))
        return False

    return True


# ── WIRING ─────────────────────────────────────────────────────────────

def build_orchestrator() -> DailyCheckOrchestrator:
    """Create every outside-service client once and hand them over."""
    extractor = EventExtractor(LLMClient())
    notifier = WhatsAppNotifier(make_twilio_client())
    return DailyCheckOrchestrator(extractor, notifier)


def run_safely(orchestrator: DailyCheckOrchestrator) -> bool:
    """
    Run one check; print the traceback if it fails.

    Used for the startup run so a failure there doesn't stop the
    scheduled runs that follow. Returns True on success.
    """
    try:
        orchestrator.run_daily_check()
        return True
    except Exception:
        console.print_exception()
        return False


def schedule_daily(orchestrator: DailyCheckOrchestrator, hour: int, minute: int) -> BlockingScheduler:
    """Register the daily check against a cron-style "minute hour * * *" trigger."""
    scheduler = BlockingScheduler()
    scheduler.add_job(
        orchestrator.run_daily_check,
        CronTrigger(hour=hour, minute=minute),
        id='daily_check',
        name='Daily exam/appointment check',
        replace_existing=True,
    )
    return scheduler


# ── MAIN FUNCTION ──────────────────────────────────────────────────────

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Daily schedule assistant: today's exams and appointments from Gmail to WhatsApp"
    )
    parser.add_argument(
        '--once', action='store_true',
        help="Run the check once and exit instead of staying scheduled"
    )
    parser.add_argument(
        '--authorize', action='store_true',
        help="Only perform the one-time Gmail authorization, then exit"
    )
    parser.add_argument(
        '--hour', type=int, default=SCHEDULE_HOUR,
        help=f"Hour of the daily run, local time (default: {SCHEDULE_HOUR})"
    )
    parser.add_argument(
        '--minute', type=int, default=SCHEDULE_MINUTE,
        help=f"Minute of the daily run (default: {SCHEDULE_MINUTE})"
    )
    args = parser.parse_args(argv)

    if args.authorize:
        try:
            load_credentials(CREDENTIALS_PATH)
        except CredentialsError as e:
            print(str(e))
            return 1
        authorize()
        print("[OK] Gmail is authorized.")
        return 0

    if not check_environment():
        return 1

    orchestrator = build_orchestrator()

    if args.once:
        return 0 if run_safely(orchestrator) else 1

    scheduler = schedule_daily(orchestrator, args.hour, args.minute)

    # Run immediately on start too, then hand over to the scheduler.
    run_safely(orchestrator)

    print(f"[SCHEDULE] Daily check scheduled for {args.hour:02d}:{args.minute:02d} (local time). "
          "Press Ctrl+C to stop.")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        print("\n[STOP] Scheduler stopped.")

    return 0


# ── ENTRY POINT ────────────────────────────────────────────────────────

if __name__ == "__main__":
    sys.exit(main())
