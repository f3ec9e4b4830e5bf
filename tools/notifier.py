# tools/notifier.py
#
# ============================================================================
# WHAT THIS FILE DOES:
# Sends the finished schedule to your phone as a WhatsApp message, using
# Twilio's messaging API.
#
# One summary → one message. If Twilio says no (bad number, bad
# credentials, network down) the error is NOT caught here: the run stops
# and you see why in the console.
# ============================================================================

from twilio.rest import Client

from config.settings import (
    TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, WHATSAPP_FROM, WHATSAPP_TO,
)


def make_twilio_client(account_sid: str = None, auth_token: str = None) -> Client:
    """Create the Twilio REST client from settings (or explicit values)."""
    return Client(account_sid or TWILIO_ACCOUNT_SID, auth_token or TWILIO_AUTH_TOKEN)


class WhatsAppNotifier:
    """Delivers a text summary from one WhatsApp identity to another."""

    def __init__(self, client: Client, sender: str = None, recipient: str = None):
        self.client = client
        self.sender = sender or WHATSAPP_FROM
        self.recipient = recipient or WHATSAPP_TO

    def send_summary(self, summary: str) -> str:
        """
        Send "summary" as a single message.

        Returns:
            The Twilio message SID.
        """
        message = self.client.messages.create(
            from_=self.sender,
            to=self.recipient,
            body=summary,
        )
        print("✅ Sent schedule to WhatsApp!")
        return message.sid
