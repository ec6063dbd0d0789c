"""
Twilio Response Sender

Sends the formatted reply back to the original sender.
No formatting intelligence. No retries. No logic.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Failed to deliver a reply through the carrier."""
    pass


class MessageSender(ABC):
    """Outbound capability: send message to address X with body Y."""

    @abstractmethod
    def send(self, to: str, body: str) -> Optional[str]:
        """
        Send one message.

        Returns:
            Carrier message id, when the carrier provides one

        Raises:
            DeliveryError: If the send fails
        """
        raise NotImplementedError


class TwilioMessageSender(MessageSender):
    """Delivers replies through the Twilio Messages REST API."""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_address: str,
        client: Optional[Client] = None,
    ):
        """
        Args:
            account_sid: Twilio account SID
            auth_token: Twilio auth token
            from_address: Configured sending address (e.g. whatsapp:+14155238886)
            client: Pre-built Twilio client (tests)
        """
        self.from_address = from_address
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            if not self._account_sid or not self._auth_token:
                raise DeliveryError("TWILIO_ACCOUNT_SID / TWILIO_AUTH_TOKEN not configured")
            self._client = Client(self._account_sid, self._auth_token)
        return self._client

    def send(self, to: str, body: str) -> Optional[str]:
        if not self.from_address:
            raise DeliveryError("TWILIO_WHATSAPP_NUMBER not configured")

        try:
            message = self.client.messages.create(
                from_=self.from_address,
                to=to,
                body=body,
            )
        except TwilioException as e:
            logger.error(
                f"Twilio API error: {e}",
                extra={"to": to, "error": str(e)},
            )
            raise DeliveryError(f"Twilio rejected message: {e}") from e
        except Exception as e:
            logger.error(
                f"Unexpected error sending reply: {e}",
                exc_info=True,
                extra={"to": to, "error": str(e)},
            )
            raise DeliveryError(f"Unexpected error: {e}") from e

        logger.info(
            f"Reply sent to {to}",
            extra={"to": to, "message_sid": message.sid},
        )
        return message.sid


class LoggingMessageSender(MessageSender):
    """
    Sender that only logs and remembers replies.

    Used for local development without carrier credentials, and in tests.
    """

    def __init__(self):
        self.sent = []

    def send(self, to: str, body: str) -> Optional[str]:
        self.sent.append((to, body))
        logger.info(f"[delivery disabled] reply to {to}: {body[:80]}")
        return None
