"""
Inbound Message Handler

Orchestrates one webhook delivery end to end:

    RECEIVED → CLASSIFIED → ANSWERED → FORMATTED → DELIVERED | FAILED

An empty body stops at RECEIVED (IGNORED): nothing is classified, stored,
asked or sent, and the carrier still gets a success acknowledgment.

Answer paths:
- help / lawyer referral → canned text
- incident report → IncidentStore.append, then a confirmation
- freeform question → AnswerOracle.ask; an unavailable oracle degrades to
  the formatter's "No reply generated." warning

Storage and delivery failures end in FAILED with no confirmation sent; the
webhook turns that into a server error so the carrier may retry.

The handler is stateless across requests. Store, oracle and sender are
injected.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gateway.formatter import REPLY_LIMIT, trim_reply
from gateway.intents import ClassifiedIntent, IncidentReportIntent, IntentKind, classify
from gateway.replies import HELP_REPLY, LAWYER_REPLY, incident_recorded_reply
from incidents.base import IncidentStore, StorageReadError, StorageWriteError
from incidents.types import IncidentRecord
from inference.oracle import AnswerOracle, OracleUnavailableError
from transport.twilio.schemas import InboundMessage
from transport.twilio.sender import DeliveryError, MessageSender

logger = logging.getLogger(__name__)


class HandlerStatus(str, Enum):
    IGNORED = "ignored"
    DELIVERED = "delivered"
    FAILED = "failed"


@dataclass
class HandlerResult:
    """Outcome of one handled message."""

    status: HandlerStatus
    intent: Optional[IntentKind] = None
    reply: Optional[str] = None
    message_sid: Optional[str] = None
    error_kind: Optional[str] = None


class InboundMessageHandler:
    """Classify → answer → format → deliver, with per-request failure isolation."""

    def __init__(
        self,
        store: IncidentStore,
        oracle: AnswerOracle,
        sender: MessageSender,
        reply_limit: int = REPLY_LIMIT,
    ):
        self.store = store
        self.oracle = oracle
        self.sender = sender
        self.reply_limit = reply_limit

    async def handle(self, message: InboundMessage) -> HandlerResult:
        """
        Handle one inbound message.

        Never raises: every failure is logged and returned as FAILED.
        """
        intent: Optional[ClassifiedIntent] = None
        try:
            intent = classify(message.body, message.media)
            if intent is None:
                logger.debug(f"Empty body from {message.sender}, nothing to answer")
                return HandlerResult(status=HandlerStatus.IGNORED)

            logger.info(
                f"Message classified as {intent.kind.value}",
                extra={"sender": message.sender, "intent": intent.kind.value},
            )

            reply_text = await self._answer(message, intent)
            reply = trim_reply(reply_text, self.reply_limit)
            message_sid = await self._run_blocking(self.sender.send, message.sender, reply)

        except (StorageReadError, StorageWriteError, DeliveryError) as e:
            return self._failed(message, intent, type(e).__name__, e)

        except Exception as e:
            return self._failed(message, intent, "unexpected", e)

        return HandlerResult(
            status=HandlerStatus.DELIVERED,
            intent=intent.kind,
            reply=reply,
            message_sid=message_sid,
        )

    async def _answer(self, message: InboundMessage, intent: ClassifiedIntent) -> Optional[str]:
        if intent.kind is IntentKind.HELP:
            return HELP_REPLY

        if intent.kind is IntentKind.LAWYER_REFERRAL:
            return LAWYER_REPLY

        if isinstance(intent, IncidentReportIntent):
            return await self._record_incident(message, intent)

        try:
            return await self.oracle.ask(intent.text)
        except OracleUnavailableError as e:
            logger.warning(
                f"Oracle unavailable ({e.kind}), sending degraded reply",
                extra={"sender": message.sender, "intent": intent.kind.value, "error_kind": e.kind},
            )
            return None

    async def _record_incident(self, message: InboundMessage, intent: IncidentReportIntent) -> str:
        record = IncidentRecord(
            reporter_address=message.sender,
            description=intent.description,
            attachments=intent.attachments,
        )
        await self._run_blocking(self.store.append, record)

        logger.info(
            "New incident recorded",
            extra={
                "sender": message.sender,
                "description": record.description,
                "attachments": len(record.attachments),
            },
        )
        return incident_recorded_reply(len(record.attachments))

    @staticmethod
    async def _run_blocking(func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    @staticmethod
    def _failed(
        message: InboundMessage,
        intent: Optional[ClassifiedIntent],
        error_kind: str,
        error: Exception,
    ) -> HandlerResult:
        intent_kind = intent.kind if intent is not None else None
        logger.error(
            f"Failed to handle message from {message.sender}: {error_kind}: {error}",
            exc_info=True,
            extra={
                "sender": message.sender,
                "intent": intent_kind.value if intent_kind else None,
                "error_kind": error_kind,
            },
        )
        return HandlerResult(
            status=HandlerStatus.FAILED,
            intent=intent_kind,
            error_kind=error_kind,
        )
