"""
Gateway core: intent classification, reply formatting and the inbound
message handler.
"""

from gateway.formatter import NO_REPLY_WARNING, REPLY_LIMIT, TRUNCATION_MARKER, trim_reply
from gateway.handler import HandlerResult, HandlerStatus, InboundMessageHandler
from gateway.intents import (
    INTENT_RULES,
    ClassifiedIntent,
    FreeformQuestionIntent,
    HelpIntent,
    IncidentReportIntent,
    IntentKind,
    IntentRule,
    LawyerReferralIntent,
    build_attachments,
    classify,
    extract_description,
)

__all__ = [
    "trim_reply",
    "REPLY_LIMIT",
    "TRUNCATION_MARKER",
    "NO_REPLY_WARNING",
    "InboundMessageHandler",
    "HandlerResult",
    "HandlerStatus",
    "classify",
    "build_attachments",
    "extract_description",
    "INTENT_RULES",
    "IntentRule",
    "IntentKind",
    "ClassifiedIntent",
    "HelpIntent",
    "LawyerReferralIntent",
    "IncidentReportIntent",
    "FreeformQuestionIntent",
]
