"""
Twilio Transport Layer - Module Exports

The webhook router is imported from transport.twilio.webhook directly so
that the gateway can depend on these schemas without a circular import.
"""

from .normalize import (
    MAX_MEDIA,
    NormalizationError,
    normalize_form,
    parse_num_media,
)
from .schemas import InboundMessage, MediaSlot
from .sender import (
    DeliveryError,
    LoggingMessageSender,
    MessageSender,
    TwilioMessageSender,
)

__all__ = [
    # Schemas
    "InboundMessage",
    "MediaSlot",
    # Normalization
    "normalize_form",
    "parse_num_media",
    "NormalizationError",
    "MAX_MEDIA",
    # Sender
    "MessageSender",
    "TwilioMessageSender",
    "LoggingMessageSender",
    "DeliveryError",
]
