"""
Twilio Input Normalization

PURE CONVERSION - NO LOGIC, NO MODEL CALLS

Converts the form-encoded Twilio webhook into an InboundMessage.
- Body: trimmed, no enrichment
- NumMedia: parsed leniently, invalid or negative means 0
- MediaUrl{i}/MediaContentType{i}: one slot per declared index, URLs kept as-is
"""

import logging
import re
from typing import Any, Mapping, Optional

from .schemas import InboundMessage, MediaSlot

logger = logging.getLogger(__name__)

# Twilio delivers at most 10 media items per message
MAX_MEDIA = 10

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


class NormalizationError(Exception):
    """Input normalization failed."""
    pass


def parse_num_media(raw: Optional[Any]) -> int:
    """
    Parse the NumMedia field.

    Leading digits are honoured ("2" and "2abc" both give 2). Missing,
    non-numeric and negative values give 0. Counts above MAX_MEDIA are
    clamped.
    """
    if raw is None:
        return 0

    match = _LEADING_INT_RE.match(str(raw))
    if not match:
        return 0

    count = int(match.group(1))
    if count < 0:
        return 0
    if count > MAX_MEDIA:
        logger.warning(f"NumMedia={count} exceeds carrier limit, clamping to {MAX_MEDIA}")
        return MAX_MEDIA
    return count


def _field(form: Mapping[str, Any], name: str) -> str:
    value = form.get(name)
    return "" if value is None else str(value)


def normalize_form(form: Mapping[str, Any]) -> InboundMessage:
    """
    Convert Twilio webhook form fields into an InboundMessage.

    Args:
        form: Parsed form (starlette FormData or any mapping)

    Returns:
        InboundMessage ready for the gateway

    Raises:
        NormalizationError: From is missing or blank
    """
    sender = _field(form, "From").strip()
    if not sender:
        raise NormalizationError("Webhook is missing 'From'")

    num_media = parse_num_media(form.get("NumMedia"))

    media = tuple(
        MediaSlot(
            index=i,
            url=_field(form, f"MediaUrl{i}"),
            content_type=form.get(f"MediaContentType{i}") or None,
        )
        for i in range(num_media)
    )

    return InboundMessage(
        sender=sender,
        body=_field(form, "Body").strip(),
        num_media=num_media,
        media=media,
    )
