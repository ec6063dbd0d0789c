"""
Reply formatter.

Twilio rejects message bodies over 1600 characters; replies are capped
below that with a safety margin.
"""

from typing import Optional

REPLY_LIMIT = 1500
TRUNCATION_MARKER = "\n\n[Message truncated]"
NO_REPLY_WARNING = "No reply generated."


def trim_reply(text: Optional[str], limit: int = REPLY_LIMIT) -> str:
    """
    Fit a reply into one outbound message.

    Returns:
        NO_REPLY_WARNING for empty or missing text, the first `limit`
        characters plus TRUNCATION_MARKER for longer text, otherwise the
        text unchanged
    """
    if not text:
        return NO_REPLY_WARNING
    if len(text) > limit:
        return text[:limit] + TRUNCATION_MARKER
    return text
