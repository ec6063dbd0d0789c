"""
Twilio Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Defines the contract between the Twilio webhook and the gateway.
"""

from datetime import datetime, timezone
from typing import Optional, Tuple

from pydantic import BaseModel, Field


# ============================================================================
# INBOUND MESSAGE (THE CONTRACT)
# ============================================================================

class MediaSlot(BaseModel):
    """
    One declared attachment position from the webhook form.

    url may be empty: Twilio declares NumMedia, but a slot can still come
    through without a MediaUrl{i}.
    """

    index: int = Field(..., ge=0, description="Position i of MediaUrl{i}")
    url: str = Field("", description="MediaUrl{i}, empty when absent")
    content_type: Optional[str] = Field(None, description="MediaContentType{i}")

    class Config:
        frozen = True


class InboundMessage(BaseModel):
    """
    Canonical inbound message the gateway consumes.

    Built from the form fields Twilio posts for WhatsApp and SMS:
    From, Body, NumMedia, MediaUrl{i}, MediaContentType{i}.
    """

    sender: str = Field(..., min_length=1, description="From address, e.g. whatsapp:+977...")
    body: str = Field("", description="Message text, trimmed")
    num_media: int = Field(0, ge=0, description="Declared attachment count")
    media: Tuple[MediaSlot, ...] = Field(
        default_factory=tuple,
        description="One slot per declared index 0..num_media-1",
    )
    received_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        frozen = True  # Immutable - transport shouldn't mutate
