"""
Incident store types.

Defines the immutable incident record and its media attachments.

Persisted field names (aliases) match the incidents.json format written by
the first version of the helpline, so existing files stay readable:

    {
        "user_number": "whatsapp:+9779800000000",
        "description": "police took my phone",
        "media": [{"url": "https://...", "type": "image/jpeg"}],
        "timestamp": "2024-05-01T10:00:00Z"
    }
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

NO_DESCRIPTION = "No description"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MediaAttachment(BaseModel):
    """A single media item attached to an incident report."""

    url: str = Field(..., description="Carrier-hosted media URL")
    content_type: Optional[str] = Field(
        None,
        alias="type",
        description="Declared MIME type. May be missing.",
    )

    class Config:
        frozen = True
        populate_by_name = True


class IncidentRecord(BaseModel):
    """
    A user-submitted incident report.

    Records are immutable once created; the store only ever appends them.
    """

    reporter_address: str = Field(..., alias="user_number", min_length=1)
    description: str = Field(NO_DESCRIPTION, min_length=1)
    attachments: Tuple[MediaAttachment, ...] = Field(default_factory=tuple, alias="media")
    recorded_at: datetime = Field(default_factory=_utcnow, alias="timestamp")

    class Config:
        frozen = True
        populate_by_name = True

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON shape."""
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "IncidentRecord":
        """Parse one persisted JSON object. Raises pydantic.ValidationError."""
        return cls.model_validate(document)


# Ordered, store-owned sequence of records.
IncidentCollection = List[IncidentRecord]
