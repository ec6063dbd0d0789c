"""
Intent classification.

Maps an inbound message body (plus its declared media slots) to exactly one
ClassifiedIntent. Rules live in INTENT_RULES and are evaluated in order;
the first pattern that matches wins. A body that matches none of them is a
freeform question for the answer oracle.

Order matters: "help" and "lawyer" are checked before the incident marker,
so "help, incident: ..." is a help request, not a report.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Optional, Sequence, Tuple

from incidents.types import NO_DESCRIPTION, MediaAttachment
from transport.twilio.schemas import MediaSlot


class IntentKind(str, Enum):
    HELP = "help"
    LAWYER_REFERRAL = "lawyer_referral"
    INCIDENT_REPORT = "incident_report"
    FREEFORM_QUESTION = "freeform_question"


@dataclass(frozen=True)
class ClassifiedIntent:
    kind: ClassVar[IntentKind]


@dataclass(frozen=True)
class HelpIntent(ClassifiedIntent):
    kind: ClassVar[IntentKind] = IntentKind.HELP


@dataclass(frozen=True)
class LawyerReferralIntent(ClassifiedIntent):
    kind: ClassVar[IntentKind] = IntentKind.LAWYER_REFERRAL


@dataclass(frozen=True)
class IncidentReportIntent(ClassifiedIntent):
    kind: ClassVar[IntentKind] = IntentKind.INCIDENT_REPORT

    description: str = NO_DESCRIPTION
    attachments: Tuple[MediaAttachment, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FreeformQuestionIntent(ClassifiedIntent):
    kind: ClassVar[IntentKind] = IntentKind.FREEFORM_QUESTION

    text: str = ""


INCIDENT_MARKER = re.compile(r"incident:", re.IGNORECASE)


def extract_description(body: str) -> str:
    """Text after the first incident marker, trimmed, or NO_DESCRIPTION."""
    parts = INCIDENT_MARKER.split(body, maxsplit=1)
    remainder = parts[1].strip() if len(parts) > 1 else ""
    return remainder or NO_DESCRIPTION


def build_attachments(media: Sequence[MediaSlot]) -> Tuple[MediaAttachment, ...]:
    """Keep declared slots that carry a URL, in index order."""
    ordered = sorted(media, key=lambda slot: slot.index)
    return tuple(
        MediaAttachment(url=slot.url, content_type=slot.content_type)
        for slot in ordered
        if slot.url
    )


def _build_incident(body: str, media: Sequence[MediaSlot]) -> IncidentReportIntent:
    return IncidentReportIntent(
        description=extract_description(body),
        attachments=build_attachments(media),
    )


@dataclass(frozen=True)
class IntentRule:
    """pattern → intent constructor. Evaluated in INTENT_RULES order."""

    kind: IntentKind
    pattern: re.Pattern
    build: Callable[[str, Sequence[MediaSlot]], ClassifiedIntent]


INTENT_RULES: Tuple[IntentRule, ...] = (
    IntentRule(
        IntentKind.HELP,
        re.compile(r"help", re.IGNORECASE),
        lambda body, media: HelpIntent(),
    ),
    IntentRule(
        IntentKind.LAWYER_REFERRAL,
        re.compile(r"lawyer", re.IGNORECASE),
        lambda body, media: LawyerReferralIntent(),
    ),
    IntentRule(
        IntentKind.INCIDENT_REPORT,
        INCIDENT_MARKER,
        _build_incident,
    ),
)


def classify(
    body: Optional[str],
    media: Sequence[MediaSlot] = (),
    rules: Sequence[IntentRule] = INTENT_RULES,
) -> Optional[ClassifiedIntent]:
    """
    Classify a message body.

    Args:
        body: Raw message text (trimmed here as well)
        media: Declared media slots of the message
        rules: Ordered rule table

    Returns:
        The first matching intent, FreeformQuestionIntent when no rule
        matches, or None for an empty body (nothing to answer)
    """
    text = (body or "").strip()
    if not text:
        return None

    for rule in rules:
        if rule.pattern.search(text):
            return rule.build(text, media)

    return FreeformQuestionIntent(text=text)
