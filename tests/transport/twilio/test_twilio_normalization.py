"""
Twilio Normalization Tests

Form fields → InboundMessage, with no interpretation of the text.
"""

import pytest

from transport.twilio.normalize import MAX_MEDIA, NormalizationError, normalize_form, parse_num_media
from transport.twilio.schemas import InboundMessage


class TestNumMedia:

    @pytest.mark.parametrize("raw,expected", [
        (None, 0),
        ("", 0),
        ("0", 0),
        ("2", 2),
        (" 3", 3),
        ("2abc", 2),
        ("abc", 0),
        ("-1", 0),
        (4, 4),
        ("99", MAX_MEDIA),
    ])
    def test_parse_num_media(self, raw, expected):
        assert parse_num_media(raw) == expected


class TestNormalizeForm:

    def test_text_message(self):
        message = normalize_form({"From": "whatsapp:+9779800000000", "Body": "  Hello  "})

        assert isinstance(message, InboundMessage)
        assert message.sender == "whatsapp:+9779800000000"
        assert message.body == "Hello"
        assert message.num_media == 0
        assert message.media == ()

    def test_missing_body_is_empty(self):
        assert normalize_form({"From": "whatsapp:+1"}).body == ""

    def test_missing_from_raises(self):
        with pytest.raises(NormalizationError):
            normalize_form({"Body": "help"})

    def test_blank_from_raises(self):
        with pytest.raises(NormalizationError):
            normalize_form({"From": "  ", "Body": "help"})

    def test_one_slot_per_declared_index(self):
        message = normalize_form({
            "From": "whatsapp:+1",
            "Body": "incident: x",
            "NumMedia": "2",
            "MediaUrl0": "http://a",
            "MediaContentType0": "image/jpeg",
            "MediaUrl1": "",
            "MediaContentType1": "image/png",
        })

        assert message.num_media == 2
        assert [(s.index, s.url, s.content_type) for s in message.media] == [
            (0, "http://a", "image/jpeg"),
            (1, "", "image/png"),
        ]

    def test_undeclared_media_is_ignored(self):
        message = normalize_form({
            "From": "whatsapp:+1",
            "NumMedia": "1",
            "MediaUrl0": "http://a",
            "MediaUrl1": "http://b",
        })
        assert [s.url for s in message.media] == ["http://a"]
        assert message.media[0].content_type is None

    def test_message_is_immutable(self):
        message = normalize_form({"From": "whatsapp:+1", "Body": "hi"})
        with pytest.raises(Exception):
            message.body = "changed"  # type: ignore
