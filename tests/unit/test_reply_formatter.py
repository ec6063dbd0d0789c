"""
Reply Formatter Tests

trim_reply keeps every outbound body under the carrier ceiling.
"""

import pytest

from gateway.formatter import NO_REPLY_WARNING, REPLY_LIMIT, TRUNCATION_MARKER, trim_reply


class TestTrimReply:

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text_gives_warning(self, text):
        assert trim_reply(text) == NO_REPLY_WARNING

    def test_short_text_unchanged(self):
        assert trim_reply("You have rights.") == "You have rights."

    def test_text_at_limit_unchanged(self):
        text = "a" * REPLY_LIMIT
        assert trim_reply(text) == text

    def test_long_text_truncated_with_marker(self):
        text = "b" * (REPLY_LIMIT + 1)
        trimmed = trim_reply(text)

        assert trimmed == "b" * REPLY_LIMIT + TRUNCATION_MARKER
        assert trimmed.endswith("[Message truncated]")

    def test_custom_limit(self):
        assert trim_reply("abcdef", limit=3) == "abc" + TRUNCATION_MARKER

    @pytest.mark.parametrize("length", [0, 1, 10, 1499, 1500, 1501, 5000])
    def test_never_longer_than_limit_plus_marker(self, length):
        assert len(trim_reply("x" * length)) <= REPLY_LIMIT + len(TRUNCATION_MARKER)

    @pytest.mark.parametrize("text", ["", "short", "y" * REPLY_LIMIT])
    def test_idempotent_under_limit(self, text):
        assert trim_reply(trim_reply(text)) == trim_reply(text)

    def test_warning_fits_the_limit(self):
        assert len(NO_REPLY_WARNING) < REPLY_LIMIT
