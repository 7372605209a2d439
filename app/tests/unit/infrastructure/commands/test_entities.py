"""Unit tests for platform entity value types."""

from datetime import datetime, timezone

import pytest

from infrastructure.commands.entities import Attachment, Mention, MentionType, Snowflake


@pytest.mark.unit
class TestSnowflake:
    """Tests for Snowflake."""

    def test_parse(self):
        assert Snowflake.parse(" 175928847299117063 ") == Snowflake(175928847299117063)

    @pytest.mark.parametrize("text", ["", "-1", "12a", "１２", "18446744073709551616"])
    def test_parse_rejects_invalid(self, text):
        with pytest.raises(ValueError):
            Snowflake.parse(text)

    def test_timestamp(self):
        assert Snowflake(175928847299117063).timestamp == datetime(
            2016, 4, 30, 11, 18, 25, 796000, tzinfo=timezone.utc
        )

    def test_conversions_and_ordering(self):
        assert int(Snowflake(5)) == 5
        assert str(Snowflake(5)) == "5"
        assert Snowflake(1) < Snowflake(2)


@pytest.mark.unit
class TestMention:
    """Tests for Mention."""

    @pytest.mark.parametrize(
        "mention_type,expected",
        [(MentionType.USER, "<@7>"), (MentionType.ROLE, "<@&7>"), (MentionType.CHANNEL, "<#7>")],
    )
    def test_str(self, mention_type, expected):
        assert str(Mention(mention_type, Snowflake(7))) == expected


@pytest.mark.unit
class TestAttachment:
    """Tests for Attachment."""

    def test_from_payload(self):
        attachment = Attachment.from_payload(
            {"id": "9", "filename": "a.png", "url": "https://cdn/a.png", "size": "10", "content_type": "image/png"}
        )

        assert attachment.id == Snowflake(9)
        assert attachment.size == 10
        assert attachment.content_type == "image/png"
