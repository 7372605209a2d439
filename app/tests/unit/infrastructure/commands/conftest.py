"""Feature-level fixtures for command framework tests (Level 3)."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.commands.entities import ForumTag, Snowflake
from infrastructure.commands.options import OptionType, OptionValue
from infrastructure.commands.registry import CommandRegistry


@pytest.fixture
def forum_tags():
    """Tags available in the test forum channel."""
    return [
        ForumTag(id=Snowflake(1), name="Bug"),
        ForumTag(id=Snowflake(2), name="Feature Request"),
        ForumTag(id=Snowflake(3), name="Question"),
    ]


@pytest.fixture
def forum_resolver(forum_tags):
    """EntityResolver treating channel "200" as a forum thread.

    Returns:
        MagicMock whose fetch_forum_tags returns tags for "200" only
    """

    async def _fetch(channel_id):
        return forum_tags if channel_id == "200" else None

    resolver = MagicMock()
    resolver.fetch_forum_tags = AsyncMock(side_effect=_fetch)
    return resolver


@pytest.fixture
def option_factory():
    """Factory for slash OptionValue instances."""

    def _factory(name: str, value, option_type: OptionType = OptionType.STRING, resolved=None):
        return OptionValue(name=name, type=option_type, value=value, resolved=resolved)

    return _factory


@pytest.fixture
def registry():
    """Empty command registry."""
    return CommandRegistry("test")
