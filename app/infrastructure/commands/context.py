"""Command execution context."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Sequence
from uuid import uuid4

from infrastructure.commands.entities import ForumTag
from infrastructure.logging import get_module_logger

if TYPE_CHECKING:
    from infrastructure.commands.models import Command
    from infrastructure.i18n import Translator

logger = get_module_logger()


class ResponseChannel(Protocol):
    """Protocol for platform-specific response channels."""

    async def send_message(self, text: str, **kwargs) -> None:
        """Send message to the invoking channel."""
        ...  # pylint: disable=unnecessary-ellipsis

    async def send_ephemeral(self, text: str, **kwargs) -> None:
        """Send ephemeral message (visible only to user)."""
        ...  # pylint: disable=unnecessary-ellipsis


class EntityResolver(Protocol):
    """Protocol for remote entity lookups needed by converters."""

    async def fetch_forum_tags(self, channel_id: str) -> Optional[Sequence[ForumTag]]:
        """Return the forum tags available in a channel.

        Args:
            channel_id: Forum channel, or a thread inside a forum channel

        Returns:
            Available tags, or None when the channel is not forum-backed
        """
        ...  # pylint: disable=unnecessary-ellipsis


@dataclass
class CommandContext:
    """Per-invocation command execution state.

    Attributes:
        user_id: Invoking user identifier
        channel_id: Channel the command ran in
        guild_id: Guild identifier, or None for direct messages
        locale: User's preferred locale (e.g., en-US, fr-FR)
        guild_locale: Preferred locale of the guild, used when the user's
            locale is not supported
        member_role_ids: Role identifiers of the invoking guild member
        metadata: Platform-specific metadata (e.g., raw message payload)
        correlation_id: Identifier bound to every log line of the invocation
        translator: Translator used for user-facing messages
        responder: Response channel (injected by the platform gateway)
        resolver: Entity lookups for converters that need remote data
        arguments: Argument values resolved so far, by display name
        command: Command being run

    Example:
        async def ban(ctx: CommandContext, user, days=0):
            await ctx.respond(ctx.translate("moderation.banned", user=user))
    """

    user_id: str
    channel_id: str = ""
    guild_id: Optional[str] = None
    locale: str = "en-US"
    guild_locale: Optional[str] = None
    member_role_ids: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    correlation_id: Optional[str] = None

    translator: Optional["Translator"] = None
    responder: Optional[ResponseChannel] = None
    resolver: Optional[EntityResolver] = None

    arguments: Dict[str, Any] = field(default_factory=dict)
    command: Optional["Command"] = None

    def __post_init__(self):
        """Initialize defaults."""
        if self.metadata is None:
            self.metadata = {}
        if self.correlation_id is None:
            self.correlation_id = str(uuid4())

    def translate(self, key: str, **variables) -> str:
        """Translate message with user's locale.

        Args:
            key: Translation key (e.g., "converters.int.error.invalid")
            **variables: Variables for interpolation

        Returns:
            Translated message string, or the key when no translation exists
        """
        if self.translator is None:
            logger.warning("translate_called_without_translator", key=key)
            return key
        try:
            return self.translator.translate(key, self.locale, **variables)
        except (KeyError, ValueError) as e:
            logger.warning("translation_fallback", key=key, locale=self.locale, error=str(e))
            return key

    async def respond(self, text: str, **kwargs) -> None:
        """Send response message to the invoking channel."""
        if self.responder is None:
            logger.warning("respond_called_without_responder", text=text)
            return
        await self.responder.send_message(text, **kwargs)

    async def respond_ephemeral(self, text: str, **kwargs) -> None:
        """Send ephemeral message (visible only to user)."""
        if self.responder is None:
            logger.warning("respond_ephemeral_called_without_responder", text=text)
            return
        await self.responder.send_ephemeral(text, **kwargs)
