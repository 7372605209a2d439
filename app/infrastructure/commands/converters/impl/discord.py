"""Converters for platform entities: snowflakes, mentions, attachments, forum tags."""

import re
from typing import TYPE_CHECKING, Awaitable, Callable, List, Optional, Sequence, Union

from infrastructure.commands.converters.base import (
    NamedValues,
    ParseResult,
    SingleConverter,
    Validator,
    invalid_value,
)
from infrastructure.commands.entities import (
    Attachment,
    ForumTag,
    Mention,
    MentionType,
    Snowflake,
)
from infrastructure.commands.errors import ConfigurationError, RelayedError
from infrastructure.commands.options import OptionType, OptionValue
from infrastructure.logging import get_module_logger
from infrastructure.parsing import StringParser

if TYPE_CHECKING:
    from infrastructure.commands.context import CommandContext

logger = get_module_logger()

_MENTION_PATTERNS = {
    MentionType.USER: re.compile(r"^<@!?(\d+)>$"),
    MentionType.ROLE: re.compile(r"^<@&(\d+)>$"),
    MentionType.CHANNEL: re.compile(r"^<#(\d+)>$"),
}

_OPTION_MENTION_TYPES = {
    OptionType.USER: MentionType.USER,
    OptionType.ROLE: MentionType.ROLE,
    OptionType.CHANNEL: MentionType.CHANNEL,
}

ChannelGetter = Callable[["CommandContext"], Awaitable[Optional[str]]]


class SnowflakeConverter(SingleConverter):
    """Raw numeric identifier."""

    signature_type = "converters.snowflake.signatureType"

    async def convert_text(self, text: str, context: "CommandContext") -> Snowflake:
        try:
            return Snowflake.parse(text)
        except ValueError as e:
            raise invalid_value(
                context, "converters.snowflake.error.invalid", value=text
            ) from e


class MentionConverter(SingleConverter):
    """User, role or channel mention.

    Bare identifiers are accepted when exactly one mention type is allowed.

    Example:
        MentionConverter(types=[MentionType.ROLE]) accepts "<@&42>" and "42"
    """

    signature_type = "converters.mention.signatureType"

    def __init__(
        self,
        types: Optional[Sequence[MentionType]] = None,
        validator: Optional[Validator] = None,
    ):
        super().__init__(validator)
        self.types: List[MentionType] = list(types or MentionType)
        if not self.types:
            raise ConfigurationError("MentionConverter needs at least one mention type")

    @property
    def option_type(self) -> OptionType:  # type: ignore[override]
        if self.types == [MentionType.USER]:
            return OptionType.USER
        if self.types == [MentionType.ROLE]:
            return OptionType.ROLE
        if self.types == [MentionType.CHANNEL]:
            return OptionType.CHANNEL
        if set(self.types) == {MentionType.USER, MentionType.ROLE}:
            return OptionType.MENTIONABLE
        return OptionType.STRING

    async def convert_text(self, text: str, context: "CommandContext") -> Mention:
        for mention_type in self.types:
            match = _MENTION_PATTERNS[mention_type].match(text.strip())
            if match:
                return Mention(mention_type, Snowflake(int(match.group(1))))

        if len(self.types) == 1:
            try:
                return Mention(self.types[0], Snowflake.parse(text))
            except ValueError:
                pass

        raise invalid_value(
            context,
            "converters.mention.error.invalid",
            value=text,
            types=", ".join(t.value for t in self.types),
        )

    async def convert_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        mention_type = _OPTION_MENTION_TYPES.get(option.type)
        if mention_type is None and option.type is OptionType.MENTIONABLE:
            bucket = option.resolved or {}
            mention_type = MentionType.ROLE if "permissions" in bucket else MentionType.USER

        if mention_type is not None and option.value is not None:
            if mention_type not in self.types:
                return ParseResult.failure()
            try:
                return ParseResult.success(
                    Mention(mention_type, Snowflake.parse(str(option.value)))
                )
            except ValueError as e:
                raise invalid_value(
                    context,
                    "converters.mention.error.invalid",
                    value=option.value,
                    types=mention_type.value,
                ) from e

        return await super().convert_option(context, option)


class AttachmentConverter(SingleConverter):
    """File uploaded with a slash command. Chat commands cannot carry one."""

    signature_type = "converters.attachment.signatureType"
    option_type = OptionType.ATTACHMENT

    async def convert(
        self,
        parser: Optional[StringParser],
        context: "CommandContext",
        named: NamedValues = None,
    ) -> ParseResult:
        raise RelayedError(context.translate("converters.attachment.error.slashCommandOnly"))

    async def convert_text(self, text: str, context: "CommandContext") -> Attachment:
        raise RelayedError(context.translate("converters.attachment.error.slashCommandOnly"))

    async def convert_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        if option.type is not OptionType.ATTACHMENT or not option.resolved:
            return ParseResult.failure()
        return ParseResult.success(Attachment.from_payload(option.resolved))


class TagConverter(SingleConverter):
    """Forum tag, matched by name.

    Tags come from the forum containing the current thread, or from the
    channel returned by ``channel_getter`` (for example an earlier argument).
    Matching tries an exact name, then a prefix, then a substring, all
    case-insensitive.
    """

    signature_type = "converters.tag.signatureType"

    def __init__(
        self,
        channel_getter: Optional[ChannelGetter] = None,
        validator: Optional[Validator] = None,
    ):
        super().__init__(validator)
        self.channel_getter = channel_getter

    async def convert_text(self, text: str, context: "CommandContext") -> ForumTag:
        tags = await self.get_tags(context)
        needle = text.lower()

        tag = (
            next((t for t in tags if t.name.lower() == needle), None)
            or next((t for t in tags if t.name.lower().startswith(needle)), None)
            or next((t for t in tags if needle in t.name.lower()), None)
        )
        if tag is None:
            raise invalid_value(context, "converters.tag.error.unknownTag", value=text)
        return tag

    async def get_tags(self, context: "CommandContext") -> Sequence[ForumTag]:
        """Fetch the available tags for the invocation.

        Raises:
            RelayedError: If the resolved channel is not forum-backed
        """
        if self.channel_getter is not None:
            channel_id = await self.channel_getter(context)
            key = "converters.tag.error.wrongChannelTypeWithGetter"
        else:
            channel_id = context.channel_id
            key = "converters.tag.error.wrongChannelType"

        tags: Union[Sequence[ForumTag], None] = None
        if channel_id and context.resolver is not None:
            tags = await context.resolver.fetch_forum_tags(channel_id)

        if tags is None:
            logger.debug("forum_tags_unavailable", channel_id=channel_id)
            raise RelayedError(context.translate(key))
        return tags
