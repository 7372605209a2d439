"""Command framework for chat and slash commands.

This framework provides:
- Converters: Turn raw input into typed values (single, optional, list,
  coalescing, union)
- Arguments: Ordered argument schemas parsed from chat text or slash options
- CommandRegistry: Register and discover commands
- CommandContext: Per-invocation execution state
- CommandDispatcher: Message and interaction routing (in dispatcher)

Example:
    from infrastructure.commands import (
        Argument, CommandContext, CommandRegistry, IntConverter, StringConverter
    )

    registry = CommandRegistry("fun")

    @registry.command(
        name="repeat",
        description="Repeat a word",
        arguments=[
            Argument("word", "Word to repeat", StringConverter()),
            Argument("times", "How many times", IntConverter(min_value=1).to_defaulting(2)),
        ],
    )
    async def repeat(ctx: CommandContext, word: str, times: int):
        await ctx.respond(" ".join([word] * times))

    # Dispatcher import is not exported by default to avoid circular
    # dependencies with checks. Import it directly:
    # from infrastructure.commands.dispatcher import CommandDispatcher
"""

from infrastructure.commands.errors import (
    CheckFailure,
    ConfigurationError,
    RelayedError,
    ValidationError,
)
from infrastructure.commands.entities import (
    Attachment,
    ForumTag,
    Mention,
    MentionType,
    Snowflake,
)
from infrastructure.commands.options import (
    OptionChoice,
    OptionType,
    OptionValue,
    SlashOption,
    options_from_payload,
)
from infrastructure.commands.context import (
    CommandContext,
    EntityResolver,
    ResponseChannel,
)
from infrastructure.commands.converters import (
    AttachmentConverter,
    BooleanConverter,
    CoalescingConverter,
    CoalescingStringConverter,
    Converter,
    ConverterKind,
    DefaultingCoalescingConverter,
    DefaultingConverter,
    DurationConverter,
    EmailConverter,
    EnumConverter,
    IntConverter,
    ListConverter,
    MentionConverter,
    NumberConverter,
    OptionalCoalescingConverter,
    OptionalConverter,
    ParseResult,
    SingleConverter,
    SnowflakeConverter,
    StringChoiceConverter,
    StringConverter,
    TagConverter,
    UnionConverter,
)
from infrastructure.commands.arguments import Argument, Arguments, ParsedArguments
from infrastructure.commands.models import Command, CommandType
from infrastructure.commands.registry import CommandRegistry

__all__ = [
    # Errors
    "RelayedError",
    "ValidationError",
    "CheckFailure",
    "ConfigurationError",
    # Entities
    "Snowflake",
    "Mention",
    "MentionType",
    "ForumTag",
    "Attachment",
    # Options
    "OptionType",
    "OptionValue",
    "OptionChoice",
    "SlashOption",
    "options_from_payload",
    # Context
    "CommandContext",
    "ResponseChannel",
    "EntityResolver",
    # Converters
    "Converter",
    "SingleConverter",
    "CoalescingConverter",
    "ConverterKind",
    "ParseResult",
    "OptionalConverter",
    "DefaultingConverter",
    "ListConverter",
    "OptionalCoalescingConverter",
    "DefaultingCoalescingConverter",
    "UnionConverter",
    "AttachmentConverter",
    "BooleanConverter",
    "CoalescingStringConverter",
    "DurationConverter",
    "EmailConverter",
    "EnumConverter",
    "IntConverter",
    "MentionConverter",
    "NumberConverter",
    "SnowflakeConverter",
    "StringChoiceConverter",
    "StringConverter",
    "TagConverter",
    # Arguments & commands
    "Argument",
    "Arguments",
    "ParsedArguments",
    "Command",
    "CommandType",
    "CommandRegistry",
]
