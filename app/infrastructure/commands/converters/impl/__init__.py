"""Built-in converter implementations."""

from infrastructure.commands.converters.impl.boolean import BooleanConverter
from infrastructure.commands.converters.impl.choices import (
    EnumConverter,
    StringChoiceConverter,
)
from infrastructure.commands.converters.impl.discord import (
    AttachmentConverter,
    MentionConverter,
    SnowflakeConverter,
    TagConverter,
)
from infrastructure.commands.converters.impl.duration import DurationConverter
from infrastructure.commands.converters.impl.numbers import IntConverter, NumberConverter
from infrastructure.commands.converters.impl.strings import (
    CoalescingStringConverter,
    EmailConverter,
    StringConverter,
)

__all__ = [
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
]
