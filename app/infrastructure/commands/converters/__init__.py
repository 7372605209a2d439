"""Argument converters.

Exports:
    Converter, SingleConverter, CoalescingConverter: Base contracts
    ConverterKind, ParseResult: Variant set and parse outcome
    OptionalConverter, DefaultingConverter, ListConverter: Single wrappers
    OptionalCoalescingConverter, DefaultingCoalescingConverter: Coalescing wrappers
    UnionConverter: First-match over several converters
    Built-in implementations from ``impl``
"""

from infrastructure.commands.converters.base import (
    CoalescingConverter,
    Converter,
    ConverterKind,
    ParseResult,
    SingleConverter,
    Validator,
)
from infrastructure.commands.converters.impl import (
    AttachmentConverter,
    BooleanConverter,
    CoalescingStringConverter,
    DurationConverter,
    EmailConverter,
    EnumConverter,
    IntConverter,
    MentionConverter,
    NumberConverter,
    SnowflakeConverter,
    StringChoiceConverter,
    StringConverter,
    TagConverter,
)
from infrastructure.commands.converters.union import UnionConverter
from infrastructure.commands.converters.wrappers import (
    DefaultingCoalescingConverter,
    DefaultingConverter,
    ListConverter,
    OptionalCoalescingConverter,
    OptionalConverter,
)

__all__ = [
    "Converter",
    "SingleConverter",
    "CoalescingConverter",
    "ConverterKind",
    "ParseResult",
    "Validator",
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
]
