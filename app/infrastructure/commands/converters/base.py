"""Converter contracts shared by every argument converter.

A converter turns raw command input into a typed value. It reads from a
StringParser on the chat path and from an OptionValue on the slash path, and
describes its own slash option schema.

Converters hold configuration only. Parse outcomes are returned as
ParseResult values, so one converter instance can serve concurrent
invocations.
"""

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Union

from infrastructure.commands.errors import RelayedError, ValidationError
from infrastructure.commands.options import OptionType, OptionValue, SlashOption
from infrastructure.logging import get_module_logger
from infrastructure.parsing import StringParser

if TYPE_CHECKING:
    from infrastructure.commands.arguments import Argument
    from infrastructure.commands.context import CommandContext

logger = get_module_logger()

# (value, context) -> None | bool | str, sync or async
Validator = Callable[[Any, "CommandContext"], Any]

NamedValues = Union[str, List[str], None]


class ConverterKind(Enum):
    """Closed set of converter variants."""

    SINGLE = "single"
    OPTIONAL = "optional"
    DEFAULTING = "defaulting"
    LIST = "list"
    COALESCING = "coalescing"
    OPTIONAL_COALESCING = "optional_coalescing"
    DEFAULTING_COALESCING = "defaulting_coalescing"

    @property
    def takes_many(self) -> bool:
        """Whether the converter reads a variable number of tokens."""
        return self in (
            ConverterKind.LIST,
            ConverterKind.COALESCING,
            ConverterKind.OPTIONAL_COALESCING,
            ConverterKind.DEFAULTING_COALESCING,
        )

    @property
    def nullable(self) -> bool:
        return self in (ConverterKind.OPTIONAL, ConverterKind.OPTIONAL_COALESCING)

    @property
    def has_fallback(self) -> bool:
        """Whether a failed parse resolves to None or a default value."""
        return self in (
            ConverterKind.OPTIONAL,
            ConverterKind.DEFAULTING,
            ConverterKind.OPTIONAL_COALESCING,
            ConverterKind.DEFAULTING_COALESCING,
        )


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a single converter parse.

    Attributes:
        value: Converted value
        consumed: Number of tokens (or named values) used
        ok: False when the converter found no usable input
    """

    value: Any = None
    consumed: int = 0
    ok: bool = True

    @classmethod
    def success(cls, value: Any, consumed: int = 1) -> "ParseResult":
        return cls(value=value, consumed=consumed, ok=True)

    @classmethod
    def failure(cls) -> "ParseResult":
        return cls(value=None, consumed=0, ok=False)


class Converter(ABC):
    """Base class for all converters.

    Subclasses implement ``convert`` / ``convert_option``; callers use
    ``parse`` / ``parse_option``, which add validation on top.
    """

    kind: ConverterKind = ConverterKind.SINGLE
    signature_type: str = "converters.string.signatureType"

    def __init__(self, validator: Optional[Validator] = None):
        self.validator = validator
        self._argument: Optional["Argument"] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    @property
    def required(self) -> bool:
        return not self.kind.has_fallback

    @property
    def fallback_value(self) -> Any:
        """Value used when the argument is absent and not required."""
        return None

    @property
    def argument(self) -> Optional["Argument"]:
        return self._argument

    @argument.setter
    def argument(self, argument: Optional["Argument"]) -> None:
        self._argument = argument
        for converter in self.nested_converters():
            converter.argument = argument

    def nested_converters(self) -> List["Converter"]:
        """Converters this one delegates to; they report errors under its argument."""
        return []

    @property
    def argument_name(self) -> str:
        return self.argument.display_name if self.argument else "argument"

    async def parse(
        self,
        parser: Optional[StringParser],
        context: "CommandContext",
        named: NamedValues = None,
    ) -> ParseResult:
        """Parse chat input.

        Args:
            parser: Parser positioned at this argument, or None when only
                named values are available
            context: Invocation context
            named: Value(s) given as ``name:value`` tokens for this argument

        Raises:
            RelayedError: If the input is present but invalid
            ValidationError: If the validator rejects the value
        """
        result = await self.convert(parser, context, named)
        if result.ok and result.consumed > 0:
            await self.validate(result.value, context)
        return result

    async def parse_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        """Parse a slash command option value."""
        result = await self.convert_option(context, option)
        if result.ok and result.consumed > 0:
            await self.validate(result.value, context)
        return result

    async def validate(self, value: Any, context: "CommandContext") -> None:
        """Run the validator on a parsed value.

        Raises:
            ValidationError: If the validator returns False or a message
        """
        if self.validator is None or value is None:
            return

        outcome = self.validator(value, context)
        if inspect.isawaitable(outcome):
            outcome = await outcome

        if outcome is None or outcome is True:
            return

        if outcome is False:
            message = context.translate(
                "converters.error.validationFailed", argument=self.argument_name
            )
        else:
            message = str(outcome)

        logger.debug(
            "converter_validation_failed",
            converter=type(self).__name__,
            argument=self.argument_name,
        )
        raise ValidationError(message)

    def signature(self, context: "CommandContext") -> str:
        """Translated name of the accepted type, for help text."""
        return context.translate(self.signature_type)

    @abstractmethod
    async def convert(
        self,
        parser: Optional[StringParser],
        context: "CommandContext",
        named: NamedValues = None,
    ) -> ParseResult:
        """Convert chat input. Returns a failure when no input is present."""

    @abstractmethod
    async def convert_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        """Convert a slash option value."""

    @abstractmethod
    def to_slash_option(self, argument: "Argument") -> SlashOption:
        """Build this converter's slash option schema for an argument."""


class SingleConverter(Converter):
    """Converter that reads exactly one token.

    Implementations override ``convert_text`` and, where the slash option is
    not a string, ``option_type`` / ``convert_option``.

    Example:
        class UpperConverter(SingleConverter):
            async def convert_text(self, text, context):
                return text.upper()
    """

    kind = ConverterKind.SINGLE
    option_type: OptionType = OptionType.STRING

    async def convert(
        self,
        parser: Optional[StringParser],
        context: "CommandContext",
        named: NamedValues = None,
    ) -> ParseResult:
        if isinstance(named, list):
            named = named[0] if named else None

        if named is not None:
            text = named
        else:
            token = parser.parse_next() if parser is not None else None
            if token is None:
                return ParseResult.failure()
            text = token.text

        return ParseResult.success(await self.convert_text(text, context))

    async def convert_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        if option.value is None:
            return ParseResult.failure()
        return ParseResult.success(await self.convert_text(str(option.value), context))

    @abstractmethod
    async def convert_text(self, text: str, context: "CommandContext") -> Any:
        """Convert one token.

        Raises:
            RelayedError: If the text is not a valid value
        """

    def option_kwargs(self) -> dict:
        """Extra slash option fields (bounds, choices...)."""
        return {}

    def to_slash_option(self, argument: "Argument") -> SlashOption:
        return SlashOption(
            name=argument.display_name,
            description=argument.description,
            type=self.option_type,
            required=True,
            **self.option_kwargs(),
        )

    def to_optional(self, validator: Optional[Validator] = None):
        """Wrap this converter so a missing or invalid value resolves to None."""
        from infrastructure.commands.converters.wrappers import OptionalConverter

        return OptionalConverter(self, validator=validator)

    def to_defaulting(self, default: Any, validator: Optional[Validator] = None):
        """Wrap this converter so a missing or invalid value resolves to default."""
        from infrastructure.commands.converters.wrappers import DefaultingConverter

        return DefaultingConverter(self, default, validator=validator)

    def to_list(self, required: bool = True, validator: Optional[Validator] = None):
        """Wrap this converter to read as many values as possible."""
        from infrastructure.commands.converters.wrappers import ListConverter

        return ListConverter(self, required=required, validator=validator)


class CoalescingConverter(Converter):
    """Converter that combines a variable number of tokens into one value."""

    kind = ConverterKind.COALESCING

    async def convert_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        if option.value is None:
            return ParseResult.failure()
        return await self.convert(StringParser(str(option.value)), context)

    def to_slash_option(self, argument: "Argument") -> SlashOption:
        return SlashOption(
            name=argument.display_name,
            description=argument.description,
            type=OptionType.STRING,
            required=True,
        )

    def to_optional(self, validator: Optional[Validator] = None):
        from infrastructure.commands.converters.wrappers import (
            OptionalCoalescingConverter,
        )

        return OptionalCoalescingConverter(self, validator=validator)

    def to_defaulting(self, default: Any, validator: Optional[Validator] = None):
        from infrastructure.commands.converters.wrappers import (
            DefaultingCoalescingConverter,
        )

        return DefaultingCoalescingConverter(self, default, validator=validator)


def invalid_value(context: "CommandContext", key: str, **variables) -> RelayedError:
    """Build the relayed error for an invalid value."""
    return RelayedError(context.translate(key, **variables))
