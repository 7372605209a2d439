"""Text converters."""

import re
from typing import TYPE_CHECKING, Optional

from infrastructure.commands.converters.base import (
    CoalescingConverter,
    NamedValues,
    ParseResult,
    SingleConverter,
    Validator,
    invalid_value,
)
from infrastructure.commands.options import OptionType, SlashOption
from infrastructure.parsing import StringParser

if TYPE_CHECKING:
    from infrastructure.commands.arguments import Argument
    from infrastructure.commands.context import CommandContext

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def check_length(
    text: str,
    context: "CommandContext",
    min_length: Optional[int],
    max_length: Optional[int],
) -> str:
    if min_length is not None and len(text) < min_length:
        raise invalid_value(
            context, "converters.string.error.tooShort", min=min_length, value=text
        )
    if max_length is not None and len(text) > max_length:
        raise invalid_value(
            context, "converters.string.error.tooLong", max=max_length, value=text
        )
    return text


class StringConverter(SingleConverter):
    """Single token, returned as written (quotes removed)."""

    signature_type = "converters.string.signatureType"

    def __init__(
        self,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        validator: Optional[Validator] = None,
    ):
        super().__init__(validator)
        self.min_length = min_length
        self.max_length = max_length

    async def convert_text(self, text: str, context: "CommandContext") -> str:
        return check_length(text, context, self.min_length, self.max_length)

    def option_kwargs(self) -> dict:
        return {"min_length": self.min_length, "max_length": self.max_length}


class EmailConverter(SingleConverter):
    signature_type = "converters.email.signatureType"

    async def convert_text(self, text: str, context: "CommandContext") -> str:
        if not EMAIL_PATTERN.match(text):
            raise invalid_value(context, "converters.email.error.invalid", value=text)
        return text


class CoalescingStringConverter(CoalescingConverter):
    """Every remaining token, joined with single spaces.

    Example:
        "!say hello   big world" resolves to "hello big world"
    """

    signature_type = "converters.string.signatureType"

    def __init__(
        self,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        validator: Optional[Validator] = None,
    ):
        super().__init__(validator)
        self.min_length = min_length
        self.max_length = max_length

    async def convert(
        self,
        parser: Optional[StringParser],
        context: "CommandContext",
        named: NamedValues = None,
    ) -> ParseResult:
        if named is not None:
            parts = [named] if isinstance(named, str) else list(named)
        elif parser is not None:
            parts = [token.text for token in parser]
        else:
            parts = []

        if not parts:
            return ParseResult.failure()

        text = check_length(" ".join(parts), context, self.min_length, self.max_length)
        return ParseResult.success(text, consumed=len(parts))

    def to_slash_option(self, argument: "Argument") -> SlashOption:
        return SlashOption(
            name=argument.display_name,
            description=argument.description,
            type=OptionType.STRING,
            required=True,
            min_length=self.min_length,
            max_length=self.max_length,
        )
