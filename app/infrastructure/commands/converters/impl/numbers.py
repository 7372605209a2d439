"""Numeric converters."""

import math
from typing import TYPE_CHECKING, Optional, Union

from infrastructure.commands.converters.base import (
    ParseResult,
    SingleConverter,
    Validator,
    invalid_value,
)
from infrastructure.commands.errors import ConfigurationError
from infrastructure.commands.options import OptionType, OptionValue

if TYPE_CHECKING:
    from infrastructure.commands.context import CommandContext

Number = Union[int, float]

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


class BoundedConverter(SingleConverter):
    """Shared range checks for numeric converters."""

    def __init__(
        self,
        min_value: Optional[Number] = None,
        max_value: Optional[Number] = None,
        validator: Optional[Validator] = None,
    ):
        super().__init__(validator)
        if min_value is not None and max_value is not None and min_value > max_value:
            raise ConfigurationError(
                f"min_value ({min_value}) is greater than max_value ({max_value})"
            )
        self.min_value = min_value
        self.max_value = max_value

    def check_range(self, value: Number, context: "CommandContext") -> Number:
        if self.min_value is not None and value < self.min_value:
            raise invalid_value(
                context, "converters.number.error.tooLow", min=self.min_value, value=value
            )
        if self.max_value is not None and value > self.max_value:
            raise invalid_value(
                context,
                "converters.number.error.tooHigh",
                max=self.max_value,
                value=value,
            )
        return value

    def option_kwargs(self) -> dict:
        return {"min_value": self.min_value, "max_value": self.max_value}


class IntConverter(BoundedConverter):
    """Integer in the given radix, optionally bounded.

    Example:
        IntConverter(radix=16) accepts "ff" and resolves to 255
    """

    signature_type = "converters.int.signatureType"
    option_type = OptionType.INTEGER

    def __init__(
        self,
        radix: int = 10,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
        validator: Optional[Validator] = None,
    ):
        super().__init__(min_value, max_value, validator)
        if not 2 <= radix <= 36:
            raise ConfigurationError(f"Radix must be between 2 and 36, got {radix}")
        self.radix = radix

    def is_plain_integer(self, text: str) -> bool:
        """Optional minus sign then digits of this radix, nothing else."""
        digits = text[1:] if text.startswith("-") else text
        allowed = DIGITS[: self.radix]
        return bool(digits) and all(char in allowed for char in digits.lower())

    def invalid_integer(self, text: str, context: "CommandContext"):
        if self.radix == 10:
            return invalid_value(context, "converters.int.error.invalid", value=text)
        return invalid_value(
            context,
            "converters.int.error.invalidWithRadix",
            value=text,
            radix=self.radix,
        )

    async def convert_text(self, text: str, context: "CommandContext") -> int:
        if not self.is_plain_integer(text):
            raise self.invalid_integer(text, context)
        value = int(text, self.radix)
        return self.check_range(value, context)

    async def convert_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        if isinstance(option.value, bool):
            return ParseResult.failure()
        if isinstance(option.value, int):
            return ParseResult.success(self.check_range(option.value, context))
        return await super().convert_option(context, option)


class NumberConverter(BoundedConverter):
    """Finite decimal number, returned as float."""

    signature_type = "converters.number.signatureType"
    option_type = OptionType.NUMBER

    async def convert_text(self, text: str, context: "CommandContext") -> float:
        try:
            value = float(text)
        except ValueError as e:
            raise invalid_value(
                context, "converters.number.error.invalid", value=text
            ) from e
        if not math.isfinite(value):
            raise invalid_value(context, "converters.number.error.invalid", value=text)
        return self.check_range(value, context)

    async def convert_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        if isinstance(option.value, bool):
            return ParseResult.failure()
        if isinstance(option.value, (int, float)):
            return ParseResult.success(self.check_range(float(option.value), context))
        return await super().convert_option(context, option)
