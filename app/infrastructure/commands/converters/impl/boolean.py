"""Boolean converter."""

from typing import TYPE_CHECKING

from infrastructure.commands.converters.base import (
    ParseResult,
    SingleConverter,
    invalid_value,
)
from infrastructure.commands.options import OptionType, OptionValue

if TYPE_CHECKING:
    from infrastructure.commands.context import CommandContext

TRUE_VALUES = ("true", "1", "yes", "y", "on")
FALSE_VALUES = ("false", "0", "no", "n", "off")


class BooleanConverter(SingleConverter):
    """Yes/no flag.

    Besides the usual English words, the translated ``converters.boolean.yes``
    and ``converters.boolean.no`` words of the user's locale are accepted.
    """

    signature_type = "converters.boolean.signatureType"
    option_type = OptionType.BOOLEAN

    async def convert_text(self, text: str, context: "CommandContext") -> bool:
        value = text.strip().lower()
        if value in TRUE_VALUES or value == context.translate("converters.boolean.yes").lower():
            return True
        if value in FALSE_VALUES or value == context.translate("converters.boolean.no").lower():
            return False
        raise invalid_value(context, "converters.boolean.error.invalid", value=text)

    async def convert_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        if isinstance(option.value, bool):
            return ParseResult.success(option.value)
        return await super().convert_option(context, option)
