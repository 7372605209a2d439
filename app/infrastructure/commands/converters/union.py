"""Converter that accepts whichever of several converters matches first."""

from typing import TYPE_CHECKING, List, Optional, Sequence

from infrastructure.commands.converters.base import (
    CoalescingConverter,
    Converter,
    ConverterKind,
    NamedValues,
    ParseResult,
    Validator,
)
from infrastructure.commands.errors import ConfigurationError, RelayedError
from infrastructure.commands.options import OptionType, OptionValue, SlashOption
from infrastructure.logging import get_module_logger
from infrastructure.parsing import StringParser

if TYPE_CHECKING:
    from infrastructure.commands.arguments import Argument
    from infrastructure.commands.context import CommandContext

logger = get_module_logger()

_SINGLE_KINDS = (ConverterKind.SINGLE, ConverterKind.DEFAULTING)
_COUNTED_KINDS = (
    ConverterKind.LIST,
    ConverterKind.COALESCING,
    ConverterKind.DEFAULTING_COALESCING,
)


class UnionConverter(CoalescingConverter):
    """Try candidate converters in order; the first success wins.

    Each attempt runs under its own parser checkpoint, so a failed candidate
    never consumes input. Exceptions raised by a candidate are swallowed
    unless ``should_throw`` is set.

    Optional and defaulting candidates always succeed, so they are only
    accepted as the last candidate.

    Attributes:
        converters: Candidate converters, in priority order
        type_name: Signature shown in help text, instead of the joined
            candidate types
        should_throw: Propagate candidate exceptions instead of moving on

    Example:
        UnionConverter([MentionConverter(), SnowflakeConverter()])
        # "<@123>" resolves to a Mention, "123" to a Snowflake
    """

    kind = ConverterKind.COALESCING

    def __init__(
        self,
        converters: Sequence[Converter],
        type_name: Optional[str] = None,
        should_throw: bool = False,
        validator: Optional[Validator] = None,
    ):
        super().__init__(validator)
        self.converters: List[Converter] = list(converters)
        self.type_name = type_name
        self.should_throw = should_throw
        self._check_candidates()

    def __repr__(self) -> str:
        return f"UnionConverter({self.converters!r})"

    def nested_converters(self) -> List[Converter]:
        return self.converters

    def _check_candidates(self) -> None:
        if not self.converters:
            raise ConfigurationError("Union converters need at least one candidate")

        for converter in self.converters[:-1]:
            if converter.kind.has_fallback:
                raise ConfigurationError(
                    f"Invalid converter: {converter!r} - optional and defaulting "
                    "converters are only supported by union converters if they're "
                    "the last provided converter"
                )

        for converter in self.converters:
            if converter.argument is not None:
                raise ConfigurationError(
                    f"Converter {converter!r} already belongs to argument "
                    f"{converter.argument.display_name!r}"
                )

    def signature(self, context: "CommandContext") -> str:
        if self.type_name:
            return self.type_name
        return " | ".join(converter.signature(context) for converter in self.converters)

    async def convert(
        self,
        parser: Optional[StringParser],
        context: "CommandContext",
        named: NamedValues = None,
    ) -> ParseResult:
        if isinstance(named, str):
            named = [named]

        for converter in self.converters:
            if parser is not None:
                parser.mark()

            try:
                result = await self._try_chat(converter, parser, context, named)
            except Exception as e:  # pylint: disable=broad-except
                if parser is not None:
                    parser.restore()
                if self.should_throw:
                    raise
                logger.debug(
                    "union_candidate_failed",
                    candidate=repr(converter),
                    argument=self.argument_name,
                    error=str(e),
                )
                continue

            if result is not None:
                if parser is not None:
                    parser.commit()
                return result

            if parser is not None:
                parser.restore()

        return ParseResult.failure()

    async def convert_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        for converter in self.converters:
            if converter.kind is ConverterKind.LIST:
                raise RelayedError(
                    context.translate(
                        "converters.union.error.listNotSupported",
                        converter=type(converter).__name__,
                    )
                )

            try:
                result = await converter.parse_option(context, option)
            except Exception as e:  # pylint: disable=broad-except
                if self.should_throw:
                    raise
                logger.debug(
                    "union_candidate_failed",
                    candidate=repr(converter),
                    argument=self.argument_name,
                    error=str(e),
                )
                continue

            if result.ok and (not converter.kind.nullable or result.value is not None):
                return result

        return ParseResult.failure()

    async def _try_chat(
        self,
        converter: Converter,
        parser: Optional[StringParser],
        context: "CommandContext",
        named: Optional[List[str]],
    ) -> Optional[ParseResult]:
        """Run one candidate; None means it did not match."""
        kind = converter.kind

        if kind in _SINGLE_KINDS or kind is ConverterKind.OPTIONAL:
            single_named = named[0] if named else None
            result = await converter.parse(parser, context, single_named)
            if not result.ok:
                return None
            if kind is ConverterKind.OPTIONAL and result.value is None:
                return None
            return result

        result = await converter.parse(parser, context, named)
        if kind in _COUNTED_KINDS:
            return result if result.ok and result.consumed > 0 else None

        # OPTIONAL_COALESCING
        return result if result.ok and result.value is not None else None

    def to_slash_option(self, argument: "Argument") -> SlashOption:
        return SlashOption(
            name=argument.display_name,
            description=argument.description,
            type=OptionType.STRING,
            required=True,
        )
