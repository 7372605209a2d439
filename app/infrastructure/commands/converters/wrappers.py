"""Converters that wrap another converter to change its cardinality."""

from typing import TYPE_CHECKING, Any, List, Optional

from infrastructure.commands.converters.base import (
    CoalescingConverter,
    Converter,
    ConverterKind,
    NamedValues,
    ParseResult,
    SingleConverter,
    Validator,
)
from infrastructure.commands.errors import RelayedError, ValidationError
from infrastructure.commands.options import OptionType, OptionValue, SlashOption
from infrastructure.logging import get_module_logger
from infrastructure.parsing import StringParser

if TYPE_CHECKING:
    from infrastructure.commands.arguments import Argument
    from infrastructure.commands.context import CommandContext

logger = get_module_logger()


class FallbackConverter(Converter):
    """Shared behaviour for the optional and defaulting wrappers.

    The parser is checkpointed before the inner converter runs. When the inner
    converter finds nothing, or raises a RelayedError, the checkpoint is
    restored and the wrapper resolves to its fallback value. Validation errors
    are not swallowed.
    """

    def __init__(self, inner: Converter, validator: Optional[Validator] = None):
        super().__init__(validator)
        self.inner = inner

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.inner!r})"

    def nested_converters(self) -> List[Converter]:
        return [self.inner]

    @property
    def signature_type(self) -> str:  # type: ignore[override]
        return self.inner.signature_type

    async def convert(
        self,
        parser: Optional[StringParser],
        context: "CommandContext",
        named: NamedValues = None,
    ) -> ParseResult:
        if parser is not None:
            parser.mark()

        try:
            result = await self.inner.parse(parser, context, named)
        except ValidationError:
            if parser is not None:
                parser.restore()
            raise
        except RelayedError as e:
            if parser is not None:
                parser.restore()
            logger.debug(
                "converter_fallback_used",
                converter=repr(self),
                argument=self.argument_name,
                error=e.message,
            )
            return ParseResult.success(self.fallback_value, consumed=0)

        if not result.ok:
            if parser is not None:
                parser.restore()
            return ParseResult.success(self.fallback_value, consumed=0)

        if parser is not None:
            parser.commit()
        return result

    async def convert_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        try:
            result = await self.inner.parse_option(context, option)
        except ValidationError:
            raise
        except RelayedError as e:
            logger.debug(
                "converter_fallback_used",
                converter=repr(self),
                argument=self.argument_name,
                error=e.message,
            )
            return ParseResult.success(self.fallback_value, consumed=0)

        if not result.ok:
            return ParseResult.success(self.fallback_value, consumed=0)
        return result

    def to_slash_option(self, argument: "Argument") -> SlashOption:
        return self.inner.to_slash_option(argument).model_copy(
            update={"required": False}
        )


class OptionalConverter(FallbackConverter):
    """Single converter that resolves to None when its value is absent."""

    kind = ConverterKind.OPTIONAL


class DefaultingConverter(FallbackConverter):
    """Single converter that resolves to a default when its value is absent."""

    kind = ConverterKind.DEFAULTING

    def __init__(
        self, inner: Converter, default: Any, validator: Optional[Validator] = None
    ):
        super().__init__(inner, validator)
        self.default = default

    @property
    def fallback_value(self) -> Any:
        return self.default


class OptionalCoalescingConverter(FallbackConverter):
    """Coalescing converter that resolves to None when no tokens match."""

    kind = ConverterKind.OPTIONAL_COALESCING

    def signature(self, context: "CommandContext") -> str:
        return self.inner.signature(context)


class DefaultingCoalescingConverter(FallbackConverter):
    """Coalescing converter that resolves to a default when no tokens match."""

    kind = ConverterKind.DEFAULTING_COALESCING

    def __init__(
        self,
        inner: CoalescingConverter,
        default: Any,
        validator: Optional[Validator] = None,
    ):
        super().__init__(inner, validator)
        self.default = default

    @property
    def fallback_value(self) -> Any:
        return self.default

    def signature(self, context: "CommandContext") -> str:
        return self.inner.signature(context)


class ListConverter(Converter):
    """Read as many values of the inner converter as possible.

    Each item is parsed under its own checkpoint; the first item that fails
    is rewound and ends the list.

    Example:
        ListConverter(IntConverter()) on "1 2 3 x" resolves to [1, 2, 3] and
        leaves "x" for the next argument.
    """

    kind = ConverterKind.LIST

    def __init__(
        self,
        inner: SingleConverter,
        required: bool = True,
        validator: Optional[Validator] = None,
    ):
        super().__init__(validator)
        self.inner = inner
        self.is_required = required

    def __repr__(self) -> str:
        return f"ListConverter({self.inner!r}, required={self.is_required})"

    def nested_converters(self) -> List[Converter]:
        return [self.inner]

    @property
    def required(self) -> bool:
        return self.is_required

    @property
    def fallback_value(self) -> Any:
        return []

    @property
    def signature_type(self) -> str:  # type: ignore[override]
        return self.inner.signature_type

    async def convert(
        self,
        parser: Optional[StringParser],
        context: "CommandContext",
        named: NamedValues = None,
    ) -> ParseResult:
        if named is not None:
            items = [named] if isinstance(named, str) else list(named)
            values = []
            for item in items:
                result = await self.inner.parse(None, context, item)
                values.append(result.value)
            return self._result(values)

        if parser is None:
            return self._result([])
        return self._result(await self._parse_items(parser, context))

    async def convert_option(
        self, context: "CommandContext", option: OptionValue
    ) -> ParseResult:
        if option.value is None:
            return self._result([])

        parser = StringParser(str(option.value))
        values = await self._parse_items(parser, context)
        if parser.has_next:
            token = parser.peek_next()
            raise RelayedError(
                context.translate(
                    "converters.list.error.invalidItem",
                    argument=self.argument_name,
                    value=token.text if token else "",
                )
            )
        return self._result(values)

    async def _parse_items(
        self, parser: StringParser, context: "CommandContext"
    ) -> List[Any]:
        values: List[Any] = []

        while parser.has_next:
            parser.mark()
            try:
                result = await self.inner.parse(parser, context)
            except ValidationError:
                parser.restore()
                raise
            except RelayedError:
                parser.restore()
                break

            if not result.ok:
                parser.restore()
                break

            parser.commit()
            values.append(result.value)

        return values

    def _result(self, values: List[Any]) -> ParseResult:
        if not values and self.is_required:
            return ParseResult.failure()
        return ParseResult.success(values, consumed=len(values))

    def to_slash_option(self, argument: "Argument") -> SlashOption:
        return SlashOption(
            name=argument.display_name,
            description=argument.description,
            type=OptionType.STRING,
            required=self.is_required,
        )
