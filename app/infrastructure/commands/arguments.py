"""Argument schemas: named, described converters parsed in order."""

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
)

from infrastructure.commands.converters.base import (
    Converter,
    ConverterKind,
    ParseResult,
    Validator,
)
from infrastructure.commands.converters.union import UnionConverter
from infrastructure.commands.errors import ConfigurationError, RelayedError
from infrastructure.commands.options import MAX_OPTIONS, OptionValue, SlashOption
from infrastructure.logging import get_module_logger
from infrastructure.parsing import StringParser

if TYPE_CHECKING:
    from infrastructure.commands.context import CommandContext

logger = get_module_logger()


@dataclass(frozen=True, eq=False)
class Argument:
    """A named, described converter.

    Creating an Argument binds the converter to it; a converter can only
    belong to one argument.

    Attributes:
        display_name: Name shown to users and used for named tokens
        description: Human-readable description
        converter: Converter producing the value
        description_key: Translation key for the description
    """

    display_name: str
    description: str
    converter: Converter
    description_key: Optional[str] = None

    def __post_init__(self):
        if not self.display_name or any(c.isspace() for c in self.display_name):
            raise ConfigurationError(
                f"Invalid argument name {self.display_name!r}: must be non-empty "
                "and contain no whitespace"
            )
        if self.converter.argument is not None:
            raise ConfigurationError(
                f"Converter {self.converter!r} already belongs to argument "
                f"{self.converter.argument.display_name!r}"
            )
        self.converter.argument = self

    def describe(self, context: "CommandContext") -> str:
        if self.description_key:
            return context.translate(self.description_key)
        return self.description


class ParsedArguments(Mapping[str, Any]):
    """Read-only view of resolved argument values.

    Values are available by display name (``args["user-id"]``) and, where the
    name is a valid identifier, as attributes (``args.reason``).
    """

    def __init__(self, values: Dict[str, Any]):
        self._values = dict(values)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        try:
            return self._values[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __repr__(self) -> str:
        return f"ParsedArguments({self._values!r})"

    def as_kwargs(self) -> Dict[str, Any]:
        """Values keyed by Python identifiers (``-`` becomes ``_``)."""
        return {name.replace("-", "_"): value for name, value in self._values.items()}


class Arguments:
    """Ordered argument schema for a command.

    Example:
        args = Arguments()
        args.arg("user", "User to ban", MentionConverter(types=[MentionType.USER]))
        args.arg("days", "Days of messages to delete",
                 IntConverter(min_value=0, max_value=7).to_defaulting(0))
        args.arg("reason", "Why", CoalescingStringConverter().to_optional())

        parsed = await args.parse(ctx, StringParser("<@123> 2 spamming links"))
        parsed.days    # 2
        parsed.reason  # "spamming links"
    """

    def __init__(self, *arguments: Argument):
        self.args: List[Argument] = []
        for argument in arguments:
            self.add(argument)

    def __iter__(self) -> Iterator[Argument]:
        return iter(self.args)

    def __len__(self) -> int:
        return len(self.args)

    def add(self, argument: Argument) -> Argument:
        """Append an argument.

        Raises:
            ConfigurationError: If the name is already taken
        """
        name = argument.display_name.lower()
        if any(existing.display_name.lower() == name for existing in self.args):
            raise ConfigurationError(f"Duplicate argument name: {argument.display_name!r}")
        self.args.append(argument)
        return argument

    def arg(
        self,
        display_name: str,
        description: str,
        converter: Converter,
        description_key: Optional[str] = None,
    ) -> Converter:
        """Create and append an argument, returning its converter."""
        self.add(Argument(display_name, description, converter, description_key))
        return converter

    def union(
        self,
        display_name: str,
        description: str,
        *converters: Converter,
        type_name: Optional[str] = None,
        should_throw: bool = False,
        validator: Optional[Validator] = None,
    ) -> UnionConverter:
        """Append a required argument accepting the first matching converter."""
        converter = UnionConverter(
            converters, type_name=type_name, should_throw=should_throw, validator=validator
        )
        return self.arg(display_name, description, converter)

    def optional_union(
        self,
        display_name: str,
        description: str,
        *converters: Converter,
        type_name: Optional[str] = None,
        should_throw: bool = False,
        validator: Optional[Validator] = None,
    ) -> Converter:
        """Append an optional argument accepting the first matching converter."""
        union = UnionConverter(converters, type_name=type_name, should_throw=should_throw)
        return self.arg(display_name, description, union.to_optional(validator=validator))

    async def parse(
        self, context: "CommandContext", parser: StringParser
    ) -> ParsedArguments:
        """Resolve every argument from chat input.

        Arguments are resolved in declaration order, and each value is stored
        in ``context.arguments`` before the next argument is parsed.

        Raises:
            RelayedError: If a required argument is missing or invalid, or if
                tokens are left over
        """
        values: Dict[str, Any] = {}
        named = parser.extract_named(argument.display_name for argument in self.args)

        for argument in self.args:
            converter = argument.converter
            named_values = named.get(argument.display_name.lower())

            if named_values is not None:
                if converter.kind.takes_many:
                    result = await converter.parse(None, context, named_values)
                else:
                    result = await converter.parse(None, context, named_values[0])
            else:
                result = await converter.parse(parser, context)

            if not result.ok:
                raise self._missing_or_invalid(context, argument, parser)

            values[argument.display_name] = result.value
            context.arguments[argument.display_name] = result.value
            logger.debug(
                "argument_resolved",
                argument=argument.display_name,
                kind=converter.kind.value,
                consumed=result.consumed,
            )

        if parser.has_next:
            leftover = parser.remaining.strip()
            logger.debug("unexpected_arguments", leftover=leftover)
            raise RelayedError(
                context.translate("arguments.error.unexpectedArguments", arguments=leftover)
            )

        return ParsedArguments(values)

    async def parse_options(
        self, context: "CommandContext", options: Mapping[str, OptionValue]
    ) -> ParsedArguments:
        """Resolve every argument from slash command option values.

        Args:
            context: Invocation context
            options: Option values keyed by lowercase option name

        Raises:
            RelayedError: If a required option is missing or invalid
        """
        values: Dict[str, Any] = {}
        lookup = {name.lower(): option for name, option in options.items()}

        for argument in self.args:
            converter = argument.converter
            option = lookup.get(argument.display_name.lower())

            if option is None or option.value is None:
                if converter.required:
                    raise RelayedError(
                        context.translate(
                            "arguments.error.missing", argument=argument.display_name
                        )
                    )
                result = ParseResult.success(converter.fallback_value, consumed=0)
            else:
                result = await converter.parse_option(context, option)
                if not result.ok:
                    if converter.required:
                        raise RelayedError(
                            context.translate(
                                "arguments.error.invalid",
                                argument=argument.display_name,
                                value=option.value,
                            )
                        )
                    result = ParseResult.success(converter.fallback_value, consumed=0)

            values[argument.display_name] = result.value
            context.arguments[argument.display_name] = result.value

        return ParsedArguments(values)

    def to_slash_options(self) -> List[SlashOption]:
        """Build the slash option schema.

        Raises:
            ConfigurationError: If there are too many options or a required
                option follows an optional one
        """
        if len(self.args) > MAX_OPTIONS:
            raise ConfigurationError(
                f"Slash commands support at most {MAX_OPTIONS} options, got {len(self.args)}"
            )

        options: List[SlashOption] = []
        seen_optional = False
        for argument in self.args:
            option = argument.converter.to_slash_option(argument)
            if option.required and seen_optional:
                raise ConfigurationError(
                    f"Required argument {argument.display_name!r} cannot follow "
                    "an optional argument"
                )
            seen_optional = seen_optional or not option.required
            options.append(option)
        return options

    def signature(self, context: "CommandContext") -> str:
        """Usage signature for help text, e.g. ``<user> [days] [reason...]``."""
        parts: List[str] = []
        for argument in self.args:
            converter = argument.converter
            name = argument.display_name
            if converter.kind is ConverterKind.LIST:
                name = f"{name}..."
            parts.append(f"<{name}>" if converter.required else f"[{name}]")
        return " ".join(parts)

    def _missing_or_invalid(
        self,
        context: "CommandContext",
        argument: Argument,
        parser: StringParser,
    ) -> RelayedError:
        token = parser.peek_next()
        if token is None:
            return RelayedError(
                context.translate("arguments.error.missing", argument=argument.display_name)
            )
        return RelayedError(
            context.translate(
                "arguments.error.invalid",
                argument=argument.display_name,
                value=token.text,
            )
        )


def build_arguments(arguments: Optional[Sequence[Argument]] = None) -> Arguments:
    if isinstance(arguments, Arguments):
        return arguments
    return Arguments(*(arguments or []))
