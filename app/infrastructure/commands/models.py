"""Command framework data models."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from infrastructure.commands.arguments import Arguments
from infrastructure.commands.errors import ConfigurationError
from infrastructure.commands.options import (
    OptionType,
    SlashOption,
    validate_context_menu_name,
    validate_description,
    validate_option_name,
)

if TYPE_CHECKING:
    from infrastructure.commands.context import CommandContext

# Launch handled by the bot, not by the platform
APP_HANDLER = 1


class CommandType(IntEnum):
    """Application command types, using the platform's wire values."""

    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3
    PRIMARY_ENTRY_POINT = 4

    @property
    def is_context_menu(self) -> bool:
        return self in (CommandType.USER, CommandType.MESSAGE)


@dataclass
class Command:
    """Command definition with metadata for registration and help.

    Attributes:
        name: Command name (slash naming rules: lowercase, 1-32 chars)
        handler: Callable invoked as ``handler(ctx, **arguments)``
        description: Human-readable description
        description_key: Translation key for description
        arguments: Argument schema
        checks: Checks that must pass before arguments are parsed
        aliases: Extra chat names for the command
        subcommands: Nested commands by name
        examples: Usage examples, without prefix or command name
        parent: Parent command for subcommands
        type: Application command type. User and message commands take the
            right-clicked entity as their only argument, ``target``

    Example:
        @registry.command(
            name="ban",
            description_key="moderation.commands.ban.description",
            arguments=[
                Argument("user", "User to ban", MentionConverter()),
                Argument("days", "Days of messages to delete",
                         IntConverter(min_value=0, max_value=7).to_defaulting(0)),
            ],
            checks=[in_guild()],
        )
        async def ban(ctx: CommandContext, user: Mention, days: int):
            ...
    """

    name: str
    handler: Callable
    description: str = ""
    description_key: Optional[str] = None
    arguments: Arguments = field(default_factory=Arguments)
    checks: List[Callable] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)
    subcommands: Dict[str, "Command"] = field(default_factory=dict)
    examples: List[str] = field(default_factory=list)
    type: CommandType = CommandType.CHAT_INPUT
    parent: Optional["Command"] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        """Validate command configuration."""
        if self.type.is_context_menu:
            validate_context_menu_name(self.name)
        else:
            validate_option_name(self.name)
        if self.type is not CommandType.CHAT_INPUT and (len(self.arguments) or self.aliases):
            raise ConfigurationError(
                f"{self.type.name.lower()} command {self.name!r} cannot have "
                "arguments or aliases"
            )
        for alias in self.aliases:
            if not alias or any(c.isspace() for c in alias):
                raise ConfigurationError(f"Invalid alias {alias!r} for {self.name!r}")

    @property
    def qualified_name(self) -> str:
        """Full name including parents (e.g., ``config set``)."""
        if self.parent is None:
            return self.name
        return f"{self.parent.qualified_name} {self.name}"

    def matches(self, name: str) -> bool:
        lowered = name.lower()
        return lowered == self.name.lower() or lowered in (a.lower() for a in self.aliases)

    def add_subcommand(self, subcommand: "Command") -> None:
        """Add a nested subcommand.

        Raises:
            ConfigurationError: If this is not a chat input command, or the
                name or an alias is already taken
        """
        if self.type is not CommandType.CHAT_INPUT:
            raise ConfigurationError(
                f"Only chat input commands can have subcommands, not {self.name!r}"
            )
        for name in [subcommand.name, *subcommand.aliases]:
            if self.find_subcommand(name) is not None:
                raise ConfigurationError(
                    f"Duplicate subcommand {name!r} under {self.qualified_name!r}"
                )
        subcommand.parent = self
        self.subcommands[subcommand.name] = subcommand

    def find_subcommand(self, name: str) -> Optional["Command"]:
        for subcommand in self.subcommands.values():
            if subcommand.matches(name):
                return subcommand
        return None

    def describe(self, context: "CommandContext") -> str:
        if self.description_key:
            return context.translate(self.description_key)
        return self.description

    def to_slash_option(self) -> SlashOption:
        """Render this command as a SUB_COMMAND option."""
        if self.subcommands:
            raise ConfigurationError(
                f"Subcommand {self.qualified_name!r} cannot have nested subcommands"
            )
        return SlashOption(
            name=self.name,
            description=self.description,
            type=OptionType.SUB_COMMAND,
            options=self.arguments.to_slash_options(),
        )

    def to_payload(self, localizations: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Build the application command registration payload.

        Raises:
            ConfigurationError: If the command mixes subcommands with
                arguments, or misses a description
        """
        if self.type.is_context_menu:
            return {"name": self.name, "description": "", "type": int(self.type)}

        validate_description(self.description)

        if self.subcommands and len(self.arguments):
            raise ConfigurationError(
                f"Command {self.name!r} cannot have both subcommands and arguments"
            )

        if self.subcommands:
            options = [sub.to_slash_option() for sub in self.subcommands.values()]
        else:
            options = self.arguments.to_slash_options()

        payload: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "type": int(self.type),
            "options": [option.to_payload() for option in options],
        }
        if self.type is CommandType.PRIMARY_ENTRY_POINT:
            payload["handler"] = APP_HANDLER
        if localizations:
            payload["description_localizations"] = localizations
        return payload
