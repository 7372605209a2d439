"""Command registry for registration and discovery."""

from typing import Callable, Dict, List, Optional, Sequence, Union

from infrastructure.commands.arguments import Argument, Arguments, build_arguments
from infrastructure.commands.errors import ConfigurationError
from infrastructure.commands.models import Command, CommandType
from infrastructure.logging import get_module_logger

logger = get_module_logger()

ArgumentSpec = Union[Arguments, Sequence[Argument], None]


class CommandRegistry:
    """Registry for command registration and discovery.

    Supports nested commands (subcommands) and aliases. Lookups are
    case-insensitive.

    Attributes:
        namespace: Registry namespace (e.g., an extension name)

    Example:
        registry = CommandRegistry("moderation")

        @registry.command(
            name="ban",
            description="Ban a user",
            arguments=[Argument("user", "User to ban", MentionConverter())],
        )
        async def ban(ctx: CommandContext, user: Mention):
            ...

        @registry.subcommand("config", name="show", description="Show config")
        async def show_config(ctx: CommandContext):
            ...

        @registry.command(name="Report message", type=CommandType.MESSAGE)
        async def report(ctx: CommandContext, target: dict):
            ...
    """

    def __init__(self, namespace: str = "default"):
        """Initialize registry.

        Args:
            namespace: Registry namespace
        """
        self.namespace = namespace
        self._commands: Dict[str, Command] = {}

    def __contains__(self, name: str) -> bool:
        return self.get_command(name) is not None

    def __len__(self) -> int:
        return len(self._commands)

    def command(
        self,
        name: str,
        description: str = "",
        description_key: Optional[str] = None,
        arguments: ArgumentSpec = None,
        checks: Optional[List[Callable]] = None,
        aliases: Optional[List[str]] = None,
        examples: Optional[List[str]] = None,
        type: CommandType = CommandType.CHAT_INPUT,  # pylint: disable=redefined-builtin
    ) -> Callable:
        """Decorator to register a command with handler.

        User and message commands are called as ``handler(ctx, target)`` with
        the resolved entity that was right-clicked.

        Returns:
            Decorator function that registers the handler

        Raises:
            ConfigurationError: If the name or an alias is already registered
        """

        def decorator(handler: Callable) -> Callable:
            self.add_command(
                Command(
                    name=name,
                    handler=handler,
                    description=description,
                    description_key=description_key,
                    arguments=build_arguments(arguments),
                    checks=list(checks or []),
                    aliases=list(aliases or []),
                    examples=list(examples or []),
                    type=type,
                )
            )
            return handler

        return decorator

    def subcommand(
        self,
        parent_name: str,
        name: str,
        description: str = "",
        description_key: Optional[str] = None,
        arguments: ArgumentSpec = None,
        checks: Optional[List[Callable]] = None,
        aliases: Optional[List[str]] = None,
        examples: Optional[List[str]] = None,
    ) -> Callable:
        """Decorator to register a subcommand.

        A missing parent is created as a group command with no handler of its
        own.

        Raises:
            ConfigurationError: If the subcommand name is already taken
        """

        def decorator(handler: Callable) -> Callable:
            parent = self.get_command(parent_name)
            if parent is None:
                parent = self.add_command(
                    Command(
                        name=parent_name,
                        handler=_group_handler,
                        description=parent_name,
                    )
                )

            parent.add_subcommand(
                Command(
                    name=name,
                    handler=handler,
                    description=description,
                    description_key=description_key,
                    arguments=build_arguments(arguments),
                    checks=list(checks or []),
                    aliases=list(aliases or []),
                    examples=list(examples or []),
                )
            )
            logger.debug(
                "registered_subcommand",
                namespace=self.namespace,
                parent=parent_name,
                name=name,
            )
            return handler

        return decorator

    def add_command(self, command: Command) -> Command:
        """Register a command object.

        Raises:
            ConfigurationError: If the name or an alias is already registered
        """
        for name in [command.name, *command.aliases]:
            if self.get_command(name) is not None:
                raise ConfigurationError(
                    f"Command {name!r} is already registered in {self.namespace!r}"
                )
        self._commands[command.name] = command
        logger.debug("registered_command", namespace=self.namespace, name=command.name)
        return command

    def remove_command(self, name: str) -> Optional[Command]:
        command = self.get_command(name)
        if command is None:
            return None
        del self._commands[command.name]
        logger.debug("removed_command", namespace=self.namespace, name=command.name)
        return command

    def get_command(self, name: str) -> Optional[Command]:
        """Get command by name or alias, case-insensitively.

        Returns:
            Command object or None if not found
        """
        command = self._commands.get(name.lower())
        if command is not None:
            return command
        for candidate in self._commands.values():
            if candidate.matches(name):
                return candidate
        return None

    def list_commands(self) -> List[Command]:
        """Get all registered commands."""
        return list(self._commands.values())

    def find_command(self, parts: List[str]) -> Optional[Command]:
        """Find command by parts (supports subcommands).

        Args:
            parts: List of command parts (e.g., ["config"] or ["config", "show"])

        Returns:
            Command object or None if not found
        """
        if not parts:
            return None

        command = self.get_command(parts[0])
        for part in parts[1:]:
            if command is None:
                return None
            command = command.find_subcommand(part)
        return command


async def _group_handler(ctx, **_kwargs) -> None:
    """Default handler for group commands invoked without a subcommand."""
    command = ctx.command
    names = ", ".join(sorted(command.subcommands)) if command else ""
    await ctx.respond(ctx.translate("commands.error.subcommandRequired", subcommands=names))
