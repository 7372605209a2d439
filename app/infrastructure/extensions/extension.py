"""Extension base class."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Type

from infrastructure.commands.arguments import build_arguments
from infrastructure.commands.models import Command
from infrastructure.commands.registry import ArgumentSpec
from infrastructure.extensions.events import Event
from infrastructure.logging import get_module_logger

if TYPE_CHECKING:
    from infrastructure.extensions.bot import ExtensibleBot

logger = get_module_logger()


@dataclass(eq=False)
class EventHandler:
    """Event subscription registered on the bot."""

    event_type: Type[Event]
    handler: Callable

    @property
    def name(self) -> str:
        return getattr(self.handler, "__name__", "unknown")


class Extension(ABC):
    """A unit of bot functionality: commands plus event handlers.

    ``setup()`` runs every time the extension is loaded and registers what
    the extension owns through the ``command`` and ``event`` decorators.
    Unloading removes all of it again.

    Example:
        class PingExtension(Extension):
            name = "ping"

            async def setup(self) -> None:
                @self.command(name="ping", description="Check the bot is alive")
                async def ping(ctx: CommandContext):
                    await ctx.respond("pong")

                @self.event(ExtensionLoaded)
                async def on_loaded(event: ExtensionLoaded):
                    ...
    """

    name: str = ""

    def __init__(self):
        if not self.name:
            raise TypeError(f"{type(self).__name__} must define a name")
        self.bot: Optional["ExtensibleBot"] = None
        self.loaded = False
        self.commands: List[Command] = []
        self.event_handlers: List[EventHandler] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, loaded={self.loaded})"

    @abstractmethod
    async def setup(self) -> None:
        """Register commands and event handlers."""

    async def teardown(self) -> None:
        """Release resources held by the extension. Called on unload."""
        return None

    def command(
        self,
        name: str,
        description: str = "",
        description_key: Optional[str] = None,
        arguments: ArgumentSpec = None,
        checks: Optional[List[Callable]] = None,
        aliases: Optional[List[str]] = None,
        examples: Optional[List[str]] = None,
    ) -> Callable:
        """Decorator registering a command owned by this extension."""

        def decorator(handler: Callable) -> Callable:
            command = Command(
                name=name,
                handler=handler,
                description=description,
                description_key=description_key,
                arguments=build_arguments(arguments),
                checks=list(checks or []),
                aliases=list(aliases or []),
                examples=list(examples or []),
            )
            self._require_bot().registry.add_command(command)
            self.commands.append(command)
            return handler

        return decorator

    def event(self, event_type: Type[Event]) -> Callable:
        """Decorator registering an event handler owned by this extension."""

        def decorator(handler: Callable) -> Callable:
            self.event_handlers.append(
                self._require_bot().add_event_handler(event_type, handler)
            )
            return handler

        return decorator

    async def do_setup(self) -> None:
        """Run ``setup()``. On failure, drop whatever it registered and re-raise."""
        try:
            await self.setup()
        except Exception:
            logger.exception("extension_setup_failed", extension=self.name)
            self._release()
            raise
        self.loaded = True
        logger.info(
            "extension_loaded",
            extension=self.name,
            commands=[command.name for command in self.commands],
            event_handlers=len(self.event_handlers),
        )

    async def do_unload(self) -> None:
        await self.teardown()
        self._release()
        logger.info("extension_unloaded", extension=self.name)

    def _release(self) -> None:
        """Remove this extension's commands and event handlers from the bot."""
        bot = self._require_bot()
        for command in self.commands:
            bot.registry.remove_command(command.name)
        for handler in self.event_handlers:
            bot.remove_event_handler(handler)
        self.commands.clear()
        self.event_handlers.clear()
        self.loaded = False

    def _require_bot(self) -> "ExtensibleBot":
        if self.bot is None:
            raise RuntimeError(f"Extension {self.name!r} is not attached to a bot")
        return self.bot
