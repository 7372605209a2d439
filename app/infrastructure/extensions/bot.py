"""Bot entry point: extension lifecycle, event bus and command routing."""

import inspect
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar

from infrastructure.commands.context import CommandContext
from infrastructure.commands.dispatcher import CommandDispatcher
from infrastructure.commands.errors import ConfigurationError
from infrastructure.commands.registry import CommandRegistry
from infrastructure.configuration import Settings, settings as default_settings
from infrastructure.extensions.events import Event, ExtensionLoaded, ExtensionUnloaded
from infrastructure.extensions.extension import EventHandler, Extension
from infrastructure.i18n import Translator
from infrastructure.logging import get_module_logger

logger = get_module_logger()

ExtensionT = TypeVar("ExtensionT", bound=Extension)


class ExtensibleBot:
    """Bot composed of extensions.

    Example:
        bot = ExtensibleBot(translator=create_translator())
        await bot.add_extension(PingExtension)

        @bot.on(ExtensionLoaded)
        async def announce(event: ExtensionLoaded):
            ...

        await bot.handle_message("!ping", CommandContext(user_id="1"))
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        translator: Optional[Translator] = None,
        registry: Optional[CommandRegistry] = None,
    ):
        self.settings = settings or default_settings
        self.translator = translator
        self.registry = registry or CommandRegistry("bot")
        self.dispatcher = CommandDispatcher(
            self.registry, translator, self.settings.commands
        )
        self.extensions: Dict[str, Extension] = {}
        self.event_handlers: List[EventHandler] = []

    # Event bus

    def on(self, event_type: Type[Event]) -> Callable:
        """Decorator to register an event handler for an event class."""

        def decorator(handler: Callable) -> Callable:
            self.add_event_handler(event_type, handler)
            return handler

        return decorator

    def add_event_handler(self, event_type: Type[Event], handler: Callable) -> EventHandler:
        entry = EventHandler(event_type, handler)
        self.event_handlers.append(entry)
        logger.debug(
            "registered_event_handler",
            handler=entry.name,
            event_type=event_type.__name__,
            total_handlers=len(self.event_handlers),
        )
        return entry

    def remove_event_handler(self, entry: EventHandler) -> bool:
        if entry in self.event_handlers:
            self.event_handlers.remove(entry)
            return True
        return False

    async def send(self, event: Event) -> List[Any]:
        """Dispatch an event to every handler registered for its class or bases.

        If a handler raises an exception, it is logged and processing
        continues with the remaining handlers.

        Returns:
            Return values of the handlers that succeeded
        """
        handlers = [h for h in self.event_handlers if isinstance(event, h.event_type)]
        logger.debug(
            "dispatching_event",
            event_type=event.event_type,
            handler_count=len(handlers),
            correlation_id=str(event.correlation_id),
        )

        results = []
        for entry in handlers:
            try:
                result = entry.handler(event)
                if inspect.isawaitable(result):
                    result = await result
                results.append(result)
            except Exception as e:  # pylint: disable=broad-except
                logger.exception(
                    "event_handler_failed",
                    handler=entry.name,
                    event_type=event.event_type,
                    error=str(e),
                    correlation_id=str(event.correlation_id),
                )
        return results

    # Extensions

    async def add_extension(self, factory: Callable[[], ExtensionT]) -> ExtensionT:
        """Instantiate an extension and load it.

        Raises:
            ConfigurationError: If an extension with the same name exists
        """
        extension = factory()
        if extension.name in self.extensions:
            raise ConfigurationError(f"Extension {extension.name!r} is already added")

        extension.bot = self
        self.extensions[extension.name] = extension
        try:
            await self.load_extension(extension.name)
        except Exception:
            del self.extensions[extension.name]
            raise
        return extension

    async def load_extension(self, name: str) -> bool:
        """Load an added extension. Returns False if unknown or already loaded."""
        extension = self.extensions.get(name)
        if extension is None:
            logger.warning("unknown_extension", extension=name)
            return False
        if extension.loaded:
            return False

        await extension.do_setup()
        await self.send(ExtensionLoaded(extension=extension))
        return True

    async def unload_extension(self, name: str) -> bool:
        """Unload an extension, keeping it available to load again."""
        extension = self.extensions.get(name)
        if extension is None or not extension.loaded:
            return False

        await extension.do_unload()
        await self.send(ExtensionUnloaded(extension=extension))
        return True

    async def remove_extension(self, name: str) -> bool:
        """Unload and forget an extension."""
        if name not in self.extensions:
            return False
        await self.unload_extension(name)
        del self.extensions[name]
        return True

    def find_extension(self, cls: Type[ExtensionT]) -> Optional[ExtensionT]:
        return next((e for e in self.extensions.values() if isinstance(e, cls)), None)

    def find_extensions(self, cls: Type[ExtensionT]) -> List[ExtensionT]:
        return [e for e in self.extensions.values() if isinstance(e, cls)]

    # Commands

    async def handle_message(self, content: str, context: CommandContext) -> bool:
        return await self.dispatcher.handle_message(content, context)

    async def handle_interaction(
        self, payload: Mapping[str, Any], context: CommandContext
    ) -> bool:
        return await self.dispatcher.handle_interaction(payload, context)

    def registration_payload(self) -> List[Dict[str, Any]]:
        return self.dispatcher.registration_payload()
