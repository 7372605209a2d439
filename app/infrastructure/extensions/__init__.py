"""Extensions and the bot event bus.

Exports:
    ExtensibleBot: Extension lifecycle, event bus and command routing
    Extension: Base class for bot extensions
    EventHandler: Registered event subscription
    Event, ExtensionLoaded, ExtensionUnloaded: Event models
"""

from infrastructure.extensions.bot import ExtensibleBot
from infrastructure.extensions.events import Event, ExtensionLoaded, ExtensionUnloaded
from infrastructure.extensions.extension import EventHandler, Extension

__all__ = [
    "ExtensibleBot",
    "Extension",
    "EventHandler",
    "Event",
    "ExtensionLoaded",
    "ExtensionUnloaded",
]
