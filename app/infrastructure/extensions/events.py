"""Event models for the bot event bus.

Handlers subscribe to an event class and receive every event of that class
or of a subclass.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from infrastructure.extensions.extension import Extension


@dataclass
class Event:
    """Base class for all bot events."""

    timestamp: datetime = field(default_factory=datetime.now)
    """When the event occurred."""

    correlation_id: UUID = field(default_factory=uuid4)
    """Unique ID to track related events across the system."""

    metadata: Dict[str, Any] = field(default_factory=dict)
    """Custom metadata for this event type."""

    @property
    def event_type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event to dictionary.

        Returns:
            Dictionary with ISO format timestamp and UUID as string.
        """
        data = {item.name: getattr(self, item.name) for item in fields(self)}
        data["event_type"] = self.event_type
        data["timestamp"] = self.timestamp.isoformat()
        data["correlation_id"] = str(self.correlation_id)
        return data


@dataclass
class ExtensionLoaded(Event):
    """An extension finished its setup."""

    extension: Optional["Extension"] = field(default=None, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["extension"] = self.extension.name if self.extension else None
        return data


@dataclass
class ExtensionUnloaded(Event):
    """An extension was unloaded and its commands removed."""

    extension: Optional["Extension"] = field(default=None, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["extension"] = self.extension.name if self.extension else None
        return data
