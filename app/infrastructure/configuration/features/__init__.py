"""Feature settings."""

from infrastructure.configuration.features.commands import CommandsSettings

__all__ = ["CommandsSettings"]
