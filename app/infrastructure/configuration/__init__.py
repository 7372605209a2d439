"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the bot
using Pydantic BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    CommandsSettings: Command handling settings class (for testing)
    I18nSettings: Translation settings class (for testing)

Example:
    ```python
    from infrastructure.configuration import settings

    prefix = settings.commands.COMMAND_PREFIX
    log_level = settings.LOG_LEVEL

    # Check environment
    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.features import CommandsSettings
from infrastructure.configuration.infrastructure import I18nSettings

__all__ = ["Settings", "settings", "CommandsSettings", "I18nSettings"]
