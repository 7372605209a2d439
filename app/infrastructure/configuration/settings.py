"""Top-level Settings object for the bot."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.configuration.features import CommandsSettings
from infrastructure.configuration.infrastructure import I18nSettings


class Settings(BaseSettings):
    """Bot configuration, one sub-settings object per concern.

    - ``commands``: chat prefix, mention prefix, owners, default locale
    - ``i18n``: translation catalog location and fallback locale

    Environment Variables:
        PREFIX: Deployment prefix; empty in production
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Commit the bot was built from

    Example:
        ```python
        from infrastructure.configuration import settings

        prefix = settings.commands.COMMAND_PREFIX
        fallback = settings.i18n.FALLBACK_LOCALE
        ```
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    commands: CommandsSettings
    i18n: I18nSettings

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    def __init__(self, **kwargs):
        """Build any sub-settings not passed explicitly from the environment."""
        sections = {"commands": CommandsSettings, "i18n": I18nSettings}
        for name, section_class in sections.items():
            kwargs.setdefault(name, section_class())
        super().__init__(**kwargs)

    @property
    def is_production(self) -> bool:
        return not self.PREFIX


settings = Settings()
