"""Internationalization settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class I18nSettings(InfrastructureSettings):
    """Translation catalog configuration.

    Environment Variables:
        TRANSLATIONS_DIR: Directory holding ``<domain>.<locale>.yml`` files.
            Empty means the bundled ``app/locales`` directory.
        FALLBACK_LOCALE: Locale used when a key is missing (default: en-US)
        PRELOAD_TRANSLATIONS: Load every locale at startup (default: True)

    Example:
        ```python
        from infrastructure.configuration import settings

        fallback = settings.i18n.FALLBACK_LOCALE
        ```
    """

    TRANSLATIONS_DIR: str = Field(default="", alias="TRANSLATIONS_DIR")
    FALLBACK_LOCALE: str = Field(default="en-US", alias="FALLBACK_LOCALE")
    PRELOAD_TRANSLATIONS: bool = Field(default=True, alias="PRELOAD_TRANSLATIONS")
