"""Message lookup with locale fallback and placeholder interpolation."""

import re
from typing import Any, Dict, List, Optional, Union

from infrastructure.i18n.loader import TranslationLoader
from infrastructure.i18n.models import Locale, TranslationCatalog, TranslationKey
from infrastructure.logging import get_module_logger

logger = get_module_logger()

# "{{name}}" as used by the bundled catalogs, or "{name}"
PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}|\{(\w+)\}")


class Translator:
    """Holds one catalog per locale and renders messages from them.

    A key missing in the requested locale is looked up in
    ``fallback_locale`` before giving up.

    Attributes:
        loader: Source of catalogs.
        catalogs: Loaded catalogs by locale.
        fallback_locale: Locale consulted when a key is missing.
    """

    def __init__(
        self,
        loader: TranslationLoader,
        fallback_locale: Locale = Locale.EN_US,
    ):
        self.loader = loader
        self.fallback_locale = fallback_locale
        self.catalogs: Dict[Locale, TranslationCatalog] = {}

    def load_all(self) -> None:
        self.catalogs = self.loader.load_all()
        logger.info(
            "translator_loaded",
            locales=sorted(locale.value for locale in self.catalogs),
        )

    def load_locale(self, locale: Locale) -> None:
        """Load a single locale.

        Raises:
            FileNotFoundError: If the locale has no catalog files.
        """
        self.catalogs[locale] = self.loader.load(locale)

    def _lookup(self, key: TranslationKey, locale: Locale) -> Optional[str]:
        catalog = self.catalogs.get(locale)
        return catalog.get_message(key) if catalog else None

    def translate_message(
        self,
        key: TranslationKey,
        locale: Locale,
        variables: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Render ``key`` in ``locale``.

        Args:
            key: Message to render.
            locale: Requested locale.
            variables: Values for the message's placeholders.

        Returns:
            The interpolated message.

        Raises:
            KeyError: If the key is missing in both the requested and the
                fallback locale.
            ValueError: If a placeholder has no matching variable.
        """
        message = self._lookup(key, locale)
        if message is None and locale != self.fallback_locale:
            message = self._lookup(key, self.fallback_locale)

        if message is None:
            logger.warning("translation_not_found", key=str(key), locale=locale.value)
            raise KeyError(
                f"Translation not found for key {key} in {locale.value} "
                f"or fallback {self.fallback_locale.value}"
            )

        return self._interpolate(message, variables or {})

    def translate(
        self,
        key: Union[str, TranslationKey],
        locale: Union[str, Locale, None] = None,
        **variables: Any,
    ) -> str:
        """String-friendly ``translate_message``.

        ``locale`` may be a tag such as ``"fr"`` or ``"fr-FR"``; missing or
        unsupported tags use the fallback locale.

        Raises:
            KeyError: If the key is missing in both locales.
            ValueError: If the key is malformed or a variable is missing.
        """
        if isinstance(key, str):
            key = TranslationKey.from_string(key)
        return self.translate_message(key, self._resolve_locale(locale), variables)

    def _resolve_locale(self, locale: Union[str, Locale, None]) -> Locale:
        if isinstance(locale, Locale):
            return locale
        if not locale:
            return self.fallback_locale
        try:
            return Locale.from_string(locale)
        except ValueError:
            return self.fallback_locale

    @staticmethod
    def _interpolate(message: str, variables: Dict[str, Any]) -> str:
        """Substitute ``{{name}}`` and ``{name}`` placeholders.

        Raises:
            ValueError: If a placeholder has no matching variable.
        """

        def _replace(match: "re.Match[str]") -> str:
            name = match.group(1) or match.group(2)
            if name not in variables:
                raise ValueError(f"Missing interpolation variable: {name}")
            return str(variables[name])

        return PLACEHOLDER.sub(_replace, message)

    def has_message(self, key: TranslationKey, locale: Locale) -> bool:
        """Whether ``locale`` itself defines ``key``, ignoring the fallback."""
        return self._lookup(key, locale) is not None

    def get_available_locales(self) -> List[Locale]:
        return list(self.catalogs)

    def get_catalog(self, locale: Locale) -> Optional[TranslationCatalog]:
        return self.catalogs.get(locale)

    def reload(self) -> None:
        """Drop every catalog and load them again from the loader."""
        clear_cache = getattr(self.loader, "clear_cache", None)
        if callable(clear_cache):
            clear_cache()
        self.catalogs.clear()
        self.load_all()
