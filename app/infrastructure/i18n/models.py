"""Locale, key and catalog types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Locale(str, Enum):
    """Locales the bot ships catalogs for, as BCP 47 tags."""

    EN_US = "en-US"
    FR_FR = "fr-FR"

    @classmethod
    def from_string(cls, locale_str: str) -> "Locale":
        """Parse a tag case-insensitively, accepting ``_`` for ``-``.

        Raises:
            ValueError: If the tag is not a supported locale.
        """
        normalized = (locale_str or "").replace("_", "-").lower()
        for locale in cls:
            if locale.value.lower() == normalized:
                return locale
        raise ValueError(f"Unsupported locale: {locale_str}")

    @property
    def language(self) -> str:
        return self.value.partition("-")[0]

    @property
    def region(self) -> str:
        return self.value.partition("-")[2]


@dataclass(frozen=True)
class TranslationKey:
    """A catalog key split into namespace and message path.

    ``converters.int.error.invalid`` has namespace ``converters`` and message
    key ``int.error.invalid``.
    """

    namespace: str
    message_key: str

    def __str__(self) -> str:
        return f"{self.namespace}.{self.message_key}"

    @classmethod
    def from_string(cls, key_string: str) -> "TranslationKey":
        """Split on the first dot.

        Raises:
            ValueError: If either part would be empty.
        """
        namespace, _, message_key = key_string.partition(".")
        if not namespace or not message_key:
            raise ValueError(
                f"Translation key must be in format 'namespace.key': {key_string}"
            )
        return cls(namespace=namespace, message_key=message_key)


@dataclass
class TranslationCatalog:
    """All messages for one locale, grouped by namespace.

    Within a namespace, messages may be stored flat (``{"a.b": "..."}``) or
    nested (``{"a": {"b": "..."}}``). A flat entry takes precedence.
    """

    locale: Locale
    messages: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def get_message(self, key: TranslationKey) -> Optional[str]:
        """Message for ``key``, or None when absent or not a leaf."""
        node: Any = self.messages.get(key.namespace, {})
        if key.message_key in node:
            node = node[key.message_key]
        else:
            for part in key.message_key.split("."):
                if not isinstance(node, dict) or part not in node:
                    return None
                node = node[part]
        return node if isinstance(node, str) else None

    def set_message(self, key: TranslationKey, message: str) -> None:
        self.messages.setdefault(key.namespace, {})[key.message_key] = message

    def has_message(self, key: TranslationKey) -> bool:
        return self.get_message(key) is not None

    def get_namespace(self, namespace: str) -> Dict[str, Any]:
        return self.messages.get(namespace, {})

    def merge(self, other: "TranslationCatalog") -> None:
        """Recursively merge ``other`` into this catalog; ``other`` wins."""
        deep_merge(self.messages, other.messages)


def deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    """Recursively merge ``source`` into ``target`` in place."""
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            deep_merge(target[key], value)
        else:
            target[key] = value


def _default_supported() -> List[Locale]:
    return list(Locale)


@dataclass
class LocaleResolutionContext:
    """Candidate locales for one invocation.

    Resolution order is the user's client locale, then the guild's preferred
    locale, then ``default_locale``. Candidates outside ``supported_locales``
    are skipped.
    """

    user_locale: Optional[Locale] = None
    guild_locale: Optional[Locale] = None
    default_locale: Locale = Locale.EN_US
    supported_locales: Optional[List[Locale]] = field(default_factory=_default_supported)

    def resolve(self) -> Locale:
        supported = self.supported_locales or []
        for candidate in (self.user_locale, self.guild_locale):
            if candidate is not None and candidate in supported:
                return candidate
        return self.default_locale
