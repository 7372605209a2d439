"""Mapping platform locale tags onto supported locales.

Chat platforms report short or regional tags (``fr``, ``en-GB``, ``es-ES``);
the bot only ships catalogs for the ``Locale`` members.
"""

from typing import Optional, Sequence

from infrastructure.i18n.models import Locale, LocaleResolutionContext
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class LocaleResolver:
    """Picks a supported locale for a platform tag.

    An exact tag match wins, then a language-only match (``fr`` is
    ``fr-FR``, ``en-GB`` is ``en-US``), then ``default_locale``.
    """

    def __init__(self, default_locale: Locale = Locale.EN_US):
        self.default_locale = default_locale

    def match_platform(
        self,
        locale_tag: Optional[str],
        supported_locales: Optional[Sequence[Locale]] = None,
    ) -> Optional[Locale]:
        """Supported locale for ``locale_tag``, or None when nothing matches."""
        if not locale_tag:
            return None

        candidates = [locale.value for locale in supported_locales or Locale]
        match = LanguageNegotiator.find_best_match([locale_tag.replace("_", "-")], candidates)
        if match is None:
            logger.debug("locale_unmatched", locale_tag=locale_tag)
            return None
        return Locale.from_string(match)

    def resolve_from_platform(
        self,
        locale_tag: Optional[str],
        supported_locales: Optional[Sequence[Locale]] = None,
    ) -> Locale:
        return self.match_platform(locale_tag, supported_locales) or self.default_locale

    def resolve_from_context(self, context: LocaleResolutionContext) -> Locale:
        return context.resolve()

    def resolve_from_string(self, locale_str: str) -> Locale:
        """Strict parse of a configured locale string.

        Raises:
            ValueError: If ``locale_str`` is not a supported locale.
        """
        return Locale.from_string(locale_str)


class LanguageNegotiator:
    """Basic language-range filtering over BCP 47 tags."""

    @staticmethod
    def matches_language(requested: str, available: str, strict: bool = False) -> bool:
        """Case-insensitive tag comparison.

        When ``strict`` is false, tags sharing a primary language match.
        """
        if requested.lower() == available.lower():
            return True
        if strict:
            return False
        return requested.split("-")[0].lower() == available.split("-")[0].lower()

    @staticmethod
    def find_best_match(
        requested: Sequence[str],
        available: Sequence[str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """First available tag matching the most preferred requested tag.

        For each requested tag an exact match beats a language-only match.
        """
        for tag in requested:
            for strict in (True, False):
                for candidate in available:
                    if LanguageNegotiator.matches_language(tag, candidate, strict=strict):
                        return candidate
        return default
