"""i18n system - internationalization and localization framework.

Provides translation management, locale resolution, and variable
interpolation for every user-facing framework message (converter errors,
argument errors, check failures).

Main components:
- models: TranslationKey, Locale, TranslationCatalog, LocaleResolutionContext
- loader: TranslationLoader and YAMLTranslationLoader
- translator: Translator service with message interpolation
- resolvers: LocaleResolver and LanguageNegotiator for locale detection
- factory: create_translator() wired to settings
"""

from infrastructure.i18n.loader import TranslationLoader, YAMLTranslationLoader
from infrastructure.i18n.models import (
    Locale,
    LocaleResolutionContext,
    TranslationCatalog,
    TranslationKey,
)
from infrastructure.i18n.resolvers import LanguageNegotiator, LocaleResolver
from infrastructure.i18n.translator import Translator
from infrastructure.i18n.factory import create_translator

__all__ = [
    "Locale",
    "TranslationKey",
    "TranslationCatalog",
    "LocaleResolutionContext",
    "TranslationLoader",
    "YAMLTranslationLoader",
    "Translator",
    "LocaleResolver",
    "LanguageNegotiator",
    "create_translator",
]
