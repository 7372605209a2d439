"""Translator construction from settings."""

from pathlib import Path
from typing import Optional, Sequence

from infrastructure.configuration import settings
from infrastructure.i18n.loader import YAMLTranslationLoader
from infrastructure.i18n.models import Locale
from infrastructure.i18n.translator import Translator

# Bundled catalogs: app/locales
DEFAULT_TRANSLATIONS_DIR = Path(__file__).resolve().parents[2] / "locales"


def create_translator(
    translations_dir: Optional[Path] = None,
    fallback_locale: Optional[Locale] = None,
    use_cache: bool = True,
    preload: Optional[bool] = None,
    extra_dirs: Sequence[Path] = (),
) -> Translator:
    """Build a Translator over the core catalogs plus ``extra_dirs``.

    Arguments left as None come from ``settings.i18n``. An empty
    ``TRANSLATIONS_DIR`` means the bundled catalogs.

    Args:
        translations_dir: Directory with the core catalogs.
        fallback_locale: Locale consulted when a key is missing.
        use_cache: Whether the loader caches built catalogs.
        preload: Load every locale now instead of on demand.
        extra_dirs: Extension catalog directories, read after the core one.

    Raises:
        ValueError: If a directory does not exist.

    Usage:
        translator = create_translator()
        translator.translate("converters.int.error.invalid", "fr-FR", value="x")
    """
    if translations_dir is None:
        configured = settings.i18n.TRANSLATIONS_DIR
        translations_dir = Path(configured) if configured else DEFAULT_TRANSLATIONS_DIR
    if fallback_locale is None:
        fallback_locale = Locale.from_string(settings.i18n.FALLBACK_LOCALE)
    if preload is None:
        preload = settings.i18n.PRELOAD_TRANSLATIONS

    loader = YAMLTranslationLoader([translations_dir, *extra_dirs], use_cache=use_cache)
    translator = Translator(loader, fallback_locale=fallback_locale)
    if preload:
        translator.load_all()
    return translator
