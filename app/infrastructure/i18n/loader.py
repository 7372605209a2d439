"""Catalog loaders.

``YAMLTranslationLoader`` reads ``<domain>.<locale>.yml`` files, e.g.
``core.en-US.yml`` or ``moderation.fr-FR.yml``. Every file for a locale is
merged into one catalog; directories later in the search path win, which is
how an extension overrides a bundled message.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Union

import yaml

from infrastructure.i18n.models import Locale, TranslationCatalog, deep_merge
from infrastructure.logging import get_module_logger

logger = get_module_logger()

PathLike = Union[str, Path]


class TranslationLoader(ABC):
    """Source of translation catalogs."""

    @abstractmethod
    def load(self, locale: Locale) -> TranslationCatalog:
        """Build the catalog for ``locale``.

        Raises:
            FileNotFoundError: If the locale has no catalog files.
            ValueError: If a catalog file is malformed.
        """

    @abstractmethod
    def load_all(self) -> Dict[Locale, TranslationCatalog]:
        """Build a catalog for every locale the loader knows about."""


def _existing_dir(directory: PathLike) -> Path:
    path = Path(directory)
    if not path.exists():
        raise ValueError(f"Translations directory not found: {path}")
    return path


def _locale_of(yaml_file: Path) -> Optional[Locale]:
    """Locale encoded in a ``<domain>.<locale>.yml`` file name, if supported."""
    domain, _, tag = yaml_file.stem.rpartition(".")
    if not domain:
        return None
    try:
        return Locale.from_string(tag)
    except ValueError:
        return None


class YAMLTranslationLoader(TranslationLoader):
    """Loads and merges YAML catalogs from an ordered list of directories.

    Attributes:
        translations_dirs: Search path, lowest precedence first.
        use_cache: Keep built catalogs in ``cache``.
        cache: Built catalogs by locale.
    """

    def __init__(
        self,
        translations_dir: Union[PathLike, Sequence[PathLike]],
        use_cache: bool = True,
    ):
        if isinstance(translations_dir, (str, Path)):
            translations_dir = [translations_dir]
        self.translations_dirs: List[Path] = [_existing_dir(d) for d in translations_dir]
        self.use_cache = use_cache
        self.cache: Dict[Locale, TranslationCatalog] = {}

        logger.debug(
            "translation_loader_created",
            translations_dirs=[str(d) for d in self.translations_dirs],
        )

    @property
    def translations_dir(self) -> Path:
        return self.translations_dirs[0]

    def add_directory(self, directory: PathLike) -> None:
        """Append ``directory`` to the search path.

        Raises:
            ValueError: If the directory does not exist.
        """
        self.translations_dirs.append(_existing_dir(directory))
        self.clear_cache()

    def _files(self, pattern: str) -> Iterator[Path]:
        for directory in self.translations_dirs:
            yield from sorted(directory.glob(pattern))

    def load(self, locale: Locale) -> TranslationCatalog:
        if self.use_cache and locale in self.cache:
            return self.cache[locale]

        yaml_files = list(self._files(f"*.{locale.value}.yml"))
        if not yaml_files:
            raise FileNotFoundError(f"No translation files found for locale {locale.value}")

        catalog = TranslationCatalog(locale=locale)
        for yaml_file in yaml_files:
            self._merge_file(catalog, yaml_file)

        logger.info(
            "translations_loaded",
            locale=locale.value,
            file_count=len(yaml_files),
            namespaces=sorted(catalog.messages),
        )
        if self.use_cache:
            self.cache[locale] = catalog
        return catalog

    def load_all(self) -> Dict[Locale, TranslationCatalog]:
        """Load every supported locale found on the search path.

        Files whose locale is not supported are skipped.

        Raises:
            ValueError: If no catalog file is found at all.
        """
        locales = {
            locale
            for locale in map(_locale_of, self._files("*.yml"))
            if locale is not None
        }
        if not locales:
            raise ValueError(
                f"No translation files found in {[str(d) for d in self.translations_dirs]}"
            )
        return {locale: self.load(locale) for locale in locales}

    def _merge_file(self, catalog: TranslationCatalog, yaml_file: Path) -> None:
        """Merge one file's ``namespace -> messages`` mapping into ``catalog``."""
        try:
            with open(yaml_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("translation_file_invalid", file=str(yaml_file), error=str(e))
            raise ValueError(f"Failed to parse {yaml_file}: {e}") from e

        if not data:
            return
        if not isinstance(data, dict):
            logger.warning("translation_file_skipped", file=str(yaml_file), reason="not a mapping")
            return

        for namespace, messages in data.items():
            if not isinstance(messages, dict):
                logger.warning(
                    "translation_namespace_skipped",
                    file=str(yaml_file),
                    namespace=namespace,
                )
                continue
            deep_merge(catalog.messages.setdefault(namespace, {}), messages)

    def clear_cache(self) -> None:
        self.cache.clear()
