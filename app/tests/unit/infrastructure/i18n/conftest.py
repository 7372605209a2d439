"""Feature-level fixtures for i18n system tests."""

import pytest
import yaml

from infrastructure.i18n import Translator, YAMLTranslationLoader


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create temporary directory with sample YAML translation files.

    Returns a directory structure like:
    - converters.en-US.yml
    - converters.fr-FR.yml
    - checks.en-US.yml
    """
    en_us_converters = {
        "converters": {
            "int": {"error": {"invalid": "`{{value}}` is not a whole number"}},
            "flat.key": "Flat message",
        }
    }
    with open(tmp_path / "converters.en-US.yml", "w", encoding="utf-8") as f:
        yaml.dump(en_us_converters, f)

    en_us_checks = {"checks": {"inGuild": {"failed": "Servers only"}}}
    with open(tmp_path / "checks.en-US.yml", "w", encoding="utf-8") as f:
        yaml.dump(en_us_checks, f)

    fr_fr_converters = {
        "converters": {
            "int": {"error": {"invalid": "`{{value}}` n'est pas un nombre entier"}},
        }
    }
    with open(tmp_path / "converters.fr-FR.yml", "w", encoding="utf-8") as f:
        yaml.dump(fr_fr_converters, f, allow_unicode=True)

    return tmp_path


@pytest.fixture
def yaml_loader(temp_translations_dir):
    """Create YAMLTranslationLoader for temporary translations directory."""
    return YAMLTranslationLoader(temp_translations_dir, use_cache=False)


@pytest.fixture
def translator(yaml_loader):
    """Translator with every sample locale loaded."""
    translator = Translator(yaml_loader)
    translator.load_all()
    return translator
