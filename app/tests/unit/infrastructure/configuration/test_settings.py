"""Unit tests for infrastructure.configuration.settings module.

Tests cover:
- CommandsSettings validation and defaults
- I18nSettings defaults
- Settings class initialization
"""

import pytest
from pydantic import ValidationError

from infrastructure.configuration import CommandsSettings, I18nSettings, Settings

COMMAND_ENV_VARS = [
    "COMMAND_PREFIX",
    "MENTION_PREFIX",
    "BOT_USER_ID",
    "DEFAULT_LOCALE",
    "OWNER_IDS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in COMMAND_ENV_VARS + ["TRANSLATIONS_DIR", "FALLBACK_LOCALE", "PREFIX"]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestCommandsSettings:
    """Test suite for CommandsSettings configuration."""

    def test_defaults(self, clean_env):
        commands = CommandsSettings()

        assert commands.COMMAND_PREFIX == "!"
        assert commands.MENTION_PREFIX is True
        assert commands.BOT_USER_ID == ""
        assert commands.DEFAULT_LOCALE == "en-US"
        assert commands.owner_ids == []

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("COMMAND_PREFIX", "?")
        clean_env.setenv("MENTION_PREFIX", "false")
        clean_env.setenv("BOT_USER_ID", "999")

        commands = CommandsSettings()

        assert commands.COMMAND_PREFIX == "?"
        assert commands.MENTION_PREFIX is False
        assert commands.BOT_USER_ID == "999"

    @pytest.mark.parametrize("prefix", ["", "a b", " !"])
    def test_prefix_rejects_blank_and_whitespace(self, clean_env, prefix):
        with pytest.raises(ValidationError):
            CommandsSettings(COMMAND_PREFIX=prefix)

    def test_owner_ids_from_json(self, clean_env):
        clean_env.setenv("OWNER_IDS", '["1", 2]')

        assert CommandsSettings().owner_ids == ["1", "2"]

    def test_owner_ids_from_comma_string(self, clean_env):
        commands = CommandsSettings(OWNER_IDS=" 1, 2 ,,3")

        assert commands.owner_ids == ["1", "2", "3"]

    def test_owner_ids_invalid_json(self, clean_env):
        commands = CommandsSettings(OWNER_IDS="[1, ")

        with pytest.raises(ValueError, match="Invalid OWNER_IDS JSON"):
            _ = commands.owner_ids


@pytest.mark.unit
class TestI18nSettings:
    """Test suite for I18nSettings configuration."""

    def test_defaults(self, clean_env):
        i18n = I18nSettings()

        assert i18n.TRANSLATIONS_DIR == ""
        assert i18n.FALLBACK_LOCALE == "en-US"

    def test_fallback_override(self, clean_env):
        clean_env.setenv("FALLBACK_LOCALE", "fr-FR")

        assert I18nSettings().FALLBACK_LOCALE == "fr-FR"


@pytest.mark.unit
class TestSettings:
    """Test suite for the Settings aggregator."""

    def test_subsettings_are_created(self, clean_env):
        settings = Settings()

        assert isinstance(settings.commands, CommandsSettings)
        assert isinstance(settings.i18n, I18nSettings)

    def test_explicit_subsettings_are_kept(self, clean_env):
        commands = CommandsSettings(COMMAND_PREFIX="$")

        settings = Settings(commands=commands)

        assert settings.commands.COMMAND_PREFIX == "$"

    def test_is_production(self, clean_env):
        assert Settings().is_production is True

        clean_env.setenv("PREFIX", "dev-")

        assert Settings().is_production is False
