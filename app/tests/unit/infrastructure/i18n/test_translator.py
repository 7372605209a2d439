"""Tests for infrastructure.i18n.translator module."""

from unittest.mock import patch

import pytest

from infrastructure.i18n import Locale, Translator, create_translator
from infrastructure.i18n.models import TranslationKey

INT_INVALID = TranslationKey("converters", "int.error.invalid")


@pytest.mark.unit
class TestTranslateMessage:
    """Tests for Translator.translate_message."""

    def test_interpolates_variables(self, translator):
        message = translator.translate_message(INT_INVALID, Locale.EN_US, {"value": "abc"})

        assert message == "`abc` is not a whole number"

    def test_uses_requested_locale(self, translator):
        message = translator.translate_message(INT_INVALID, Locale.FR_FR, {"value": "abc"})

        assert message == "`abc` n'est pas un nombre entier"

    def test_falls_back_to_fallback_locale(self, translator):
        message = translator.translate_message(TranslationKey("checks", "inGuild.failed"), Locale.FR_FR)

        assert message == "Servers only"

    def test_missing_key_raises(self, translator):
        with pytest.raises(KeyError):
            translator.translate_message(TranslationKey("checks", "missing"), Locale.EN_US)

    def test_missing_variable_raises(self, translator):
        with pytest.raises(ValueError):
            translator.translate_message(INT_INVALID, Locale.EN_US)

    def test_single_brace_placeholders(self, translator):
        assert translator._interpolate("Hi {name}", {"name": "Ana"}) == "Hi Ana"

    def test_double_braces_are_replaced_first(self, translator):
        assert translator._interpolate("{{x}} and {x}", {"x": 1}) == "1 and 1"


@pytest.mark.unit
class TestTranslate:
    """Tests for the string-based Translator.translate."""

    def test_accepts_strings(self, translator):
        assert translator.translate("converters.int.error.invalid", "fr-FR", value="1.5") == (
            "`1.5` n'est pas un nombre entier"
        )

    def test_unsupported_locale_uses_fallback(self, translator):
        assert translator.translate("checks.inGuild.failed", "de-DE") == "Servers only"

    def test_no_locale_uses_fallback(self, translator):
        assert translator.translate("checks.inGuild.failed") == "Servers only"

    def test_malformed_key(self, translator):
        with pytest.raises(ValueError):
            translator.translate("nonamespace")


@pytest.mark.unit
class TestTranslatorState:
    """Tests for locale bookkeeping and reload."""

    def test_available_locales(self, translator):
        assert set(translator.get_available_locales()) == {Locale.EN_US, Locale.FR_FR}

    def test_has_message_does_not_fall_back(self, translator):
        key = TranslationKey("checks", "inGuild.failed")

        assert translator.has_message(key, Locale.EN_US)
        assert not translator.has_message(key, Locale.FR_FR)

    def test_load_locale(self, yaml_loader):
        translator = Translator(yaml_loader)

        translator.load_locale(Locale.FR_FR)

        assert translator.get_catalog(Locale.FR_FR) is not None
        assert translator.get_catalog(Locale.EN_US) is None

    def test_reload_picks_up_changes(self, translator, temp_translations_dir):
        (temp_translations_dir / "extra.en-US.yml").write_text(
            "extra:\n  hello: Hello\n", encoding="utf-8"
        )

        translator.reload()

        assert translator.translate("extra.hello") == "Hello"


@pytest.mark.unit
class TestCreateTranslator:
    """Tests for the create_translator factory."""

    def test_defaults_to_bundled_catalogs(self):
        translator = create_translator(preload=True)

        assert translator.translate("commands.help.title", "en-US") == "**Commands**"

    def test_lazy_translator_has_no_catalogs(self, temp_translations_dir):
        translator = create_translator(temp_translations_dir, preload=False)

        assert translator.get_available_locales() == []

    def test_extra_dirs(self, temp_translations_dir, tmp_path_factory):
        extra = tmp_path_factory.mktemp("ext")
        (extra / "ext.en-US.yml").write_text("ext:\n  ping: Pong\n", encoding="utf-8")

        translator = create_translator(temp_translations_dir, extra_dirs=[extra], preload=True)

        assert translator.translate("ext.ping") == "Pong"
        assert translator.translate("checks.inGuild.failed") == "Servers only"

    def test_fallback_from_settings(self, temp_translations_dir):
        with patch("infrastructure.i18n.factory.settings") as mock_settings:
            mock_settings.i18n.FALLBACK_LOCALE = "fr-FR"
            mock_settings.i18n.PRELOAD_TRANSLATIONS = False

            translator = create_translator(temp_translations_dir)

        assert translator.fallback_locale is Locale.FR_FR
