"""Tests for infrastructure.i18n.models module."""

import pytest

from infrastructure.i18n.models import (
    Locale,
    LocaleResolutionContext,
    TranslationCatalog,
    TranslationKey,
    deep_merge,
)


@pytest.mark.unit
class TestLocale:
    """Tests for Locale."""

    @pytest.mark.parametrize("text", ["en-US", "en-us", "EN_US"])
    def test_from_string(self, text):
        assert Locale.from_string(text) is Locale.EN_US

    def test_unsupported(self):
        with pytest.raises(ValueError):
            Locale.from_string("de-DE")

    def test_parts(self):
        assert Locale.FR_FR.language == "fr"
        assert Locale.FR_FR.region == "FR"


@pytest.mark.unit
class TestTranslationKey:
    """Tests for TranslationKey."""

    def test_splits_on_first_dot(self):
        key = TranslationKey.from_string("converters.int.error.invalid")

        assert key.namespace == "converters"
        assert key.message_key == "int.error.invalid"
        assert str(key) == "converters.int.error.invalid"

    @pytest.mark.parametrize("text", ["", "converters", "converters."])
    def test_malformed(self, text):
        with pytest.raises(ValueError):
            TranslationKey.from_string(text)


@pytest.mark.unit
class TestTranslationCatalog:
    """Tests for TranslationCatalog."""

    def test_set_and_get(self):
        catalog = TranslationCatalog(locale=Locale.EN_US)
        key = TranslationKey("checks", "inGuild.failed")

        catalog.set_message(key, "Servers only")

        assert catalog.get_message(key) == "Servers only"
        assert catalog.has_message(key)
        assert catalog.get_namespace("checks") == {"inGuild.failed": "Servers only"}

    def test_merge_is_recursive(self):
        base = TranslationCatalog(
            locale=Locale.EN_US, messages={"converters": {"int": {"a": "A", "b": "B"}}}
        )
        other = TranslationCatalog(
            locale=Locale.EN_US, messages={"converters": {"int": {"b": "B2"}}, "checks": {"c": "C"}}
        )

        base.merge(other)

        assert base.messages == {
            "converters": {"int": {"a": "A", "b": "B2"}},
            "checks": {"c": "C"},
        }


@pytest.mark.unit
class TestDeepMerge:
    """Tests for deep_merge."""

    def test_non_dict_values_replace(self):
        target = {"a": {"b": 1}, "c": 1}

        deep_merge(target, {"a": "flat", "c": {"d": 2}})

        assert target == {"a": "flat", "c": {"d": 2}}


@pytest.mark.unit
class TestLocaleResolutionContext:
    """Tests for LocaleResolutionContext."""

    def test_user_locale_wins(self):
        context = LocaleResolutionContext(user_locale=Locale.FR_FR, guild_locale=Locale.EN_US)

        assert context.resolve() is Locale.FR_FR

    def test_guild_locale_next(self):
        assert LocaleResolutionContext(guild_locale=Locale.FR_FR).resolve() is Locale.FR_FR

    def test_unsupported_locales_fall_through(self):
        context = LocaleResolutionContext(
            user_locale=Locale.FR_FR, supported_locales=[Locale.EN_US]
        )

        assert context.resolve() is Locale.EN_US
