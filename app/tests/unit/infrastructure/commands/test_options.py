"""Unit tests for slash option schema and values."""

import pytest

from infrastructure.commands.errors import ConfigurationError
from infrastructure.commands.options import (
    OptionChoice,
    OptionType,
    OptionValue,
    SlashOption,
    options_from_payload,
    validate_description,
    validate_option_name,
)


@pytest.mark.unit
class TestNameValidation:
    """Tests for name and description rules."""

    @pytest.mark.parametrize("name", ["ban", "user-id", "days_2", "x" * 32])
    def test_valid_names(self, name):
        assert validate_option_name(name) == name

    @pytest.mark.parametrize("name", ["", "Ban", "two words", "x" * 33, "é"])
    def test_invalid_names(self, name):
        with pytest.raises(ConfigurationError):
            validate_option_name(name)

    @pytest.mark.parametrize("description", ["", "x" * 101])
    def test_invalid_descriptions(self, description):
        with pytest.raises(ConfigurationError):
            validate_description(description)


@pytest.mark.unit
class TestSlashOption:
    """Tests for SlashOption."""

    def test_payload_omits_unset_fields(self):
        option = SlashOption(name="reason", description="Why", type=OptionType.STRING, required=False)

        assert option.to_payload() == {
            "name": "reason",
            "description": "Why",
            "type": 3,
            "required": False,
        }

    def test_payload_with_choices(self):
        option = SlashOption(
            name="color",
            description="Color",
            type=OptionType.STRING,
            choices=[OptionChoice(name="Red", value="#f00")],
        )

        assert option.to_payload()["choices"] == [{"name": "Red", "value": "#f00"}]

    def test_integer_bounds_keep_type(self):
        option = SlashOption(name="days", description="Days", type=OptionType.INTEGER, min_value=0, max_value=7)

        assert option.to_payload()["max_value"] == 7
        assert isinstance(option.max_value, int)

    def test_subcommand_payload_has_no_required(self):
        option = SlashOption(name="show", description="Show", type=OptionType.SUB_COMMAND)

        assert "required" not in option.to_payload()

    def test_choices_and_autocomplete_conflict(self):
        with pytest.raises(ConfigurationError):
            SlashOption(
                name="color",
                description="Color",
                type=OptionType.STRING,
                choices=[OptionChoice(name="Red", value="red")],
                autocomplete=True,
            )

    def test_too_many_choices(self):
        choices = [OptionChoice(name=str(i), value=str(i)) for i in range(26)]

        with pytest.raises(ConfigurationError):
            SlashOption(name="pick", description="Pick", type=OptionType.STRING, choices=choices)

    def test_length_bounds(self):
        with pytest.raises(ConfigurationError):
            SlashOption(name="text", description="Text", type=OptionType.STRING, max_length=6001)

    def test_invalid_name(self):
        with pytest.raises(ConfigurationError):
            SlashOption(name="Bad Name", description="Text", type=OptionType.STRING)


@pytest.mark.unit
class TestOptionValues:
    """Tests for interaction option values."""

    def test_resolved_entity_is_attached(self):
        resolved = {"users": {"42": {"id": "42", "username": "someone"}}}

        value = OptionValue.from_payload({"name": "user", "type": 6, "value": "42"}, resolved)

        assert value.type is OptionType.USER
        assert value.resolved == {"id": "42", "username": "someone"}

    def test_string_option_has_no_resolved_entity(self):
        value = OptionValue.from_payload({"name": "text", "type": 3, "value": "42"}, {"users": {"42": {}}})

        assert value.resolved is None

    def test_options_keyed_by_lowercase_name(self):
        values = options_from_payload([{"name": "Days", "type": 4, "value": 3}])

        assert values["days"].value == 3
