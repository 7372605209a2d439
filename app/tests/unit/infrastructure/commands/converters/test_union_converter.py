"""Unit tests for UnionConverter."""

import pytest

from infrastructure.commands.arguments import Argument
from infrastructure.commands.converters import (
    BooleanConverter,
    CoalescingStringConverter,
    IntConverter,
    MentionConverter,
    SnowflakeConverter,
    StringConverter,
    UnionConverter,
)
from infrastructure.commands.entities import Mention, MentionType, Snowflake
from infrastructure.commands.errors import ConfigurationError, RelayedError, ValidationError
from infrastructure.commands.options import OptionType
from infrastructure.parsing import StringParser


@pytest.mark.unit
class TestUnionConfiguration:
    """Tests for candidate checks done at construction."""

    def test_needs_candidates(self):
        with pytest.raises(ConfigurationError):
            UnionConverter([])

    def test_optional_candidate_must_be_last(self):
        with pytest.raises(ConfigurationError, match="last provided converter"):
            UnionConverter([IntConverter().to_optional(), StringConverter()])

    def test_defaulting_candidate_must_be_last(self):
        with pytest.raises(ConfigurationError):
            UnionConverter([IntConverter().to_defaulting(1), StringConverter()])

    def test_fallback_candidate_allowed_last(self):
        union = UnionConverter([IntConverter(), StringConverter().to_optional()])

        assert len(union.converters) == 2

    def test_candidate_bound_to_argument_is_rejected(self):
        converter = IntConverter()
        Argument("count", "How many", converter)

        with pytest.raises(ConfigurationError):
            UnionConverter([converter, StringConverter()])


@pytest.mark.unit
class TestUnionChatParsing:
    """Tests for chat parsing through a union."""

    @pytest.mark.asyncio
    async def test_first_matching_candidate_wins(self, ctx):
        union = UnionConverter([MentionConverter(), SnowflakeConverter()])

        mention = await union.parse(StringParser("<@5>"), ctx)
        snowflake = await union.parse(StringParser("5"), ctx)

        assert mention.value == Mention(MentionType.USER, Snowflake(5))
        assert snowflake.value == Snowflake(5)

    @pytest.mark.asyncio
    async def test_no_match_fails_without_consuming(self, ctx):
        parser = StringParser("maybe rest")
        union = UnionConverter([IntConverter(), BooleanConverter()])

        result = await union.parse(parser, ctx)

        assert not result.ok
        assert parser.peek_next().text == "maybe"

    @pytest.mark.asyncio
    async def test_failed_candidate_does_not_consume(self, ctx):
        parser = StringParser("yes 3")
        union = UnionConverter([IntConverter(), BooleanConverter()])

        result = await union.parse(parser, ctx)

        assert result.value is True
        assert parser.peek_next().text == "3"

    @pytest.mark.asyncio
    async def test_should_throw_propagates_candidate_error(self, ctx):
        union = UnionConverter([IntConverter(), BooleanConverter()], should_throw=True)

        with pytest.raises(RelayedError, match="whole number"):
            await union.parse(StringParser("maybe"), ctx)

    @pytest.mark.asyncio
    async def test_candidate_validation_error_is_swallowed(self, ctx):
        union = UnionConverter([IntConverter(validator=lambda v, c: False), StringConverter()])

        result = await union.parse(StringParser("5"), ctx)

        assert result.value == "5"

    @pytest.mark.asyncio
    async def test_union_validator_runs_on_result(self, ctx):
        union = UnionConverter([IntConverter()], validator=lambda v, c: "odd" if v % 2 else None)

        with pytest.raises(ValidationError, match="odd"):
            await union.parse(StringParser("3"), ctx)

    @pytest.mark.asyncio
    async def test_optional_last_candidate_without_value_fails(self, ctx):
        union = UnionConverter([IntConverter(), StringConverter().to_optional()])

        assert not (await union.parse(StringParser(""), ctx)).ok

    @pytest.mark.asyncio
    async def test_list_candidate_needs_items(self, ctx):
        parser = StringParser("1 2 x")
        union = UnionConverter([IntConverter().to_list(), StringConverter()])

        result = await union.parse(parser, ctx)

        assert result.value == [1, 2]
        assert parser.peek_next().text == "x"

    @pytest.mark.asyncio
    async def test_coalescing_candidate(self, ctx):
        union = UnionConverter([IntConverter(), CoalescingStringConverter()])

        result = await union.parse(StringParser("hello there"), ctx)

        assert result.value == "hello there"

    @pytest.mark.asyncio
    async def test_named_value(self, ctx):
        union = UnionConverter([IntConverter(), StringConverter()])

        result = await union.parse(None, ctx, "12")

        assert result.value == 12


@pytest.mark.unit
class TestUnionSlashParsing:
    """Tests for slash option parsing through a union."""

    @pytest.mark.asyncio
    async def test_first_matching_candidate_wins(self, ctx, option_factory):
        union = UnionConverter([IntConverter(), StringConverter()])

        number = await union.parse_option(ctx, option_factory("value", "5"))
        text = await union.parse_option(ctx, option_factory("value", "abc"))

        assert number.value == 5
        assert text.value == "abc"

    @pytest.mark.asyncio
    async def test_list_candidate_is_relayed_error(self, ctx, option_factory):
        union = UnionConverter([IntConverter().to_list(), StringConverter()])

        with pytest.raises(RelayedError, match="cannot be used in a union"):
            await union.parse_option(ctx, option_factory("value", "1 2"))

    @pytest.mark.asyncio
    async def test_no_match_fails(self, ctx, option_factory):
        union = UnionConverter([IntConverter(), BooleanConverter()])

        result = await union.parse_option(ctx, option_factory("value", "maybe"))

        assert not result.ok

    def test_slash_option_is_string(self):
        argument = Argument("target", "User or ID", UnionConverter([MentionConverter(), SnowflakeConverter()]))

        option = argument.converter.to_slash_option(argument)

        assert option.type is OptionType.STRING
        assert option.required is True


@pytest.mark.unit
class TestUnionSignature:
    """Tests for help text signatures."""

    def test_joins_candidate_signatures(self, ctx):
        union = UnionConverter([IntConverter(), StringConverter()])

        assert union.signature(ctx) == "whole number | text"

    def test_type_name_overrides(self, ctx):
        union = UnionConverter([IntConverter(), StringConverter()], type_name="value")

        assert union.signature(ctx) == "value"
