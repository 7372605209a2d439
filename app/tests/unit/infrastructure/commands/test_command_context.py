"""Unit tests for CommandContext."""

from unittest.mock import MagicMock

import pytest

from infrastructure.commands.context import CommandContext


@pytest.mark.unit
class TestCommandContext:
    """Tests for CommandContext."""

    def test_defaults(self):
        ctx = CommandContext(user_id="1")

        assert ctx.locale == "en-US"
        assert ctx.guild_id is None
        assert ctx.arguments == {}
        assert ctx.correlation_id

    def test_correlation_ids_are_unique(self):
        assert CommandContext(user_id="1").correlation_id != CommandContext(user_id="1").correlation_id

    def test_translate(self, ctx):
        assert ctx.translate("converters.int.error.invalid", value="x") == "`x` is not a valid whole number."

    def test_translate_uses_locale(self, context_factory):
        fr_ctx = context_factory(locale="fr-FR")

        assert fr_ctx.translate("commands.help.title") == "**Commandes**"

    def test_unknown_locale_uses_fallback(self, context_factory):
        de_ctx = context_factory(locale="de-DE")

        assert de_ctx.translate("commands.help.title") == "**Commands**"

    def test_missing_key_returns_key(self, ctx):
        assert ctx.translate("converters.missing.key") == "converters.missing.key"

    def test_missing_variable_returns_key(self, ctx):
        assert ctx.translate("converters.int.error.invalid") == "converters.int.error.invalid"

    def test_no_translator_returns_key(self, context_factory):
        bare = context_factory(use_translator=False)

        assert bare.translate("commands.help.title") == "commands.help.title"

    @pytest.mark.asyncio
    async def test_respond(self, ctx, mock_responder):
        await ctx.respond("hello", embed=None)

        mock_responder.send_message.assert_awaited_once_with("hello", embed=None)

    @pytest.mark.asyncio
    async def test_respond_ephemeral(self, ctx, mock_responder):
        await ctx.respond_ephemeral("secret")

        mock_responder.send_ephemeral.assert_awaited_once_with("secret")

    @pytest.mark.asyncio
    async def test_respond_without_responder(self):
        ctx = CommandContext(user_id="1")

        await ctx.respond("dropped")
        await ctx.respond_ephemeral("dropped")

    def test_translator_key_error_is_caught(self):
        translator = MagicMock()
        translator.translate.side_effect = KeyError("missing")
        ctx = CommandContext(user_id="1", translator=translator)

        assert ctx.translate("a.b") == "a.b"
        translator.translate.assert_called_once_with("a.b", "en-US")
