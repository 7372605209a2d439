"""Unit tests for command checks."""

import pytest

from infrastructure.checks import (
    CheckContext,
    has_role,
    in_channel,
    in_guild,
    is_owner,
    is_user,
    not_has_role,
    not_in_guild,
    run_checks,
)
from infrastructure.commands.errors import CheckFailure
from infrastructure.configuration import settings


async def outcome(check, ctx) -> CheckContext:
    check_context = CheckContext(ctx)
    result = check(check_context)
    if result is not None:
        await result
    return check_context


@pytest.mark.unit
class TestCheckContext:
    """Tests for CheckContext."""

    def test_starts_passing(self, ctx):
        check_context = CheckContext(ctx)

        assert check_context.passed is True
        assert check_context.message is None

    def test_fail_then_pass(self, ctx):
        check_context = CheckContext(ctx)

        check_context.fail("nope")
        assert check_context.passed is False
        assert check_context.message == "nope"

        check_context.pass_()
        assert check_context.passed is True
        assert check_context.message is None


@pytest.mark.unit
class TestRunChecks:
    """Tests for run_checks."""

    @pytest.mark.asyncio
    async def test_all_passing(self, ctx):
        await run_checks([in_guild(), in_channel("200")], ctx)

    @pytest.mark.asyncio
    async def test_first_failure_stops(self, ctx):
        calls = []

        def failing(check):
            calls.append("failing")
            check.fail("first")

        def never(check):
            calls.append("never")

        with pytest.raises(CheckFailure) as exc_info:
            await run_checks([failing, never], ctx)

        assert exc_info.value.message == "first"
        assert calls == ["failing"]

    @pytest.mark.asyncio
    async def test_failure_without_message_uses_generic(self, ctx):
        def silent(check):
            check.fail()

        with pytest.raises(CheckFailure) as exc_info:
            await run_checks([silent], ctx)

        assert exc_info.value.message == "You can't use this command here."

    @pytest.mark.asyncio
    async def test_async_checks(self, ctx):
        async def slow(check):
            check.fail("async failure")

        with pytest.raises(CheckFailure, match="async failure"):
            await run_checks([slow], ctx)

    @pytest.mark.asyncio
    async def test_each_check_gets_a_fresh_context(self, ctx):
        seen = []

        def record(check):
            seen.append(check)

        await run_checks([record, record], ctx)

        assert seen[0] is not seen[1]


@pytest.mark.unit
class TestRoleChecks:
    """Tests for has_role and not_has_role."""

    @pytest.mark.asyncio
    async def test_has_role(self, context_factory):
        member = context_factory(member_role_ids=["5"])

        assert (await outcome(has_role("5"), member)).passed
        failed = await outcome(has_role("6"), member)
        assert not failed.passed
        assert failed.message == "You must have the <@&6> role to use this command."

    @pytest.mark.asyncio
    async def test_has_role_outside_guild_fails_silently(self, context_factory):
        dm = context_factory(guild_id=None, member_role_ids=["5"])

        result = await outcome(has_role("5"), dm)

        assert not result.passed
        assert result.message is None

    @pytest.mark.asyncio
    async def test_not_has_role(self, context_factory):
        member = context_factory(member_role_ids=["5"])

        assert (await outcome(not_has_role("6"), member)).passed
        assert not (await outcome(not_has_role("5"), member)).passed
        assert (await outcome(not_has_role("5"), context_factory(guild_id=None))).passed

    def test_check_names(self):
        assert has_role("5").__name__ == "has_role(5)"
        assert not_has_role("5").__name__ == "not_has_role(5)"


@pytest.mark.unit
class TestLocationChecks:
    """Tests for guild, channel and user checks."""

    @pytest.mark.asyncio
    async def test_in_guild(self, context_factory):
        assert (await outcome(in_guild(), context_factory())).passed
        dm = await outcome(in_guild(), context_factory(guild_id=None))
        assert dm.message == "This command can only be used in a server."

    @pytest.mark.asyncio
    async def test_not_in_guild(self, context_factory):
        assert (await outcome(not_in_guild(), context_factory(guild_id=None))).passed
        assert not (await outcome(not_in_guild(), context_factory())).passed

    @pytest.mark.asyncio
    async def test_in_channel(self, ctx):
        assert (await outcome(in_channel("200"), ctx)).passed
        other = await outcome(in_channel(201), ctx)
        assert other.message == "This command can only be used in <#201>."

    @pytest.mark.asyncio
    async def test_is_user(self, ctx):
        assert (await outcome(is_user(["100"]), ctx)).passed
        denied = await outcome(is_user(["1"]), ctx)
        assert denied.message == "You are not allowed to use this command."

    @pytest.mark.asyncio
    async def test_is_user_custom_message(self, ctx):
        denied = await outcome(is_user([1], "checks.isOwner.failed"), ctx)

        assert denied.message == "Only the bot owners can use this command."

    @pytest.mark.asyncio
    async def test_is_owner_reads_owner_ids(self, ctx, monkeypatch):
        monkeypatch.setattr(settings.commands, "OWNER_IDS", '["100", "200"]')

        assert (await outcome(is_owner(), ctx)).passed

    @pytest.mark.asyncio
    async def test_is_owner_denies_others(self, ctx, monkeypatch):
        monkeypatch.setattr(settings.commands, "OWNER_IDS", "1,2")

        denied = await outcome(is_owner(), ctx)

        assert not denied.passed
        assert denied.message == "Only the bot owners can use this command."
