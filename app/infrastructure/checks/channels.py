"""Location and user checks."""

from typing import Iterable, Optional

from infrastructure.checks.context import Check, CheckContext
from infrastructure.configuration import settings


def in_guild() -> Check:
    def check(check_context: CheckContext) -> None:
        if check_context.context.guild_id is None:
            check_context.fail(check_context.translate("checks.inGuild.failed"))

    check.__name__ = "in_guild"
    return check


def not_in_guild() -> Check:
    def check(check_context: CheckContext) -> None:
        if check_context.context.guild_id is not None:
            check_context.fail(check_context.translate("checks.notInGuild.failed"))

    check.__name__ = "not_in_guild"
    return check


def in_channel(channel_id: str) -> Check:
    def check(check_context: CheckContext) -> None:
        if check_context.context.channel_id != str(channel_id):
            check_context.fail(
                check_context.translate("checks.inChannel.failed", channel=f"<#{channel_id}>")
            )

    check.__name__ = f"in_channel({channel_id})"
    return check


def is_user(user_ids: Iterable[str], message_key: Optional[str] = None) -> Check:
    """Pass when the invoking user is one of ``user_ids``.

    Example:
        is_user(["1234", "5678"], "checks.isOwner.failed")
    """
    allowed = {str(user_id) for user_id in user_ids}

    def check(check_context: CheckContext) -> None:
        if check_context.context.user_id not in allowed:
            check_context.fail(check_context.translate(message_key or "checks.isUser.failed"))

    check.__name__ = "is_user"
    return check


def is_owner() -> Check:
    """Pass when the invoking user is listed in ``OWNER_IDS``.

    The owner list is read from settings on every run.
    """

    def check(check_context: CheckContext) -> None:
        if check_context.context.user_id not in settings.commands.owner_ids:
            check_context.fail(check_context.translate("checks.isOwner.failed"))

    check.__name__ = "is_owner"
    return check
