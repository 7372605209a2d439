"""Role-based checks."""

from infrastructure.checks.context import Check, CheckContext
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def has_role(role_id: str) -> Check:
    """Pass when the invoking member has the given role.

    Fails outside guilds, where there is no member.
    """

    def check(check_context: CheckContext) -> None:
        context = check_context.context
        if context.guild_id is None:
            logger.debug("has_role_no_member", role_id=role_id)
            check_context.fail()
            return

        if str(role_id) in context.member_role_ids:
            check_context.pass_()
        else:
            check_context.fail(
                check_context.translate("checks.hasRole.failed", role=f"<@&{role_id}>")
            )

    check.__name__ = f"has_role({role_id})"
    return check


def not_has_role(role_id: str) -> Check:
    """Pass when the invoking member does not have the given role.

    Passes outside guilds, where there is no member.
    """

    def check(check_context: CheckContext) -> None:
        context = check_context.context
        if context.guild_id is None:
            logger.debug("not_has_role_no_member", role_id=role_id)
            check_context.pass_()
            return

        if str(role_id) in context.member_role_ids:
            check_context.fail(
                check_context.translate("checks.notHasRole.failed", role=f"<@&{role_id}>")
            )
        else:
            check_context.pass_()

    check.__name__ = f"not_has_role({role_id})"
    return check
