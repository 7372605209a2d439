"""Check context and runner."""

import inspect
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Sequence, Union

from infrastructure.commands.errors import CheckFailure
from infrastructure.logging import get_module_logger

if TYPE_CHECKING:
    from infrastructure.commands.context import CommandContext

logger = get_module_logger()


class CheckContext:
    """Outcome holder passed to a check.

    A check starts out passing; it calls ``fail()`` to reject the invocation
    and may call ``pass_()`` to state success explicitly.

    Example:
        def in_bot_channel(check: CheckContext) -> None:
            if check.context.channel_id != "42":
                check.fail(check.translate("checks.inChannel.failed", channel="<#42>"))
    """

    def __init__(self, context: "CommandContext"):
        self.context = context
        self.passed = True
        self.message: Optional[str] = None

    def pass_(self) -> None:
        self.passed = True
        self.message = None

    def fail(self, message: Optional[str] = None) -> None:
        self.passed = False
        self.message = message

    def translate(self, key: str, **variables) -> str:
        return self.context.translate(key, **variables)


Check = Callable[[CheckContext], Union[None, Awaitable[None]]]


def check_name(check: Any) -> str:
    return getattr(check, "__name__", type(check).__name__)


async def run_checks(checks: Sequence[Check], context: "CommandContext") -> None:
    """Run checks in order, stopping at the first failure.

    Raises:
        CheckFailure: With the failing check's message, or a generic message
            when it gave none
    """
    for check in checks:
        check_context = CheckContext(context)
        outcome = check(check_context)
        if inspect.isawaitable(outcome):
            await outcome

        if not check_context.passed:
            message = check_context.message or context.translate("checks.error.failed")
            logger.debug("check_failed", check=check_name(check), message=message)
            raise CheckFailure(message)

        logger.debug("check_passed", check=check_name(check))
