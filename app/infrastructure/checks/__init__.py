"""Command checks.

A check is a sync or async callable receiving a CheckContext. Checks run
before argument parsing; the first failure stops the command.
"""

from infrastructure.checks.channels import (
    in_channel,
    in_guild,
    is_owner,
    is_user,
    not_in_guild,
)
from infrastructure.checks.context import Check, CheckContext, run_checks
from infrastructure.checks.roles import has_role, not_has_role

__all__ = [
    "Check",
    "CheckContext",
    "run_checks",
    "has_role",
    "not_has_role",
    "in_guild",
    "not_in_guild",
    "in_channel",
    "is_user",
    "is_owner",
]
