"""Command framework exceptions.

Two families:
    - RelayedError and its subclasses carry a user-facing message that the
      dispatcher sends back as the command reply.
    - ConfigurationError signals a programming or registration mistake and is
      never shown to users.
"""

from typing import Optional


class RelayedError(Exception):
    """Error whose message is relayed to the user who ran the command.

    Example:
        raise RelayedError(ctx.translate("converters.int.error.invalid", value="abc"))
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RelayedError):
    """A converter validator rejected a parsed value."""


class CheckFailure(RelayedError):
    """A command check failed.

    The message may be empty, in which case a generic failure message is used.
    """

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "")


class ConfigurationError(Exception):
    """Invalid command, argument or converter setup.

    Raised at construction or registration time, before any user input is
    parsed.

    Example:
        UnionConverter([IntConverter().to_optional(), StringConverter()])
        # ConfigurationError: optional converters must be the last union candidate
    """
