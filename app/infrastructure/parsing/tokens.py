"""Token models produced by the chat command lexer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    """A single lexed piece of command input.

    Attributes:
        data: Token value with quotes removed and escapes processed
        start: Offset of the first character in the parser input
        end: Offset one past the last character in the parser input
    """

    data: str
    start: int = 0
    end: int = 0

    @property
    def text(self) -> str:
        """Token rendered as a single positional string."""
        return self.data

    @property
    def is_named(self) -> bool:
        return False


@dataclass(frozen=True)
class PositionalArgumentToken(Token):
    """Plain token with no name attached."""


@dataclass(frozen=True)
class NamedArgumentToken(Token):
    """Token written as ``name:value`` or ``name=value``.

    Example:
        ``reason="two words"`` lexes to
        ``NamedArgumentToken(data="two words", name="reason", separator="=")``
    """

    name: str = ""
    separator: str = ":"

    @property
    def text(self) -> str:
        return f"{self.name}{self.separator}{self.data}"

    @property
    def is_named(self) -> bool:
        return True
