"""Chat command tokenization.

Exports:
    StringParser: Cursor-based lexer with mark/restore checkpoints
    Token: Base token model
    PositionalArgumentToken: Token without a name
    NamedArgumentToken: ``name:value`` / ``name=value`` token
"""

from infrastructure.parsing.parser import StringParser
from infrastructure.parsing.tokens import (
    NamedArgumentToken,
    PositionalArgumentToken,
    Token,
)

__all__ = [
    "StringParser",
    "Token",
    "PositionalArgumentToken",
    "NamedArgumentToken",
]
