"""Cursor-based lexer for chat command input.

Grammar:
    - Whitespace separates tokens.
    - A backslash escapes the next character. A trailing backslash is literal.
    - ``"..."`` and ``'...'`` group text into one token. An unterminated quote
      is kept literally up to the end of the input.
    - ``name:value`` / ``name=value`` (name made of letters, digits and
      underscores, value not starting with whitespace) is a named token.
"""

import re
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from infrastructure.parsing.tokens import (
    NamedArgumentToken,
    PositionalArgumentToken,
    Token,
)

QUOTES = ('"', "'")
ESCAPE = "\\"

_NAMED_PREFIX = re.compile(r"([A-Za-z0-9_]+)([:=])")


class StringParser:
    """Lex command text one token at a time.

    The parser keeps a cursor into its input and a stack of checkpoints so
    callers can speculatively consume tokens and rewind on failure.

    Example:
        parser = StringParser('ban 1234 reason="spam links"')

        parser.parse_next().text   # "ban"
        parser.mark()
        parser.parse_next().text   # "1234"
        parser.restore()
        parser.parse_next().text   # "1234" again
        parser.parse_next()        # NamedArgumentToken(name="reason", ...)
        parser.parse_next()        # None
    """

    def __init__(self, text: str):
        self.input = text or ""
        self._cursor = 0
        self._checkpoints: List[int] = []

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.parse_next()
            if token is None:
                return
            yield token

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def remaining(self) -> str:
        """Unconsumed input, as written."""
        return self.input[self._cursor :]

    @property
    def has_next(self) -> bool:
        return self._skip_whitespace(self._cursor) < len(self.input)

    def parse_next(self) -> Optional[Token]:
        """Consume and return the next token, or None when exhausted."""
        lexed = self._lex(self._cursor)
        if lexed is None:
            self._cursor = len(self.input)
            return None

        token, end = lexed
        self._cursor = end
        return token

    def peek_next(self) -> Optional[Token]:
        """Return the next token without consuming it."""
        lexed = self._lex(self._cursor)
        return lexed[0] if lexed else None

    def mark(self) -> None:
        """Push a checkpoint at the current cursor."""
        self._checkpoints.append(self._cursor)

    def restore(self) -> None:
        """Pop the latest checkpoint and rewind the cursor to it."""
        if not self._checkpoints:
            raise RuntimeError("restore() called without a matching mark()")
        self._cursor = self._checkpoints.pop()

    def commit(self) -> None:
        """Pop the latest checkpoint, keeping the current cursor."""
        if not self._checkpoints:
            raise RuntimeError("commit() called without a matching mark()")
        self._checkpoints.pop()

    def consume_remaining(self) -> str:
        """Consume everything left, returned stripped and unprocessed."""
        rest = self.remaining.strip()
        self._cursor = len(self.input)
        return rest

    def extract_named(self, names: Iterable[str]) -> Dict[str, List[str]]:
        """Remove named tokens for the given names from the unconsumed input.

        Args:
            names: Argument names to pull out, matched case-insensitively

        Returns:
            Values keyed by lowercase name, in input order
        """
        if self._checkpoints:
            raise RuntimeError("extract_named() cannot run with active checkpoints")

        wanted = {name.lower() for name in names}
        extracted: Dict[str, List[str]] = {}
        if not wanted:
            return extracted

        pieces: List[str] = []
        last = self._cursor
        position = self._cursor

        while True:
            lexed = self._lex(position)
            if lexed is None:
                break

            token, position = lexed
            if isinstance(token, NamedArgumentToken) and token.name.lower() in wanted:
                pieces.append(self.input[last : token.start])
                pieces.append(" ")
                last = token.end
                extracted.setdefault(token.name.lower(), []).append(token.data)

        if extracted:
            pieces.append(self.input[last:])
            self.input = self.input[: self._cursor] + "".join(pieces)

        return extracted

    def _skip_whitespace(self, position: int) -> int:
        while position < len(self.input) and self.input[position].isspace():
            position += 1
        return position

    def _lex(self, position: int) -> Optional[Tuple[Token, int]]:
        start = self._skip_whitespace(position)
        if start >= len(self.input):
            return None

        match = _NAMED_PREFIX.match(self.input, start)
        if match:
            value_start = match.end()
            if value_start < len(self.input) and not self.input[value_start].isspace():
                data, end = self._read_value(value_start)
                token = NamedArgumentToken(
                    data=data,
                    start=start,
                    end=end,
                    name=match.group(1),
                    separator=match.group(2),
                )
                return token, end

        data, end = self._read_value(start)
        return PositionalArgumentToken(data=data, start=start, end=end), end

    def _read_value(self, position: int) -> Tuple[str, int]:
        if self.input[position] in QUOTES:
            return self._read_quoted(position)
        return self._read_bare(position)

    def _read_quoted(self, position: int) -> Tuple[str, int]:
        quote = self.input[position]
        chars: List[str] = []
        index = position + 1

        while index < len(self.input):
            char = self.input[index]
            if char == ESCAPE and index + 1 < len(self.input):
                chars.append(self.input[index + 1])
                index += 2
                continue
            if char == quote:
                return "".join(chars), index + 1
            chars.append(char)
            index += 1

        # Unterminated: keep the opening quote and everything after it
        return quote + "".join(chars), len(self.input)

    def _read_bare(self, position: int) -> Tuple[str, int]:
        chars: List[str] = []
        index = position

        while index < len(self.input) and not self.input[index].isspace():
            char = self.input[index]
            if char == ESCAPE and index + 1 < len(self.input):
                chars.append(self.input[index + 1])
                index += 2
                continue
            chars.append(char)
            index += 1

        return "".join(chars), index
