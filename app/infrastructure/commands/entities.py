"""Platform entity value types produced by converters."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

# Discord epoch (2015-01-01T00:00:00Z) in milliseconds
SNOWFLAKE_EPOCH_MS = 1420070400000
MAX_SNOWFLAKE = 2**64 - 1


@dataclass(frozen=True, order=True)
class Snowflake:
    """Unique 64-bit platform identifier.

    Example:
        Snowflake.parse("175928847299117063").timestamp
        # datetime(2016, 4, 30, 11, 18, 25, 796000, tzinfo=timezone.utc)
    """

    value: int

    def __post_init__(self):
        if not 0 <= self.value <= MAX_SNOWFLAKE:
            raise ValueError(f"Snowflake out of range: {self.value}")

    @classmethod
    def parse(cls, text: str) -> "Snowflake":
        """Parse a decimal snowflake string.

        Raises:
            ValueError: If the text is not an unsigned decimal in range
        """
        text = text.strip()
        if not text.isdigit() or not text.isascii():
            raise ValueError(f"Not a snowflake: {text!r}")
        return cls(int(text))

    @property
    def timestamp(self) -> datetime:
        milliseconds = (self.value >> 22) + SNOWFLAKE_EPOCH_MS
        return datetime.fromtimestamp(milliseconds / 1000, tz=timezone.utc)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


class MentionType(Enum):
    USER = "user"
    ROLE = "role"
    CHANNEL = "channel"


@dataclass(frozen=True)
class Mention:
    """A user, role or channel reference such as ``<@123>`` or ``<#456>``."""

    type: MentionType
    id: Snowflake

    def __str__(self) -> str:
        if self.type is MentionType.ROLE:
            return f"<@&{self.id}>"
        if self.type is MentionType.CHANNEL:
            return f"<#{self.id}>"
        return f"<@{self.id}>"


@dataclass(frozen=True)
class ForumTag:
    """Tag available on a forum channel."""

    id: Snowflake
    name: str
    moderated: bool = False
    emoji: Optional[str] = None


@dataclass(frozen=True)
class Attachment:
    """File uploaded alongside a slash command."""

    id: Snowflake
    filename: str
    url: str
    size: int = 0
    content_type: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "Attachment":
        return cls(
            id=Snowflake.parse(str(payload["id"])),
            filename=payload.get("filename", ""),
            url=payload.get("url", ""),
            size=int(payload.get("size", 0)),
            content_type=payload.get("content_type"),
        )
