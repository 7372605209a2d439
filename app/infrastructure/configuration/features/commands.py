"""Commands feature settings."""

import json
from typing import List

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings


class CommandsSettings(FeatureSettings):
    """Configuration for chat and slash command handling.

    Environment Variables:
        COMMAND_PREFIX: Prefix for chat commands (default: "!")
        MENTION_PREFIX: Whether mentioning the bot also works as a prefix
        BOT_USER_ID: The bot's own user ID, used for mention prefixes
        DEFAULT_LOCALE: Locale used when the platform does not provide one
        OWNER_IDS: JSON list or comma-separated string of bot owner user IDs

    Example:
        ```python
        from infrastructure.configuration import settings

        prefix = settings.commands.COMMAND_PREFIX
        if user_id in settings.commands.owner_ids:
            ...
        ```
    """

    COMMAND_PREFIX: str = Field(default="!", alias="COMMAND_PREFIX")
    MENTION_PREFIX: bool = Field(default=True, alias="MENTION_PREFIX")
    BOT_USER_ID: str = Field(default="", alias="BOT_USER_ID")
    DEFAULT_LOCALE: str = Field(default="en-US", alias="DEFAULT_LOCALE")
    OWNER_IDS: str = Field(default="", alias="OWNER_IDS")

    @field_validator("COMMAND_PREFIX")
    @classmethod
    def _validate_prefix(cls, v: str) -> str:
        """Reject prefixes that are empty or contain whitespace."""
        if not v or any(c.isspace() for c in v):
            raise ValueError("COMMAND_PREFIX must be non-empty and contain no spaces")
        return v

    @property
    def owner_ids(self) -> List[str]:
        """Owner user IDs parsed from OWNER_IDS.

        Accepts a JSON list (``["1", "2"]``) or a comma-separated string
        (``1,2``).

        Raises:
            ValueError: If OWNER_IDS looks like JSON but cannot be parsed.
        """
        s = self.OWNER_IDS.strip()
        if not s:
            return []
        if s.startswith("["):
            try:
                return [str(item) for item in json.loads(s)]
            except (json.JSONDecodeError, ValueError) as e:
                raise ValueError(
                    f"Invalid OWNER_IDS JSON: {e} (value: {s[:80]}...)"
                ) from e
        return [part.strip() for part in s.split(",") if part.strip()]
