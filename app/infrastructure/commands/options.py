"""Slash command option schema and interaction option values."""

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from infrastructure.commands.errors import ConfigurationError

MAX_OPTIONS = 25
MAX_CHOICES = 25
MAX_NAME_LENGTH = 32
MAX_DESCRIPTION_LENGTH = 100
MAX_STRING_LENGTH = 6000

_OPTION_NAME = re.compile(r"^[-_a-z0-9]{1,32}$")


class OptionType(IntEnum):
    """Application command option types, using the platform's wire values."""

    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11


def validate_option_name(name: str) -> str:
    """Check a command or option name against slash naming rules.

    Raises:
        ConfigurationError: If the name is not 1-32 lowercase ``[-_a-z0-9]``
    """
    if not _OPTION_NAME.match(name or ""):
        raise ConfigurationError(
            f"Invalid name {name!r}: expected 1-{MAX_NAME_LENGTH} lowercase "
            "letters, digits, '-' or '_'"
        )
    return name


def validate_context_menu_name(name: str) -> str:
    """Check a user or message command name.

    These names are shown in the context menu as is, so spaces and capitals
    are allowed.

    Raises:
        ConfigurationError: If the name is blank, padded or longer than 32
            characters
    """
    if not name or name != name.strip() or len(name) > MAX_NAME_LENGTH:
        raise ConfigurationError(
            f"Invalid context menu name {name!r}: expected 1-{MAX_NAME_LENGTH} "
            "characters without leading or trailing spaces"
        )
    return name


def validate_description(description: str) -> str:
    if not description or len(description) > MAX_DESCRIPTION_LENGTH:
        raise ConfigurationError(
            f"Invalid description {description!r}: expected 1-"
            f"{MAX_DESCRIPTION_LENGTH} characters"
        )
    return description


class OptionChoice(BaseModel):
    """Fixed value offered to the user for an option."""

    name: str
    value: Union[str, int, float]

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


class SlashOption(BaseModel):
    """Registration schema of a single slash command option.

    Example:
        SlashOption(
            name="days",
            description="Days of messages to delete",
            type=OptionType.INTEGER,
            required=False,
            min_value=0,
            max_value=7,
        ).to_payload()
        # {"name": "days", "description": "...", "type": 4, "required": False,
        #  "min_value": 0, "max_value": 7}
    """

    name: str
    description: str
    type: OptionType
    required: bool = True
    min_value: Optional[Union[int, float]] = None
    max_value: Optional[Union[int, float]] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    choices: List[OptionChoice] = Field(default_factory=list)
    autocomplete: bool = False
    options: List["SlashOption"] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_option_name(value)

    @field_validator("description")
    @classmethod
    def _check_description(cls, value: str) -> str:
        return validate_description(value)

    @field_validator("choices")
    @classmethod
    def _check_choices(cls, value: List[OptionChoice]) -> List[OptionChoice]:
        if len(value) > MAX_CHOICES:
            raise ConfigurationError(
                f"At most {MAX_CHOICES} choices are allowed, got {len(value)}"
            )
        return value

    @field_validator("min_length", "max_length")
    @classmethod
    def _check_length(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and not 0 <= value <= MAX_STRING_LENGTH:
            raise ConfigurationError(
                f"String length bounds must be within 0-{MAX_STRING_LENGTH}"
            )
        return value

    @model_validator(mode="after")
    def _check_combination(self) -> "SlashOption":
        if self.choices and self.autocomplete:
            raise ConfigurationError(
                f"Option {self.name!r} cannot combine choices with autocomplete"
            )
        if len(self.options) > MAX_OPTIONS:
            raise ConfigurationError(
                f"Option {self.name!r} has more than {MAX_OPTIONS} nested options"
            )
        return self

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "type": int(self.type),
        }
        if self.type not in (OptionType.SUB_COMMAND, OptionType.SUB_COMMAND_GROUP):
            payload["required"] = self.required

        for key in ("min_value", "max_value", "min_length", "max_length"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value

        if self.choices:
            payload["choices"] = [choice.to_payload() for choice in self.choices]
        if self.autocomplete:
            payload["autocomplete"] = True
        if self.options:
            payload["options"] = [option.to_payload() for option in self.options]
        return payload


@dataclass
class OptionValue:
    """Option value received with a slash command interaction.

    Attributes:
        name: Option name
        type: Option type
        value: Raw value as sent by the platform
        resolved: Resolved entity payload for user, channel, role and
            attachment options, when the interaction carried one
    """

    name: str
    type: OptionType
    value: Any
    resolved: Optional[Dict[str, Any]] = None

    @classmethod
    def from_payload(
        cls, payload: Mapping[str, Any], resolved: Optional[Mapping[str, Any]] = None
    ) -> "OptionValue":
        option_type = OptionType(payload["type"])
        value = payload.get("value")
        entity = None
        if resolved and value is not None:
            bucket = _RESOLVED_BUCKETS.get(option_type)
            if bucket:
                entity = resolved.get(bucket, {}).get(str(value))
        return cls(name=payload["name"], type=option_type, value=value, resolved=entity)


_RESOLVED_BUCKETS = {
    OptionType.USER: "users",
    OptionType.CHANNEL: "channels",
    OptionType.ROLE: "roles",
    OptionType.ATTACHMENT: "attachments",
}


def options_from_payload(
    options: Sequence[Mapping[str, Any]],
    resolved: Optional[Mapping[str, Any]] = None,
) -> Dict[str, OptionValue]:
    """Build option values keyed by lowercase option name."""
    return {
        option["name"].lower(): OptionValue.from_payload(option, resolved)
        for option in options
    }
