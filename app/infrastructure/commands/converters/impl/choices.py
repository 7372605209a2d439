"""Converters restricted to a fixed set of values."""

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Sequence, Type, Union

from infrastructure.commands.converters.base import (
    SingleConverter,
    Validator,
    invalid_value,
)
from infrastructure.commands.errors import ConfigurationError
from infrastructure.commands.options import MAX_CHOICES, OptionChoice

if TYPE_CHECKING:
    from infrastructure.commands.context import CommandContext


class EnumConverter(SingleConverter):
    """Member of an Enum, matched by name or value, case-insensitively.

    Example:
        class Severity(Enum):
            LOW = "low"
            HIGH = "high"

        EnumConverter(Severity) accepts "high", "HIGH" and "High"
    """

    signature_type = "converters.enum.signatureType"

    def __init__(self, enum_type: Type[Enum], validator: Optional[Validator] = None):
        super().__init__(validator)
        self.enum_type = enum_type
        self._lookup: Dict[str, Enum] = {}
        for member in enum_type:
            self._lookup.setdefault(member.name.lower(), member)
            self._lookup.setdefault(str(member.value).lower(), member)

    def __repr__(self) -> str:
        return f"EnumConverter({self.enum_type.__name__})"

    async def convert_text(self, text: str, context: "CommandContext") -> Enum:
        member = self._lookup.get(text.strip().lower())
        if member is None:
            raise invalid_value(
                context,
                "converters.enum.error.invalid",
                value=text,
                choices=", ".join(str(m.value) for m in self.enum_type),
            )
        return member

    def option_kwargs(self) -> dict:
        members = list(self.enum_type)
        if len(members) > MAX_CHOICES:
            return {}
        return {
            "choices": [
                OptionChoice(name=member.name.lower(), value=str(member.value))
                for member in members
            ]
        }


class StringChoiceConverter(SingleConverter):
    """One of a fixed set of strings.

    Choices map display names to values; a plain sequence uses each string
    as both.
    """

    signature_type = "converters.choice.signatureType"

    def __init__(
        self,
        choices: Union[Mapping[str, str], Sequence[str]],
        validator: Optional[Validator] = None,
    ):
        super().__init__(validator)
        if isinstance(choices, Mapping):
            self.choices: Dict[str, str] = dict(choices)
        else:
            self.choices = {choice: choice for choice in choices}

        if not self.choices:
            raise ConfigurationError("StringChoiceConverter needs at least one choice")
        if len(self.choices) > MAX_CHOICES:
            raise ConfigurationError(
                f"At most {MAX_CHOICES} choices are allowed, got {len(self.choices)}"
            )

    async def convert_text(self, text: str, context: "CommandContext") -> Any:
        needle = text.strip().lower()
        for name, value in self.choices.items():
            if needle in (name.lower(), str(value).lower()):
                return value
        raise invalid_value(
            context,
            "converters.choice.error.invalid",
            value=text,
            choices=", ".join(self.choices),
        )

    def option_kwargs(self) -> dict:
        return {
            "choices": [
                OptionChoice(name=name, value=value) for name, value in self.choices.items()
            ]
        }
