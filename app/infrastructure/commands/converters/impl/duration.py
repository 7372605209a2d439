"""Duration converter."""

import re
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from infrastructure.commands.converters.base import (
    SingleConverter,
    Validator,
    invalid_value,
)

if TYPE_CHECKING:
    from infrastructure.commands.context import CommandContext

UNIT_SECONDS = {
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "week": 604800,
    "weeks": 604800,
}

_PART = re.compile(r"(\d+)([a-z]+)")


class DurationConverter(SingleConverter):
    """Compact duration such as ``1w2d``, ``90m`` or ``1h30m``.

    Example:
        "1h30m" resolves to timedelta(hours=1, minutes=30)
    """

    signature_type = "converters.duration.signatureType"

    def __init__(
        self,
        positive_only: bool = True,
        max_duration: Optional[timedelta] = None,
        validator: Optional[Validator] = None,
    ):
        super().__init__(validator)
        self.positive_only = positive_only
        self.max_duration = max_duration

    async def convert_text(self, text: str, context: "CommandContext") -> timedelta:
        normalized = text.strip().lower()
        position = 0
        seconds = 0

        while position < len(normalized):
            match = _PART.match(normalized, position)
            if not match or match.group(2) not in UNIT_SECONDS:
                raise invalid_value(
                    context, "converters.duration.error.invalid", value=text
                )
            seconds += int(match.group(1)) * UNIT_SECONDS[match.group(2)]
            position = match.end()

        if position == 0:
            raise invalid_value(context, "converters.duration.error.invalid", value=text)

        try:
            duration = timedelta(seconds=seconds)
        except OverflowError:
            raise invalid_value(
                context,
                "converters.duration.error.tooLong",
                value=text,
                max=str(self.max_duration or timedelta.max),
            ) from None
        if self.positive_only and duration <= timedelta(0):
            raise invalid_value(
                context, "converters.duration.error.positiveOnly", value=text
            )
        if self.max_duration is not None and duration > self.max_duration:
            raise invalid_value(
                context,
                "converters.duration.error.tooLong",
                value=text,
                max=str(self.max_duration),
            )
        return duration
