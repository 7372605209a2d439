"""Structlog processors for the bot's logging pipeline.

Each factory returns a ``(logger, method_name, event_dict)`` processor that
can be passed to ``configure_logging(extra_processors=...)``.
"""

from typing import Any, Callable, Dict, FrozenSet, Optional

EventDict = Dict[str, Any]
Processor = Callable[[Any, str, EventDict], EventDict]

# Substrings that mark a key as sensitive (bot tokens, webhook URLs, ...)
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "apikey",
        "authorization",
        "credential",
        "webhook_url",
        "private_key",
    }
)


def add_app_info(app_name: str, app_version: str = "unknown") -> Processor:
    """Stamp every event with ``app_name`` and ``app_version``.

    Example:
        configure_logging(
            extra_processors=[add_app_info("extensible-bot", settings.GIT_SHA)]
        )
    """

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.update(app_name=app_name, app_version=app_version)
        return event_dict

    return processor


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: Optional[FrozenSet[str]] = None,
) -> Processor:
    """Replace the values of sensitive keys with ``mask_value``.

    Keys are matched case-insensitively by substring, so ``bot_token`` and
    ``Authorization`` are both masked. ``None`` values are left alone.
    """
    patterns = SENSITIVE_PATTERNS | (additional_patterns or frozenset())

    def _sensitive(key: str) -> bool:
        lowered = key.lower()
        return any(pattern in lowered for pattern in patterns)

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        return {
            key: mask_value if value is not None and _sensitive(key) else value
            for key, value in event_dict.items()
        }

    return processor


def truncate_large_values(max_length: int = 500) -> Processor:
    """Cut string values longer than ``max_length``.

    Message content is user-controlled, so a single long chat message would
    otherwise end up verbatim in every related event.
    """

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = f"{value[:max_length]}...[truncated, {len(value)} chars total]"
        return event_dict

    return processor
