"""Invocation context binding for structured logging.

Binds correlation IDs and command metadata to every log entry made while
a command, interaction or event is being handled.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(correlation_id=ctx.correlation_id, command="ban"):
        logger.info("running_command")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    user_id: Optional[str] = None,
    guild_id: Optional[str] = None,
    channel_id: Optional[str] = None,
    command: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind invocation-scoped context to all logs within the context manager.

    Only non-None values are bound. The bound keys are removed again when the
    block exits, including on error.

    Args:
        correlation_id: Unique invocation identifier. Auto-generated if not provided.
        user_id: ID of the invoking user.
        guild_id: ID of the guild the invocation happened in.
        channel_id: ID of the channel the invocation happened in.
        command: Name of the command being run.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.

    Example:
        with bind_request_context(
            correlation_id=ctx.correlation_id,
            user_id=ctx.user_id,
            command=command.name,
            path="slash",
        ):
            await command.handler(ctx, **arguments)
    """
    fields = {
        "user_id": user_id,
        "guild_id": guild_id,
        "channel_id": channel_id,
        "command": command,
        **extra_context,
    }
    context = {key: value for key, value in fields.items() if value is not None}
    context["correlation_id"] = correlation_id or str(uuid.uuid4())

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID in the current logging context.

    Args:
        correlation_id: The correlation ID to set.
    """
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_request_context() -> None:
    """Clear all invocation-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
