"""Structlog configuration for the bot.

Development runs render to the console, production runs emit JSON lines.
Invocation metadata bound with ``bind_request_context`` is merged into every
event through ``structlog.contextvars``.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("extension_loaded", extension="moderation")
"""

import inspect
import logging
import sys
from typing import Any, Callable, List, Optional, Sequence

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.configuration import settings
from infrastructure.logging.formatters import (
    mask_sensitive_data,
    truncate_large_values,
)

Processor = Callable[..., Any]

# Level used to silence the stdlib root logger under pytest
SILENT_LEVEL = logging.CRITICAL + 1


def _running_under_pytest() -> bool:
    return "pytest" in sys.modules


def _base_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        mask_sensitive_data(),
        truncate_large_values(),
    ]


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
    extra_processors: Optional[Sequence[Processor]] = None,
) -> BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Level name overriding ``settings.LOG_LEVEL``.
        is_production: Overrides ``settings.is_production``; selects the
            JSON renderer when true.
        extra_processors: Processors inserted before the renderer
            (e.g. ``add_app_info(...)``).

    Returns:
        The root bot logger.
    """
    if _running_under_pytest():
        processors: List[Processor] = [
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]
        level = SILENT_LEVEL
        logging.root.setLevel(level)
    else:
        production = settings.is_production if is_production is None else is_production
        processors = _base_processors()
        processors.extend(extra_processors or [])
        processors.append(
            structlog.processors.JSONRenderer()
            if production
            else structlog.dev.ConsoleRenderer()
        )
        level_name = (log_level or settings.LOG_LEVEL).upper()
        level = getattr(logging, level_name, logging.INFO)

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=level == SILENT_LEVEL)

    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def _caller_module_name(depth: int) -> Optional[str]:
    """Name of the module ``depth`` frames above the caller, if any."""
    frame = inspect.currentframe()
    for _ in range(depth + 1):
        if frame is None:
            return None
        frame = frame.f_back
    if frame is None:
        return None
    module = inspect.getmodule(frame)
    return module.__name__ if module else None


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Logger bound to ``logger_name``, defaulting to the calling module."""
    return logger.bind(logger_name=name or _caller_module_name(1) or "unknown")


def get_module_logger() -> BoundLogger:
    """Logger for the calling module.

    Binds ``component`` (last module path segment) and ``module_path``, so
    ``infrastructure.commands.dispatcher`` logs as component ``dispatcher``.
    """
    module_name = _caller_module_name(1)
    if module_name is None:
        return logger.bind(component="unknown")
    return logger.bind(component=module_name.rsplit(".", 1)[-1], module_path=module_name)
