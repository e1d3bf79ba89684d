"""
Structured logging configuration using structlog.

The outfit engine only emits debug-level traces (slot plans, picks,
swaps) and warnings from the variation retry loop. Callers decide where
they go by configuring logging once at startup.

Usage:
    from core.logging import configure_logging, get_logger

    configure_logging(json_logs=False)  # Development
    configure_logging(json_logs=True)   # Production

    logger = get_logger(__name__)
    logger.debug("Slot filled", slot=Slot.SHIRT, item_id="abc")
"""

import logging
import sys
from enum import Enum
from typing import Any, List, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from config.settings import Settings

# Parent of every engine component logger
ENGINE_LOGGER_NAME = "outfit_engine"

# Silent until the application configures logging
logging.getLogger(ENGINE_LOGGER_NAME).addHandler(logging.NullHandler())


def render_enum_values(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Log ``Slot.SHIRT`` as ``"shirt"``, including inside lists."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
        elif isinstance(value, (list, tuple)) and any(isinstance(v, Enum) for v in value):
            event_dict[key] = [v.value if isinstance(v, Enum) else v for v in value]
    return event_dict


def _processors(json_logs: bool, include_timestamp: bool) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        render_enum_values,
        structlog.processors.StackInfoRenderer(),
    ]
    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    if json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    return processors


def configure_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    include_timestamp: bool = True,
) -> None:
    """
    Configure structlog and the stdlib root logger it writes through.

    Args:
        json_logs: One JSON object per line instead of console output
        log_level: Minimum level; engine traces need DEBUG to show
        include_timestamp: Prefix every event with a UTC ISO timestamp
    """
    structlog.configure(
        processors=_processors(json_logs, include_timestamp),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
        force=True,
    )


def configure_logging_from_settings(settings: Settings) -> None:
    """Configure logging from the ``log_level``/``json_logs`` settings."""
    configure_logging(json_logs=settings.json_logs, log_level=settings.log_level)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Structured logger, typically ``get_logger(__name__)``.

    Events always go through the stdlib logger of that name, so its level
    and handlers decide what is emitted, configured or not.
    """
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger,
    )


def bind_context(**kwargs: Any) -> None:
    """
    Tag every following event in this context, e.g. all attempts of one
    variation search: ``bind_context(base_seed="today", target="smart")``.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


class LoggerMixin:
    """
    Logger named after the concrete class, under ``outfit_engine``.

        class SwapEngine(LoggerMixin):
            def swap_item(self, ...):
                self.logger.debug("Item swapped", slot=slot)
    """

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        return get_logger(f"{ENGINE_LOGGER_NAME}.{self.__class__.__name__}")
