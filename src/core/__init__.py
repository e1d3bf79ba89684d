"""
Core module for cross-cutting concerns.

This module provides structured logging configuration.
"""

from core.logging import (
    LoggerMixin,
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
    unbind_context,
)

__all__ = [
    "LoggerMixin",
    "bind_context",
    "clear_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "unbind_context",
]
