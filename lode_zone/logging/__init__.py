"""
Structured Logging for the zone engine
======================================

Bounded Context: Observability

JSON-structured logging with typed events.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from lode_zone.logging import StructuredLogger, LogEvent
    >>> logger = StructuredLogger(component="manager")
    >>> logger.info(
    ...     event=LogEvent.ZONES_INITIALIZED,
    ...     message="Initialized 13 zones",
    ...     metadata={'viewport': [1920, 1080]}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
