"""
Structured JSON Logger
======================

Bounded Context: Observability of the zone engine

One JSON object per line, one logger per engine component:

    lode_zone.manager     zone.*, error.invalid_state
    lode_zone.responsive  viewport.*, device.*

Design:
- Level checked before the entry is built (DEBUG events such as unknown
  zone ids fire on the placement path)
- Metadata stays JSON-native (viewport as [w, h], zone id lists, rounded
  balance scores); anything else is stringified
- UTC ISO timestamps
- ERROR entries carry the exception type/message and the traceback

Example (rebalance after a cluster on the center zone):
    >>> logger = StructuredLogger(component="manager")
    >>> logger.info(
    ...     event=LogEvent.REBALANCE_TRIGGERED,
    ...     message="Rebalanced 1 zone(s)",
    ...     metadata={'zones': ['center'], 'balance_score': 0.0769}
    ... )

Output:
    {
        "timestamp": "2025-10-24T15:30:45.123456+00:00",
        "level": "INFO",
        "component": "manager",
        "event": "zone.rebalance.triggered",
        "message": "Rebalanced 1 zone(s)",
        "metadata": {"zones": ["center"], "balance_score": 0.0769}
    }
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from .events import LogEvent


class StructuredLogger:
    """
    JSON structured logger for the zone engine.

    Wraps Python's logging module with structured metadata support.

    Attributes:
        component: Component name (e.g., "manager", "responsive")
        logger: Underlying Python logger instance

    Thread Safety:
        Thread-safe via Python's logging module.
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component identifier (e.g., "manager")
            level: Logging level (default: INFO)
            logger_name: Custom logger name (default: lode_zone.<component>)
        """
        self.component = component
        self.logger_name = logger_name or f"lode_zone.{component}"
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _log(
        self,
        level: str,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[Exception] = None
    ) -> None:
        """
        Internal log method with structured format.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            event: Typed log event
            message: Human-readable message
            metadata: Additional context (zone_id, viewport, etc.)
            exc_info: Exception for ERROR logs
        """
        log_level = getattr(logging, level)
        if not self.logger.isEnabledFor(log_level):
            return

        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level,
            'component': self.component,
            'event': event.value,
            'message': message,
        }

        if metadata:
            log_entry['metadata'] = metadata

        if exc_info:
            log_entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info)
            }

        self.logger.log(
            log_level,
            json.dumps(log_entry, default=str),
            exc_info=exc_info if level == 'ERROR' else None
        )

    def debug(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log DEBUG level message (high-frequency events such as ignored zone ids)."""
        self._log('DEBUG', event, message, metadata)

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log INFO level message.

        Example:
            >>> logger.info(
            ...     event=LogEvent.REBALANCE_TRIGGERED,
            ...     message="Damped 2 zones",
            ...     metadata={'zones': ['center', 'center-top']}
            ... )
        """
        self._log('INFO', event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log WARNING level message."""
        self._log('WARNING', event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[Exception] = None
    ) -> None:
        """
        Log ERROR level message.

        Args:
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception instance for traceback
        """
        self._log('ERROR', event, message, metadata, exc_info)

    def set_level(self, level: int) -> None:
        """Change logging level dynamically."""
        self.logger.setLevel(level)


class JSONFormatter(logging.Formatter):
    """
    Formatter that passes through the JSON produced by StructuredLogger.
    """

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def create_logger(
    component: str,
    level: int = logging.INFO
) -> StructuredLogger:
    """
    Factory function to create configured StructuredLogger.

    Example:
        >>> logger = create_logger("manager", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
