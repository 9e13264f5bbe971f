"""
Operator Event Log

In-memory, newest-first list of operator-facing system events (activation,
sensitivity changes, detections, locks, alerts). Every event is mirrored to the
standard logging module so headless runs get the same trail on stderr.
"""

import itertools
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event severities shown in the system log panel."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


_LOG_LEVELS = {
    EventType.INFO: logging.INFO,
    EventType.SUCCESS: logging.INFO,
    EventType.WARNING: logging.WARNING,
    EventType.ERROR: logging.ERROR,
}


@dataclass
class LogEvent:
    """Single operator event."""

    id: str
    timestamp: float
    type: EventType
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "type": self.type.value,
            "message": self.message,
        }


class EventLog:
    """Bounded newest-first event list."""

    def __init__(self, max_events: int = 200, clock: Callable[[], float] = time.time):
        """
        Args:
            max_events: Oldest events beyond this count are dropped
            clock: Timestamp source when add() is called without one
        """
        self.max_events = max_events
        self.clock = clock
        self._events: List[LogEvent] = []
        self._ids = itertools.count(1)

    def add(self, event_type: EventType, message: str, timestamp: Optional[float] = None) -> LogEvent:
        """Record an event and mirror it to the logger."""
        event = LogEvent(
            id=f"evt-{next(self._ids)}",
            timestamp=self.clock() if timestamp is None else timestamp,
            type=event_type,
            message=message,
        )
        self._events.insert(0, event)
        del self._events[self.max_events :]

        logger.log(_LOG_LEVELS[event_type], message)
        return event

    def info(self, message: str, timestamp: Optional[float] = None) -> LogEvent:
        return self.add(EventType.INFO, message, timestamp)

    def warning(self, message: str, timestamp: Optional[float] = None) -> LogEvent:
        return self.add(EventType.WARNING, message, timestamp)

    def error(self, message: str, timestamp: Optional[float] = None) -> LogEvent:
        return self.add(EventType.ERROR, message, timestamp)

    def success(self, message: str, timestamp: Optional[float] = None) -> LogEvent:
        return self.add(EventType.SUCCESS, message, timestamp)

    @property
    def events(self) -> List[LogEvent]:
        """Events, newest first."""
        return list(self._events)

    def latest(self) -> Optional[LogEvent]:
        return self._events[0] if self._events else None

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
