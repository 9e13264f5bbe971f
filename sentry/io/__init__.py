"""
Sentry I/O Package

Session configuration loading and the operator event log.
"""

from .event_log import EventLog, EventType, LogEvent
from .config_loader import ConfigLoader, load_config

__all__ = [
    "EventLog",
    "EventType",
    "LogEvent",
    "ConfigLoader",
    "load_config",
]
