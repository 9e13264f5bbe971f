"""
Sentry Simulation Package

Threat simulation, radar contacts, scheduling and the session engine.
"""

from .alerts import ALERT_TONES_HZ, ProximityAlert, ProximityMonitor
from .catalogue import DEFAULT_CATALOGUE
from .config import SentryConfig
from .contacts import ContactKind, RadarContact, RadarContactGenerator
from .engine import SentryEngine
from .objects import Threat, ThreatKind, ThreatLevel, ThreatOrigin
from .registry import ThreatRegistry
from .scheduler import TickScheduler

__all__ = [
    "SentryEngine",
    "SentryConfig",
    "ThreatRegistry",
    "Threat",
    "ThreatOrigin",
    "ThreatKind",
    "ThreatLevel",
    "DEFAULT_CATALOGUE",
    "ProximityMonitor",
    "ProximityAlert",
    "ALERT_TONES_HZ",
    "RadarContact",
    "RadarContactGenerator",
    "ContactKind",
    "TickScheduler",
]
