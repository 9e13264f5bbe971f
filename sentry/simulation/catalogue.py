"""
Threat Catalogue

Fixed set of named threat origins instantiated once per session.
"""

from typing import Tuple

from .objects import ThreatKind, ThreatLevel, ThreatOrigin

DEFAULT_CATALOGUE: Tuple[ThreatOrigin, ...] = (
    ThreatOrigin(
        id="atk-1",
        lat=55.7558,
        lng=37.6173,
        name="Moscow",
        country="RUSSIA",
        kind=ThreatKind.MISSILE,
        level=ThreatLevel.CRITICAL,
        velocity_kmh=5500.0,
        altitude_m=35000.0,
    ),
    ThreatOrigin(
        id="atk-2",
        lat=39.9042,
        lng=116.4074,
        name="Beijing",
        country="CHINA",
        kind=ThreatKind.DRONE,
        level=ThreatLevel.HIGH,
        velocity_kmh=450.0,
        altitude_m=8000.0,
    ),
    ThreatOrigin(
        id="atk-3",
        lat=35.6762,
        lng=51.4241,
        name="Tehran",
        country="IRAN",
        kind=ThreatKind.MISSILE,
        level=ThreatLevel.CRITICAL,
        velocity_kmh=3200.0,
        altitude_m=25000.0,
    ),
    ThreatOrigin(
        id="atk-4",
        lat=39.0392,
        lng=125.7625,
        name="Pyongyang",
        country="N.KOREA",
        kind=ThreatKind.MISSILE,
        level=ThreatLevel.HIGH,
        velocity_kmh=4800.0,
        altitude_m=40000.0,
    ),
    ThreatOrigin(
        id="atk-5",
        lat=24.7136,
        lng=46.6753,
        name="Riyadh",
        country="SAUDI",
        kind=ThreatKind.AIRCRAFT,
        level=ThreatLevel.MEDIUM,
        velocity_kmh=850.0,
        altitude_m=12000.0,
    ),
    ThreatOrigin(
        id="atk-6",
        lat=33.8688,
        lng=35.5018,
        name="Beirut",
        country="LEBANON",
        kind=ThreatKind.DRONE,
        level=ThreatLevel.MEDIUM,
        velocity_kmh=280.0,
        altitude_m=3000.0,
    ),
    ThreatOrigin(
        id="atk-7",
        lat=15.3694,
        lng=44.1910,
        name="Sanaa",
        country="YEMEN",
        kind=ThreatKind.ARTILLERY,
        level=ThreatLevel.HIGH,
        velocity_kmh=1200.0,
        altitude_m=15000.0,
    ),
    ThreatOrigin(
        id="atk-8",
        lat=2.0469,
        lng=45.3182,
        name="Mogadishu",
        country="SOMALIA",
        kind=ThreatKind.DRONE,
        level=ThreatLevel.LOW,
        velocity_kmh=180.0,
        altitude_m=2000.0,
    ),
)
