"""
Session Config Loader

YAML-based session configuration parser for Sentry.

Loads a session file and creates configured SentryEngine instances.

Supported sections:
    - session (name, sensitivity, seed, event log size)
    - detector, lock, sweep (video pipeline and sweep tuning)
    - threats (defended position, progress model, proximity alerts, catalogue)
    - ticks (ticker periods)
    - contacts (synthetic radar returns)

Usage:
    loader = ConfigLoader('scenarios/default_session.yaml')
    engine = loader.create_engine()
"""

import os
from typing import Any, Dict, List, Optional

import yaml

from sentry.simulation.config import (
    ContactConfig,
    DetectorConfig,
    LockConfig,
    SentryConfig,
    SessionConfig,
    SweepConfig,
    ThreatConfig,
    TickConfig,
)
from sentry.simulation.objects import ThreatKind, ThreatLevel, ThreatOrigin


class ConfigLoader:
    """
    Loads session configuration from YAML files.

    Missing sections and keys fall back to the dataclass defaults.

    Usage:
        loader = ConfigLoader('scenarios/default_session.yaml')
        config = loader.get_config()
        engine = loader.create_engine()
    """

    def __init__(self, filepath: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            filepath: Path to YAML session file (optional)
        """
        self.filepath = filepath
        self.data: Dict[str, Any] = {}
        self._config: Optional[SentryConfig] = None

        if filepath:
            self.load(filepath)

    def load(self, filepath: str) -> bool:
        """
        Load session configuration from YAML file.

        Raises:
            FileNotFoundError: If file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ValueError: If a value is out of range or unknown
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Session file not found: {filepath}")

        self.filepath = filepath

        with open(filepath, "r", encoding="utf-8") as f:
            self.data = yaml.safe_load(f) or {}

        if not isinstance(self.data, dict):
            raise ValueError(f"Session file must contain a mapping: {filepath}")

        self._config = self._parse_config()
        return True

    def load_dict(self, data: Dict[str, Any]) -> SentryConfig:
        """Parse an already-loaded mapping."""
        self.data = data or {}
        self._config = self._parse_config()
        return self._config

    def _parse_config(self) -> SentryConfig:
        """Parse loaded YAML data into SentryConfig."""
        return SentryConfig(
            session=self._parse_session(),
            detector=self._parse_detector(),
            lock=LockConfig(
                release_on_empty=bool(self.data.get("lock", {}).get("release_on_empty", True))
            ),
            sweep=self._parse_sweep(),
            threats=self._parse_threats(),
            ticks=self._parse_ticks(),
            contacts=self._parse_contacts(),
        )

    def _parse_session(self) -> SessionConfig:
        session = self.data.get("session", {})
        sensitivity = float(session.get("sensitivity", 50))
        if not 0 <= sensitivity <= 100:
            raise ValueError(f"sensitivity must be in [0, 100], got {sensitivity}")

        history_length = int(session.get("history_length", 20))
        if history_length < 1:
            raise ValueError(f"history_length must be >= 1, got {history_length}")

        seed = session.get("seed")
        return SessionConfig(
            name=session.get("name", "Sentry Session"),
            sensitivity=sensitivity,
            seed=None if seed is None else int(seed),
            motion_log_probability=float(session.get("motion_log_probability", 0.3)),
            history_length=history_length,
            max_events=int(session.get("max_events", 200)),
        )

    def _parse_detector(self) -> DetectorConfig:
        det = self.data.get("detector", {})
        config = DetectorConfig(
            block_size=int(det.get("block_size", 10)),
            cluster_radius=float(det.get("cluster_radius", 15.0)),
            padding=float(det.get("padding", 5.0)),
            min_size=float(det.get("min_size", 5.0)),
            size_divisor=float(det.get("size_divisor", 10.0)),
            max_targets=int(det.get("max_targets", 3)),
            min_cluster_size=int(det.get("min_cluster_size", 1)),
        )
        if config.block_size < 1:
            raise ValueError(f"detector.block_size must be >= 1, got {config.block_size}")
        return config

    def _parse_sweep(self) -> SweepConfig:
        sweep = self.data.get("sweep", {})
        return SweepConfig(
            step_deg=float(sweep.get("step_deg", 2.0)),
            window_deg=float(sweep.get("window_deg", 10.0)),
            fade_duration_s=float(sweep.get("fade_duration_s", 3.0)),
        )

    def _parse_threats(self) -> ThreatConfig:
        threats = self.data.get("threats", {})
        defended = threats.get("defended_position", {})
        defaults = ThreatConfig()

        progress_range = threats.get("progress_range", list(defaults.progress_range))
        if len(progress_range) != 2:
            raise ValueError(f"threats.progress_range must have two values, got {progress_range}")

        catalogue = None
        if "catalogue" in threats:
            catalogue = self._parse_catalogue(threats["catalogue"])

        return ThreatConfig(
            defended_lat=float(defended.get("lat", defaults.defended_lat)),
            defended_lng=float(defended.get("lng", defaults.defended_lng)),
            base_increment=float(threats.get("base_increment", defaults.base_increment)),
            velocity_divisor=float(threats.get("velocity_divisor", defaults.velocity_divisor)),
            wrap_progress=float(threats.get("wrap_progress", defaults.wrap_progress)),
            progress_range=(float(progress_range[0]), float(progress_range[1])),
            proximity_km=float(threats.get("proximity_km", defaults.proximity_km)),
            critical_km=float(threats.get("critical_km", defaults.critical_km)),
            alert_cooldown_s=float(threats.get("alert_cooldown_s", defaults.alert_cooldown_s)),
            catalogue=catalogue,
        )

    def _parse_catalogue(self, entries: List[Dict[str, Any]]) -> List[ThreatOrigin]:
        """Parse threat origins; kind and level must name known enum values."""
        origins = []
        for idx, entry in enumerate(entries or []):
            try:
                kind = ThreatKind(entry.get("kind", "missile"))
                level = ThreatLevel(entry.get("level", "medium"))
            except ValueError as e:
                raise ValueError(f"threats.catalogue[{idx}]: {e}") from e

            origins.append(
                ThreatOrigin(
                    id=str(entry.get("id", f"atk-{idx + 1}")),
                    lat=float(entry["lat"]),
                    lng=float(entry["lng"]),
                    name=entry.get("name", f"Origin_{idx + 1}"),
                    country=entry.get("country", ""),
                    kind=kind,
                    level=level,
                    velocity_kmh=float(entry.get("velocity_kmh", 0)),
                    altitude_m=float(entry.get("altitude_m", 0)),
                )
            )
        return origins

    def _parse_ticks(self) -> TickConfig:
        ticks = self.data.get("ticks", {})
        config = TickConfig(
            sweep_s=float(ticks.get("sweep_s", 0.03)),
            threats_s=float(ticks.get("threats_s", 0.05)),
            motion_s=float(ticks.get("motion_s", 0.5)),
            visibility_s=float(ticks.get("visibility_s", 0.03)),
            contacts_s=float(ticks.get("contacts_s", 12.0)),
            max_catch_up=int(ticks.get("max_catch_up", 5)),
        )
        for name in ("sweep_s", "threats_s", "motion_s", "visibility_s", "contacts_s"):
            if getattr(config, name) <= 0:
                raise ValueError(f"ticks.{name} must be positive, got {getattr(config, name)}")
        return config

    def _parse_contacts(self) -> ContactConfig:
        contacts = self.data.get("contacts", {})
        return ContactConfig(
            enabled=bool(contacts.get("enabled", True)),
            min_count=int(contacts.get("min_count", 3)),
            max_count=int(contacts.get("max_count", 7)),
        )

    def get_config(self) -> Optional[SentryConfig]:
        """
        Get parsed session configuration.

        Returns:
            SentryConfig or None if not loaded
        """
        return self._config

    def get_session_name(self) -> str:
        if self._config:
            return self._config.session.name
        return "Unknown"

    def create_engine(self, seed: Optional[int] = None):
        """
        Create a SentryEngine from the loaded configuration.

        Raises:
            ValueError: If no configuration is loaded
        """
        if not self._config:
            raise ValueError("No session loaded. Call load() first.")

        # Import here to avoid circular dependencies
        from sentry.simulation.engine import SentryEngine

        return SentryEngine(config=self._config, seed=seed)


def load_config(filepath: str) -> SentryConfig:
    """
    Convenience function to load a session file.

    Args:
        filepath: Path to YAML session file

    Returns:
        SentryConfig instance
    """
    loader = ConfigLoader(filepath)
    return loader.get_config()
