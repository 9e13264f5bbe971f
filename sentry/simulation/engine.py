"""
Sentry Engine

Session orchestrator for the surveillance dashboard core.

Features:
    - Four cooperative tickers: sweep rotation, threat progress, motion
      analysis and visibility expiry (plus slow radar contact refresh)
    - One ThreatRegistry shared by every view
    - One SweepVisibilityController class reused for the video, radar and
      globe panels
    - Power on/off: stop() clears ephemeral state, keeps catalogue and config

Nothing here performs I/O or blocks; the host calls step(now) from its loop.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from sentry.io.event_log import EventLog
from sentry.tracking.lock import TargetLifecycleTracker
from sentry.tracking.sweep import SweepVisibilityController
from sentry.vision.motion import FrameMotionDetector, Target

from .alerts import ProximityAlert, ProximityMonitor
from .catalogue import DEFAULT_CATALOGUE
from .config import SentryConfig
from .contacts import RadarContact, RadarContactGenerator
from .objects import ThreatLevel, ThreatOrigin
from .registry import ThreatRegistry
from .scheduler import TickScheduler

logger = logging.getLogger(__name__)


class FrameSource(Protocol):
    """Anything that can hand out the next video frame."""

    def next_frame(self) -> np.ndarray: ...


class SentryEngine:
    """
    Main sentry engine - drives detection, threat simulation and sweeps.

    Example:
        >>> engine = SentryEngine(seed=42)
        >>> engine.attach_frame_source(SyntheticFrameSource(seed=42))
        >>> engine.start(now=0.0)
        >>> engine.run(duration_s=5.0)
        >>> engine.registry.counts()
    """

    def __init__(
        self,
        config: Optional[SentryConfig] = None,
        catalogue: Optional[Sequence[ThreatOrigin]] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize engine.

        Args:
            config: Session configuration (defaults if None)
            catalogue: Threat origins (config.threats.catalogue, then
                DEFAULT_CATALOGUE, if None)
            seed: Seed for every random decision (config.session.seed if None)
        """
        self.config = config or SentryConfig()
        cfg = self.config

        if catalogue is None:
            catalogue = cfg.threats.catalogue or DEFAULT_CATALOGUE
        self.catalogue: Tuple[ThreatOrigin, ...] = tuple(catalogue)

        self.rng = np.random.default_rng(seed if seed is not None else cfg.session.seed)
        self.sensitivity = min(max(cfg.session.sensitivity, 0.0), 100.0)

        # ═══ VIDEO PIPELINE ═══
        self.detector = FrameMotionDetector(
            block_size=cfg.detector.block_size,
            cluster_radius=cfg.detector.cluster_radius,
            padding=cfg.detector.padding,
            min_size=cfg.detector.min_size,
            size_divisor=cfg.detector.size_divisor,
            max_targets=cfg.detector.max_targets,
            min_cluster_size=cfg.detector.min_cluster_size,
        )
        self.lock_tracker = TargetLifecycleTracker(
            release_on_empty=cfg.lock.release_on_empty, rng=self.rng
        )

        # ═══ THREAT SIMULATION ═══
        self.registry = ThreatRegistry(
            defended_lat=cfg.threats.defended_lat,
            defended_lng=cfg.threats.defended_lng,
            base_increment=cfg.threats.base_increment,
            velocity_divisor=cfg.threats.velocity_divisor,
            wrap_progress=cfg.threats.wrap_progress,
            progress_range=cfg.threats.progress_range,
            rng=self.rng,
        )
        self.proximity = ProximityMonitor(
            proximity_km=cfg.threats.proximity_km,
            critical_km=cfg.threats.critical_km,
            cooldown_s=cfg.threats.alert_cooldown_s,
        )
        self.contact_generator = RadarContactGenerator(
            min_count=cfg.contacts.min_count, max_count=cfg.contacts.max_count, rng=self.rng
        )

        # ═══ SWEEPS (one per panel, same controller class) ═══
        self.video_sweep = self._make_sweep()
        self.radar_sweep = self._make_sweep()
        self.globe_sweep = self._make_sweep()

        self.event_log = EventLog(max_events=cfg.session.max_events)

        self.scheduler = TickScheduler(max_catch_up=cfg.ticks.max_catch_up)
        self.scheduler.add("sweep", cfg.ticks.sweep_s, self._on_sweep_tick)
        self.scheduler.add("threats", cfg.ticks.threats_s, self._on_threat_tick)
        self.scheduler.add("motion", cfg.ticks.motion_s, self._on_motion_tick)
        self.scheduler.add("visibility", cfg.ticks.visibility_s, self._on_visibility_tick)
        if cfg.contacts.enabled:
            self.scheduler.add("contacts", cfg.ticks.contacts_s, self._on_contacts_tick)

        self.active = False
        self.current_time = 0.0
        self._frame_source: Optional[FrameSource] = None
        self._reset_ephemeral()

    def _make_sweep(self) -> SweepVisibilityController:
        sweep_cfg = self.config.sweep
        return SweepVisibilityController(
            step_deg=sweep_cfg.step_deg,
            window_deg=sweep_cfg.window_deg,
            fade_duration_s=sweep_cfg.fade_duration_s,
        )

    def _reset_ephemeral(self) -> None:
        """Clear everything that must not survive a power cycle."""
        self.targets: List[Target] = []
        self.contacts: List[RadarContact] = []
        self.detection_history: List[Tuple[float, int]] = []
        self.alerts: List[ProximityAlert] = []
        self._prev_frame: Optional[np.ndarray] = None
        self._pending_frame: Optional[np.ndarray] = None

        self.lock_tracker.reset()
        self.proximity.reset()
        self.registry.clear()
        for sweep in (self.video_sweep, self.radar_sweep, self.globe_sweep):
            sweep.clear()

    # ------------------------------------------------------------------
    # Power and operator controls
    # ------------------------------------------------------------------

    def start(self, now: float = 0.0) -> None:
        """Power on: spawn the catalogue and start every ticker."""
        if self.active:
            return

        self.current_time = now
        self.registry.spawn(self.catalogue)
        if self.config.contacts.enabled:
            self.contacts = self.contact_generator.generate()
        self.scheduler.reset(now)
        self.active = True

        self.event_log.success("Turret system activated. Surveillance mode engaged.", now)

    def stop(self) -> None:
        """
        Power off: stop all tickers and drop ephemeral state.

        Targets, visibility sets, lock, frames, history and in-flight threats
        are cleared. Catalogue, configuration, sensitivity and the event log
        persist.
        """
        if not self.active:
            return

        self.scheduler.stop()
        self._reset_ephemeral()
        self.active = False

        self.event_log.info("Turret system deactivated. Entering standby mode.", self.current_time)

    def set_sensitivity(self, value: float) -> float:
        """Set detection sensitivity, clamped to [0, 100]."""
        self.sensitivity = min(max(float(value), 0.0), 100.0)
        self.event_log.info(
            f"Detection sensitivity adjusted to {self.sensitivity:.0f}%", self.current_time
        )
        return self.sensitivity

    def reset(self) -> None:
        """Operator reset: release the lock and recentre the reticle."""
        self.lock_tracker.reset()
        for target in self.targets:
            target.locked = False
        self.event_log.info("System reset initiated. Recalibrating sensors.", self.current_time)

    def neutralize(self, threat_id: str) -> bool:
        """
        Neutralize a threat in the shared registry.

        Unknown ids are a no-op.

        Returns:
            True if the threat changed state
        """
        if not self.registry.neutralize(threat_id):
            return False

        self.globe_sweep.hide(threat_id)
        threat = self.registry.get(threat_id)
        self.event_log.success(
            f"Threat {threat_id} from {threat.origin_name} neutralized.", self.current_time
        )
        return True

    def relocate(self, lat: float, lng: float) -> None:
        """Move the defended position (e.g. a GPS fix)."""
        self.registry.relocate(lat, lng)
        self.event_log.info(f"Defended position updated to {lat:.4f}, {lng:.4f}.", self.current_time)

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def attach_frame_source(self, source: Optional[FrameSource]) -> None:
        """Pull a frame from source on every motion tick (None detaches)."""
        self._frame_source = source

    def submit_frame(self, frame: np.ndarray) -> None:
        """Hand over the latest captured frame for the next motion tick."""
        self._pending_frame = frame

    # ------------------------------------------------------------------
    # Tick callbacks
    # ------------------------------------------------------------------

    def _on_sweep_tick(self, now: float) -> None:
        for sweep in (self.video_sweep, self.radar_sweep, self.globe_sweep):
            sweep.advance()

        self.video_sweep.reveal(self.targets, now)
        self.radar_sweep.reveal(self.contacts, now)
        threats = self.registry.sweep_entities()
        self.globe_sweep.retain({t.id for t in threats})
        self.globe_sweep.reveal(threats, now)

    def _on_visibility_tick(self, now: float) -> None:
        for sweep in (self.video_sweep, self.radar_sweep, self.globe_sweep):
            sweep.expire(now)

    def _on_threat_tick(self, now: float) -> None:
        self.registry.tick()

        alert = self.proximity.check(self.registry.active(), now)
        if alert is None:
            return

        self.alerts.append(alert)
        self._trim_history(self.alerts)

        message = (
            f"Proximity alert: {alert.threat_id} ({alert.level.value}) "
            f"at {alert.distance_km:.0f} km."
        )
        if alert.level == ThreatLevel.CRITICAL:
            self.event_log.error(message, now)
        else:
            self.event_log.warning(message, now)

    def _on_motion_tick(self, now: float) -> None:
        frame = self._pending_frame
        if frame is None and self._frame_source is not None:
            frame = self._frame_source.next_frame()
        self._pending_frame = None

        if frame is None:
            return

        prev, self._prev_frame = self._prev_frame, frame
        if prev is None:
            return

        was_locked = self.lock_tracker.locked
        detections = self.detector.detect(prev, frame, self.sensitivity)
        self.targets = self.lock_tracker.update(detections, self.sensitivity)

        if not self.targets:
            return

        self.detection_history.append((now, len(self.targets)))
        self._trim_history(self.detection_history)

        if self.rng.random() < self.config.session.motion_log_probability:
            count = len(self.targets)
            message = f"Motion detected: {count} object{'s' if count > 1 else ''} identified."
            if count > 2:
                self.event_log.warning(message, now)
            else:
                self.event_log.info(message, now)

        if self.lock_tracker.locked and not was_locked:
            self.event_log.warning("Target locked. Turret tracking engaged.", now)

    def _on_contacts_tick(self, now: float) -> None:
        self.contacts = self.contact_generator.generate()
        self.radar_sweep.retain({c.id for c in self.contacts})

    def _trim_history(self, entries: list) -> None:
        """Keep only the newest history_length entries (none when it is 0)."""
        del entries[: max(len(entries) - self.config.session.history_length, 0)]

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------

    def step(self, now: float) -> List[str]:
        """
        Advance the session to `now`.

        Returns:
            Names of the tickers fired
        """
        if not self.active:
            return []
        self.current_time = now
        return self.scheduler.tick(now)

    def run(self, duration_s: float, dt: Optional[float] = None) -> Dict[str, Any]:
        """
        Fixed-step run from the current time.

        Args:
            duration_s: Simulated duration [s]
            dt: Step [s] (fastest ticker period if None)

        Returns:
            Final snapshot
        """
        if not self.active:
            self.start(self.current_time)

        dt = dt or self.scheduler.min_interval
        start = self.current_time
        n_steps = int(round(duration_s / dt))

        for i in range(1, n_steps + 1):
            self.step(start + i * dt)

        return self.snapshot()

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view of the session for renderers."""
        return {
            "time": self.current_time,
            "active": self.active,
            "sensitivity": self.sensitivity,
            "targets": [t.to_dict() for t in self.targets],
            "locked": self.lock_tracker.locked,
            "reticle": self.lock_tracker.reticle,
            "threats": [t.to_dict() for t in self.registry.snapshot()],
            "threat_counts": self.registry.counts(),
            "contacts": [c.id for c in self.contacts],
            "sweep_angle": self.globe_sweep.sweep_angle,
            "visible": {
                "video": sorted(self.video_sweep.visible(), key=str),
                "radar": sorted(self.radar_sweep.visible(), key=str),
                "globe": sorted(self.globe_sweep.visible(), key=str),
            },
            "detection_history": list(self.detection_history),
            "alerts": len(self.alerts),
        }
