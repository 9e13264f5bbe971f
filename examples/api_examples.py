"""
Sentry API Examples

Usage examples demonstrating the surveillance core API.
"""

import os
import sys

import numpy as np

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def example_motion_detection():
    """
    Example 1: Motion Detection

    Detect moving blobs between two synthetic frames.
    """
    from sentry.vision import FrameMotionDetector, SyntheticFrameSource

    source = SyntheticFrameSource(width=320, height=240, n_blobs=2, seed=7)
    detector = FrameMotionDetector(block_size=10, cluster_radius=15.0)

    prev = source.next_frame()
    curr = source.next_frame()
    targets = detector.detect(prev, curr, sensitivity=50)

    print("=== Motion Detection Example ===")
    for t in targets:
        print(f"Target {t.id}: ({t.x:.1f}%, {t.y:.1f}%) {t.width:.1f}x{t.height:.1f} "
              f"confidence {t.confidence:.0f}%")


def example_threat_trajectory():
    """
    Example 2: Great-Circle Threat Trajectory

    Moscow -> Addis Ababa at 5500 km/h, half way.
    """
    from sentry.geo import arc_height_for_altitude, arc_points, eta_seconds, haversine_distance_km

    origin = (55.7558, 37.6173)
    target = (9.0192, 38.7525)

    total = haversine_distance_km(*origin, *target)
    remaining = total * 0.5
    path = arc_points(*origin, *target, 0.5, arc_height_for_altitude(35000))

    print("\n=== Threat Trajectory Example ===")
    print(f"Total distance: {total:.0f} km")
    print(f"Remaining: {remaining:.0f} km, ETA {eta_seconds(remaining, 5500):.0f} s")
    print(f"Arc samples: {len(path)}, head at {path.head.lat:.2f}, {path.head.lng:.2f}")


def example_sweep():
    """
    Example 3: Sweep Visibility

    One revolution of the globe sweep over the default threat catalogue.
    """
    from sentry.simulation import DEFAULT_CATALOGUE, ThreatRegistry
    from sentry.tracking import SweepVisibilityController

    registry = ThreatRegistry(rng=np.random.default_rng(1))
    registry.spawn(DEFAULT_CATALOGUE)
    sweep = SweepVisibilityController(step_deg=2.0, window_deg=10.0, fade_duration_s=3.0)

    print("\n=== Sweep Example ===")
    now = 0.0
    for _ in range(180):
        now += 0.03
        sweep.advance()
        for threat_id in sweep.reveal(registry.sweep_entities(), now):
            print(f"{now:5.2f} s  sweep {sweep.sweep_angle:5.1f} deg  revealed {threat_id}")
        sweep.expire(now)


def example_session():
    """
    Example 4: Full Session

    Run the engine for ten simulated seconds.
    """
    from sentry.simulation import SentryEngine
    from sentry.vision import SyntheticFrameSource

    engine = SentryEngine(seed=42)
    engine.attach_frame_source(SyntheticFrameSource(seed=42))
    engine.start(now=0.0)
    snapshot = engine.run(duration_s=10.0)

    print("\n=== Session Example ===")
    print(f"Threat counts: {snapshot['threat_counts']}")
    print(f"Locked: {snapshot['locked']} reticle {snapshot['reticle']}")
    for event in engine.event_log.events[:5]:
        print(f"[{event.type.value:>7}] {event.message}")


if __name__ == "__main__":
    example_motion_detection()
    example_threat_trajectory()
    example_sweep()
    example_session()
