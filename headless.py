#!/usr/bin/env python3
"""
Headless Sentry CLI

Run a surveillance session without a dashboard, fed by synthetic video frames.

Usage:
    python headless.py                                   # Default config
    python headless.py --sensitivity 80 --duration 20    # Custom session
    python headless.py --config scenarios/default_session.yaml

Examples:
    # Reproducible quick run
    python headless.py --seed 42 --duration 5

    # Machine-readable threat counts
    python headless.py --quiet
"""

import argparse
import logging
import os
import sys

import yaml

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sentry.io.config_loader import ConfigLoader
from sentry.simulation.config import SentryConfig
from sentry.simulation.engine import SentryEngine
from sentry.vision.synthetic import SyntheticFrameSource


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run headless sentry session")

    # Config file
    parser.add_argument("--config", type=str, default=None, help="YAML session file")

    # Session parameters
    parser.add_argument(
        "--sensitivity", type=float, default=None, help="Detection sensitivity 0-100 (default: 50)"
    )
    parser.add_argument(
        "--duration", type=float, default=10.0, help="Session duration in seconds (default: 10)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--blobs", type=int, default=2, help="Moving objects in the synthetic feed (default: 2)"
    )

    # Options
    parser.add_argument("--quiet", action="store_true", help="Suppress output")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else (logging.ERROR if args.quiet else logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Load config
    if args.config:
        if not os.path.exists(args.config):
            print(f"Error: Config file not found: {args.config}")
            return 1
        try:
            config = ConfigLoader(args.config).get_config()
        except (ValueError, yaml.YAMLError) as e:
            print(f"Error: Invalid config: {e}")
            return 1
    else:
        config = SentryConfig()

    seed = args.seed if args.seed is not None else config.session.seed
    engine = SentryEngine(config=config, seed=seed)
    if args.sensitivity is not None:
        engine.set_sensitivity(args.sensitivity)

    engine.attach_frame_source(SyntheticFrameSource(n_blobs=args.blobs, seed=seed))

    if not args.quiet:
        print("=" * 60)
        print("Sentry Headless Mode")
        print("=" * 60)
        print(f"Session: {config.session.name}")
        print(f"Sensitivity: {engine.sensitivity:.0f}%")
        print(
            f"Defended position: {config.threats.defended_lat:.4f}, "
            f"{config.threats.defended_lng:.4f}"
        )
        print(f"Threat origins: {len(engine.catalogue)}")
        print(f"Duration: {args.duration:.1f} s")
        print("=" * 60)

    engine.start(now=0.0)
    snapshot = engine.run(duration_s=args.duration)
    waves = engine.registry.waves
    engine.stop()

    counts = snapshot["threat_counts"]
    if not args.quiet:
        print("\n--- RESULTS ---")
        print(f"Motion ticks with targets: {len(snapshot['detection_history'])}")
        print(f"Lock acquisitions: {engine.lock_tracker.acquisitions}")
        print(f"Proximity alerts: {snapshot['alerts']}")
        print(f"Threat waves wrapped: {waves}")
        for level, count in counts.items():
            print(f"  {level:<9} {count}")
        print(f"Events logged: {len(engine.event_log)}")
        print("=" * 60)
    else:
        # Machine-readable output
        print(" ".join(f"{level}={count}" for level, count in counts.items()))

    return 0


if __name__ == "__main__":
    sys.exit(main())
