"""
Tick Scheduler

Explicit periodic scheduler for the cooperative tick model. Components expose
plain callbacks taking the scheduled time; the scheduler decides when they run.
The host drives it with tick(now) from whatever loop it has (wall-clock timer,
fixed-step simulation, test harness).

Catch-up: a ticker that fell behind fires once per missed interval, up to
max_catch_up times in a single tick(), after which it is re-anchored to now.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class Ticker:
    """Named periodic callback."""

    name: str
    interval_s: float
    callback: Callable[[float], None]
    next_due: Optional[float] = None
    fired: int = 0


class TickScheduler:
    """
    Cooperative multi-rate scheduler.

    Example:
        >>> scheduler = TickScheduler()
        >>> scheduler.add("sweep", 0.03, on_sweep)
        >>> scheduler.reset(now=0.0)
        >>> scheduler.tick(now=0.1)
        ['sweep', 'sweep', 'sweep']
    """

    def __init__(self, max_catch_up: int = 5):
        """
        Args:
            max_catch_up: Maximum firings per ticker within one tick()
        """
        if max_catch_up < 1:
            raise ValueError(f"max_catch_up must be >= 1, got {max_catch_up}")

        self.max_catch_up = max_catch_up
        self._tickers: Dict[str, Ticker] = {}
        self.running = False

    def add(self, name: str, interval_s: float, callback: Callable[[float], None]) -> Ticker:
        """
        Register a periodic callback.

        Raises:
            ValueError: For a non-positive interval or a duplicate name
        """
        if interval_s <= 0:
            raise ValueError(f"Ticker '{name}' interval must be positive, got {interval_s}")
        if name in self._tickers:
            raise ValueError(f"Ticker '{name}' already registered")

        ticker = Ticker(name=name, interval_s=interval_s, callback=callback)
        self._tickers[name] = ticker
        return ticker

    def remove(self, name: str) -> bool:
        return self._tickers.pop(name, None) is not None

    def get(self, name: str) -> Optional[Ticker]:
        return self._tickers.get(name)

    @property
    def names(self) -> List[str]:
        return list(self._tickers)

    @property
    def min_interval(self) -> Optional[float]:
        """Shortest registered interval [s]."""
        if not self._tickers:
            return None
        return min(t.interval_s for t in self._tickers.values())

    def reset(self, now: float) -> None:
        """Start (or restart) all tickers; first firings are one interval after now."""
        for ticker in self._tickers.values():
            ticker.next_due = now + ticker.interval_s
            ticker.fired = 0
        self.running = True

    def stop(self) -> None:
        """Stop all tickers. Registrations are kept for a later reset()."""
        self.running = False
        for ticker in self._tickers.values():
            ticker.next_due = None

    def tick(self, now: float) -> List[str]:
        """
        Fire every due ticker.

        Tickers fire in registration order; each receives its scheduled time.

        Args:
            now: Current time [s]

        Returns:
            Names of the tickers fired, one entry per firing
        """
        if not self.running:
            return []

        fired = []
        for ticker in list(self._tickers.values()):
            if ticker.next_due is None:
                ticker.next_due = now + ticker.interval_s
                continue

            firings = 0
            while ticker.next_due <= now and firings < self.max_catch_up:
                ticker.callback(ticker.next_due)
                ticker.fired += 1
                firings += 1
                fired.append(ticker.name)
                ticker.next_due += ticker.interval_s

            if ticker.next_due <= now:
                logger.debug("Ticker '%s' fell behind, re-anchoring", ticker.name)
                ticker.next_due = now + ticker.interval_s

        return fired
