"""Accumulate time spent per category and report it."""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass
from typing import Callable, Mapping

Clock = Callable[[], int]

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000
_NS_PER_MIN = 60 * _NS_PER_S
_NS_PER_HOUR = 60 * _NS_PER_MIN


def _fraction(value: int, digits: int) -> str:
    text = str(value).rjust(digits, "0").rstrip("0")
    return f".{text}" if text else ""


def format_duration(nanoseconds: int) -> str:
    """Render a duration in nanoseconds as e.g. ``1h2m3.5s``, ``1.5ms`` or ``0s``."""
    nanoseconds = int(nanoseconds)
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    value = abs(nanoseconds)

    if value < _NS_PER_S:
        if value < _NS_PER_US:
            return f"{sign}{value}ns"
        if value < _NS_PER_MS:
            unit, divisor, digits = "µs", _NS_PER_US, 3
        else:
            unit, divisor, digits = "ms", _NS_PER_MS, 6
        whole, frac = divmod(value, divisor)
        return f"{sign}{whole}{_fraction(frac, digits)}{unit}"

    hours, rest = divmod(value, _NS_PER_HOUR)
    minutes, rest = divmod(rest, _NS_PER_MIN)
    seconds, frac = divmod(rest, _NS_PER_S)
    parts = [sign]
    if hours:
        parts.append(f"{hours}h")
    if hours or minutes:
        parts.append(f"{minutes}m")
    parts.append(f"{seconds}{_fraction(frac, 9)}s")
    return "".join(parts)


@dataclass(frozen=True)
class Timer:
    """A running timer for one category; ``start_time`` is in nanoseconds."""

    category: str
    start_time: int


class TimedRun:
    """A thread-safe running total of time spent in each category."""

    def __init__(
        self,
        categories: Mapping[str, int] | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self.categories: dict[str, int] = dict(categories or {})
        self._clock: Clock = clock or time.monotonic_ns

    def start(self, category: str) -> Timer:
        """Start a timer for ``category`` using this run's clock."""
        return Timer(category, self._clock())

    def stop(self, timer: Timer) -> None:
        """Stop ``timer`` and add the elapsed time to its category."""
        stopped = self._clock()
        with self._lock:
            self.categories[timer.category] = (
                self.categories.get(timer.category, 0) + stopped - timer.start_time
            )

    def summary(self) -> str:
        """One ``category: duration`` line per category, sorted by name."""
        with self._lock:
            items = sorted(self.categories.items())
        return "".join(f"{name}: {format_duration(ns)}\n" for name, ns in items)

    def to_json(self) -> str:
        """The categories as a compact JSON object of nanosecond totals."""
        with self._lock:
            return json.dumps(self.categories, sort_keys=True, separators=(",", ":"))


DEFAULT_RUN = TimedRun()


def start(category: str) -> Timer:
    """Start a timer on the default run."""
    return DEFAULT_RUN.start(category)


def stop(timer: Timer) -> None:
    """Stop a timer on the default run."""
    DEFAULT_RUN.stop(timer)


def summary() -> str:
    """Summary of the default run."""
    return DEFAULT_RUN.summary()


def to_json() -> str:
    """JSON of the default run."""
    return DEFAULT_RUN.to_json()