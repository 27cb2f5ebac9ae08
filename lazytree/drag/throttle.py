"""Fixed-interval sampler that keeps only the most recent value."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class LatestValueThrottle(Generic[T]):
    """Deliver submitted values at most once per ``interval`` seconds.

    The first value after a quiet period is delivered immediately. Values
    submitted inside the interval overwrite a single pending slot, so older
    samples are dropped rather than queued. There are no timers: the owner
    calls ``poll`` from its event loop to flush a pending value once the
    interval has elapsed.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[T], None],
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self.interval = interval
        self._callback = callback
        self._monotonic = monotonic
        self._last_fire: float | None = None
        self._pending: object = _UNSET

    @property
    def has_pending(self) -> bool:
        return self._pending is not _UNSET

    def _ready(self, now: float) -> bool:
        return self._last_fire is None or (now - self._last_fire) >= self.interval

    def _fire(self, value: T, now: float) -> None:
        self._last_fire = now
        self._pending = _UNSET
        self._callback(value)

    def submit(self, value: T) -> bool:
        """Offer ``value``; return whether the callback ran for it now."""
        now = self._monotonic()
        if self._ready(now):
            self._fire(value, now)
            return True
        self._pending = value
        return False

    def poll(self) -> bool:
        """Deliver the pending value if the interval has elapsed."""
        if self._pending is _UNSET:
            return False
        now = self._monotonic()
        if not self._ready(now):
            return False
        self._fire(self._pending, now)  # type: ignore[arg-type]
        return True

    def cancel(self) -> None:
        """Drop any pending value and start the next burst fresh."""
        self._pending = _UNSET
        self._last_fire = None
