"""Clock implementation for cycle timing."""

from __future__ import annotations

from typing import Callable, List

from ahbsim.interfaces.clock import ClockSubscriber, IClock


class Clock(IClock):
    """Pub/sub clock that notifies subscribers on tick()."""

    def __init__(self, frequency: int = 100_000_000):
        if frequency <= 0:
            raise ValueError("Clock frequency must be positive")
        self._frequency = frequency
        self._cycle_count = 0
        self._subscribers: List[ClockSubscriber] = []

    @property
    def frequency(self) -> int:
        return self._frequency

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def elapsed_ns(self) -> float:
        return self._cycle_count * 1e9 / self._frequency

    def subscribe(self, subscriber: ClockSubscriber) -> None:
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: ClockSubscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    def _notify_subscriber(self, subscriber: ClockSubscriber, cycles: int) -> None:
        tick_fn: Callable[[int], None] | None = getattr(subscriber, "tick", None)
        if callable(tick_fn):
            tick_fn(cycles)

    def tick(self, cycles: int = 1) -> None:
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        if cycles == 0:
            return

        self._cycle_count += cycles

        # Notify subscribers once per tick batch
        for subscriber in list(self._subscribers):
            self._notify_subscriber(subscriber, cycles)

    def reset(self) -> None:
        self._cycle_count = 0
