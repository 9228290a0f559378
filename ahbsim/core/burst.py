"""Burst address generation and beat tracking.

next_address() is a pure function so the wrap arithmetic can be checked
on its own. BurstProgress holds the per-burst state the register unit
advances on every accepted beat.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ahbsim.core.exceptions import InvalidSizeError
from ahbsim.core.pipeline import Transaction
from ahbsim.core.signals import BurstType, size_bytes
from ahbsim.utils.consts import ADDR_MASK


def _step(size: int) -> int:
    step = size_bytes(size)
    if step is None:
        raise InvalidSizeError(size)
    return step


def wrap_window(size: int, burst: BurstType) -> Optional[int]:
    """Byte span of a wrapping burst's aligned window, or None if it does not wrap."""
    if not burst.is_wrap:
        return None
    beats = burst.beats
    assert beats is not None
    return beats * _step(size)


def next_address(current: int, size: int, burst: BurstType) -> int:
    """Address of the beat following current.

    Wrap bursts only carry within the low bits of their window; the high
    bits stay put. SINGLE never advances.
    """
    burst = BurstType(burst)
    step = _step(size)
    if burst == BurstType.SINGLE:
        return current & ADDR_MASK

    span = wrap_window(size, burst)
    if span is None:
        return (current + step) & ADDR_MASK

    mask = span - 1
    return ((current & ~mask) | ((current + step) & mask)) & ADDR_MASK


def burst_addresses(
    start: int, size: int, burst: BurstType, beats: Optional[int] = None
) -> list[int]:
    """Return every address a burst visits starting at start.

    beats is required for the open-ended INCR burst and overrides the fixed
    length otherwise.
    """
    burst = BurstType(burst)
    count = beats if beats is not None else burst.beats
    if count is None:
        raise ValueError("beats must be given for an INCR burst")
    if count <= 0:
        raise ValueError("beats must be > 0")

    addresses = [start & ADDR_MASK]
    for _ in range(count - 1):
        addresses.append(next_address(addresses[-1], size, burst))
    return addresses


@dataclass
class BeatPlan:
    """What the current data-phase beat will do if it is accepted."""

    address: int
    size: int
    burst: BurstType
    index: int
    last: bool


class BurstProgress:
    """Beat counter, active/first-beat flags and current address.

    The counter is zero whenever no burst is in progress: after a burst
    completes, after a single transfer, and after the burst is abandoned
    or terminated by an error.
    """

    def __init__(self):
        self.beat = 0
        self.active = False
        self.first_beat = True
        self.address = 0
        self._size = 0
        self._kind = BurstType.SINGLE

    def plan(self, txn: Transaction) -> BeatPlan:
        """Work out the address and completion of the beat carried by txn.

        A NONSEQ beat, or any beat while no burst is active, restarts at the
        admitted address. Later beats reuse the burst's size and kind and
        derive their address from the previous one.
        """
        if txn.starts_burst or not self.active:
            return BeatPlan(
                address=txn.addr,
                size=txn.size,
                burst=txn.burst,
                index=0,
                last=self._is_last(txn.burst, 0),
            )

        index = self.beat
        return BeatPlan(
            address=next_address(self.address, self._size, self._kind),
            size=self._size,
            burst=self._kind,
            index=index,
            last=self._is_last(self._kind, index),
        )

    def advance(self, plan: BeatPlan) -> None:
        """Record an accepted beat at the clock edge."""
        if plan.last:
            self.reset()
            return
        self.active = True
        self.first_beat = False
        self.beat = plan.index + 1
        self.address = plan.address
        self._size = plan.size
        self._kind = plan.burst

    def reset(self) -> None:
        self.beat = 0
        self.active = False
        self.first_beat = True
        self.address = 0
        self._size = 0
        self._kind = BurstType.SINGLE

    @staticmethod
    def _is_last(kind: BurstType, index: int) -> bool:
        beats = kind.beats
        if beats is None:
            return False
        return index + 1 >= beats
