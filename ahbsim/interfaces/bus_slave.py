"""Bus slave abstraction - behavioral contract.

A bus slave is a clocked component that sees one BusRequest per cycle
and answers with one BusResponse in the same cycle.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ahbsim.core.signals import BusRequest, BusResponse


class BusSlave(ABC):
    """Base class for clocked bus slaves."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable slave name."""
        ...

    @property
    @abstractmethod
    def cycle_count(self) -> int:
        """Clock edges seen since the last reset."""
        ...

    @abstractmethod
    def step(self, request: "BusRequest") -> "BusResponse":
        """Evaluate one cycle with request on the bus, then clock the edge."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Asynchronous reset of every piece of state."""
        ...

    @abstractmethod
    def tick(self, cycles: int = 1) -> None:
        """Advance by idle cycles (lets the slave subscribe to a Clock)."""
        ...
