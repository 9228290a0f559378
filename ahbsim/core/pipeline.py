"""Address-phase to data-phase pipeline registers.

The pipeline is one slot deep: a transaction admitted in the address
phase is captured at the clock edge and consumed in the following cycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ahbsim.core.signals import BurstType, BusRequest, TransferType


@dataclass(frozen=True)
class Transaction:
    """Attributes captured when an address phase is admitted."""

    addr: int
    size: int
    burst: BurstType
    write: bool
    strobe: int
    lock: bool = False
    trans: TransferType = TransferType.NONSEQ

    @classmethod
    def from_request(cls, request: BusRequest) -> "Transaction":
        return cls(
            addr=request.addr,
            size=request.size,
            burst=BurstType(request.burst),
            write=request.write,
            strobe=request.strobe,
            lock=request.lock,
            trans=TransferType(request.trans),
        )

    @property
    def is_single(self) -> bool:
        return self.burst == BurstType.SINGLE

    @property
    def starts_burst(self) -> bool:
        return self.trans == TransferType.NONSEQ


class PipelineRegisters:
    """Latched transaction attributes plus a delayed write-data register.

    Register update follows the synchronous-with-asynchronous-clear rule:
    clear() forces the idle value immediately, capture() only happens on a
    clock edge where the admission condition held.
    """

    def __init__(self):
        self._txn: Optional[Transaction] = None
        self._wdata = 0

    @property
    def transaction(self) -> Optional[Transaction]:
        return self._txn

    @property
    def wdata(self) -> int:
        """Write data seen on the bus at the previous clock edge."""
        return self._wdata

    def capture(self, txn: Transaction) -> None:
        self._txn = txn

    def release(self) -> None:
        """Drop the latched transaction once its data phase is over."""
        self._txn = None

    def clock_wdata(self, value: int) -> None:
        self._wdata = value

    def clear(self) -> None:
        self._txn = None
        self._wdata = 0
