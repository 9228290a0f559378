"""Bus signal encodings and per-cycle request/response bundles.

The request bundle is everything a requester drives during one clock
cycle: the address-phase fields for a new transfer and the write data for
the transfer currently in its data phase. The response bundle is what the
slave drives back in the same cycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from ahbsim.utils.consts import ADDR_MASK, BYTE_LANES, DATA_MASK


class TransferType(IntEnum):
    """Transfer type code presented in the address phase."""

    IDLE = 0
    BUSY = 1
    NONSEQ = 2
    SEQ = 3


class TransferSize(IntEnum):
    """Supported 3-bit transfer size codes."""

    BYTE = 0
    HALFWORD = 1
    WORD = 2

    @property
    def width(self) -> int:
        return 1 << self.value


class BurstType(IntEnum):
    """3-bit burst code."""

    SINGLE = 0
    INCR = 1
    WRAP4 = 2
    INCR4 = 3
    WRAP8 = 4
    INCR8 = 5
    WRAP16 = 6
    INCR16 = 7

    @property
    def beats(self) -> Optional[int]:
        """Fixed beat count, or None for the open-ended INCR burst."""
        return _BURST_BEATS[self]

    @property
    def is_wrap(self) -> bool:
        return self in (BurstType.WRAP4, BurstType.WRAP8, BurstType.WRAP16)


_BURST_BEATS: dict[BurstType, Optional[int]] = {
    BurstType.SINGLE: 1,
    BurstType.INCR: None,
    BurstType.WRAP4: 4,
    BurstType.INCR4: 4,
    BurstType.WRAP8: 8,
    BurstType.INCR8: 8,
    BurstType.WRAP16: 16,
    BurstType.INCR16: 16,
}


class Response(IntEnum):
    """Response code returned alongside read data."""

    OKAY = 0
    ERROR = 1


def size_bytes(size_code: int) -> Optional[int]:
    """Return the byte width for a size code, or None if unsupported."""
    try:
        return TransferSize(size_code).width
    except ValueError:
        return None


def lane_strobe(addr: int, size_code: int) -> int:
    """Natural byte-lane mask for a transfer of size_code at addr.

    Unsupported sizes get an empty mask.
    """
    width = size_bytes(size_code)
    if width is None:
        return 0
    lane = addr & (BYTE_LANES - 1) & ~(width - 1)
    return ((1 << width) - 1) << lane


def place_on_lanes(addr: int, value: int) -> int:
    """Shift a narrow value onto the byte lane addressed by addr."""
    return (value << (8 * (addr & (BYTE_LANES - 1)))) & DATA_MASK


@dataclass(frozen=True)
class BusRequest:
    """Signals driven by the requester during one cycle.

    size is kept as a raw int so out-of-range codes can be presented.
    """

    sel: bool = False
    trans: TransferType = TransferType.IDLE
    addr: int = 0
    size: int = TransferSize.WORD
    burst: BurstType = BurstType.SINGLE
    write: bool = False
    strobe: int = 0
    lock: bool = False
    wdata: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "addr", self.addr & ADDR_MASK)
        object.__setattr__(self, "wdata", self.wdata & DATA_MASK)
        object.__setattr__(self, "strobe", self.strobe & ((1 << BYTE_LANES) - 1))

    @classmethod
    def idle(cls, wdata: int = 0) -> "BusRequest":
        """An idle cycle, optionally still carrying write data."""
        return cls(wdata=wdata)

    @property
    def is_valid_address_phase(self) -> bool:
        return self.sel and self.trans in (TransferType.NONSEQ, TransferType.SEQ)


@dataclass(frozen=True)
class BusResponse:
    """Signals driven back to the requester during one cycle."""

    ready: bool
    resp: Response
    rdata: int

    @property
    def ok(self) -> bool:
        return self.resp == Response.OKAY

    @property
    def error(self) -> bool:
        return self.resp == Response.ERROR
