"""Register file access unit: decode, fault checks, burst progress and data paths.

Everything here is evaluated against the latched transaction, one cycle
after it was admitted. evaluate() is the combinational half (no state
changes); commit() is what happens on the clock edge that ends the beat.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ahbsim.core.burst import BeatPlan, BurstProgress
from ahbsim.core.exceptions import (
    AccessViolationError,
    AddressDecodeError,
    AlignmentError,
    InvalidSizeError,
    TransferError,
)
from ahbsim.core.pipeline import Transaction
from ahbsim.core.register import AccessMode, Register, RegisterFile
from ahbsim.core.signals import size_bytes
from ahbsim.utils.consts import WINDOW_OFFSET_MASK, window_page, word_offset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataPhaseResult:
    """Combinational outputs of the unit for one cycle."""

    valid: bool = False
    error: bool = False
    burst_done: bool = False
    rdata: int = 0
    cause: Optional[TransferError] = None
    plan: Optional[BeatPlan] = None
    register: Optional[Register] = None
    write: bool = False
    strobe: int = 0

    @classmethod
    def idle(cls) -> "DataPhaseResult":
        return cls()


class RegisterUnit:
    """Checks and performs register accesses for the pipelined bus.

    A transfer is faulted when any of these hold:
    - the address is outside the window or selects no register
    - the declared size is not byte, half-word or word
    - the address is not aligned to the declared size
    - it writes a read-only register

    Only the merged flag leaves the unit; the cause is kept for logs.
    """

    def __init__(self, registers: RegisterFile, base_addr: int):
        self.registers = registers
        self.base_addr = base_addr
        self.burst = BurstProgress()

    # Combinational ----------------------------------------------------------

    def decode(self, address: int) -> Optional[Register]:
        """Return the register selected by address, or None."""
        if window_page(address) != window_page(self.base_addr):
            return None
        return self.registers.get_register(word_offset(address))

    @staticmethod
    def is_aligned(address: int, size: int) -> bool:
        width = size_bytes(size)
        if width is None:
            return False
        return address % width == 0

    def check(self, address: int, size: int, write: bool) -> Optional[TransferError]:
        """Return the first fault found for an access, or None if it is clean."""
        if size_bytes(size) is None:
            return InvalidSizeError(size, address=address)

        reg = self.decode(address)
        if reg is None:
            return AddressDecodeError(address)

        if not self.is_aligned(address, size):
            return AlignmentError(address, size_bytes(size) or 0)

        if write and reg.access is AccessMode.READ_ONLY:
            return AccessViolationError(address, reg.name)

        return None

    def evaluate(self, txn: Optional[Transaction], valid: bool) -> DataPhaseResult:
        """Evaluate the latched transaction for the current cycle."""
        if not valid or txn is None:
            return DataPhaseResult.idle()

        plan = self.burst.plan(txn)
        cause = self.check(plan.address, plan.size, txn.write)
        if cause is not None:
            return DataPhaseResult(
                valid=True,
                error=True,
                cause=cause,
                plan=plan,
                write=txn.write,
                strobe=txn.strobe,
            )

        reg = self.decode(plan.address)
        assert reg is not None
        return DataPhaseResult(
            valid=True,
            error=False,
            burst_done=plan.last,
            rdata=0 if txn.write else reg.read(),
            plan=plan,
            register=reg,
            write=txn.write,
            strobe=txn.strobe,
        )

    # Clock edge -------------------------------------------------------------

    def commit(self, result: DataPhaseResult, wdata: int) -> None:
        """Apply the edge-time side effects of an evaluated beat."""
        if not result.valid:
            return

        if result.error:
            address = result.plan.address if result.plan else 0
            logger.warning(
                f"Transfer fault at offset 0x{address & WINDOW_OFFSET_MASK:03X}: {result.cause}"
            )
            self.burst.reset()
            return

        assert result.plan is not None and result.register is not None
        if result.write:
            result.register.write_lanes(wdata, result.strobe)
        self.burst.advance(result.plan)

    def abandon(self) -> None:
        """Drop an unfinished burst when the requester stops issuing beats."""
        if self.burst.active:
            logger.debug(f"Burst abandoned after {self.burst.beat} beats")
        self.burst.reset()

    def reset(self) -> None:
        self.burst.reset()
