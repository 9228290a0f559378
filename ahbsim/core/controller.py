"""Transaction controller: the address-phase/data-phase state machine.

transition() is the pure next-state/output function. TransactionController
wraps it with the state register and the pipeline registers, and splits
each cycle into outputs() (combinational) and clock() (edge).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ahbsim.core.pipeline import PipelineRegisters, Transaction
from ahbsim.core.register_unit import DataPhaseResult
from ahbsim.core.signals import BusRequest, Response

logger = logging.getLogger(__name__)


class ControllerState(Enum):
    IDLE = "idle"
    DATA_PHASE = "data_phase"
    ERROR_HOLD = "error_hold"


@dataclass(frozen=True)
class ControllerOutputs:
    """Everything the controller decides in one cycle."""

    next_state: ControllerState
    ready: bool
    resp: Response
    trans_valid: bool = False
    write: bool = False
    capture: bool = False
    abandon: bool = False


def transition(
    state: ControllerState,
    request_valid: bool,
    result: DataPhaseResult,
    single: bool = False,
) -> ControllerOutputs:
    """Next state and outputs for (state, inputs).

    Args:
        state: Current controller state
        request_valid: A valid address phase is on the bus this cycle
        result: Register unit outputs for the latched transaction
        single: The latched transaction is a single transfer
    """
    if state is ControllerState.IDLE:
        return ControllerOutputs(
            next_state=ControllerState.DATA_PHASE if request_valid else ControllerState.IDLE,
            ready=True,
            resp=Response.OKAY,
            capture=request_valid,
        )

    if state is ControllerState.ERROR_HOLD:
        return ControllerOutputs(
            next_state=ControllerState.IDLE,
            ready=False,
            resp=Response.ERROR,
        )

    if result.error:
        return ControllerOutputs(
            next_state=ControllerState.ERROR_HOLD,
            ready=False,
            resp=Response.ERROR,
            trans_valid=True,
            write=result.write,
        )

    if result.burst_done or single:
        return ControllerOutputs(
            next_state=ControllerState.IDLE,
            ready=False,
            resp=Response.OKAY,
            trans_valid=True,
            write=result.write,
        )

    # Burst still running: keep streaming beats or fall back to idle.
    return ControllerOutputs(
        next_state=ControllerState.DATA_PHASE if request_valid else ControllerState.IDLE,
        ready=True,
        resp=Response.OKAY,
        trans_valid=True,
        write=result.write,
        capture=request_valid,
        abandon=not request_valid,
    )


class TransactionController:
    """State register plus pipeline registers around transition().

    The controller never raises bus faults of its own; every error comes
    from the register unit's result.
    """

    def __init__(self):
        self._state = ControllerState.IDLE
        self.pipeline = PipelineRegisters()

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def transfer_valid(self) -> bool:
        """Drives the register unit's transfer-valid input."""
        return self._state is ControllerState.DATA_PHASE

    @property
    def transaction(self) -> Optional[Transaction]:
        return self.pipeline.transaction

    def outputs(self, request: BusRequest, result: DataPhaseResult) -> ControllerOutputs:
        txn = self.pipeline.transaction
        single = self.transfer_valid and txn is not None and txn.is_single
        return transition(self._state, request.is_valid_address_phase, result, single)

    def clock(self, request: BusRequest, outputs: ControllerOutputs) -> None:
        """Apply a clock edge using the outputs computed for this cycle."""
        if outputs.capture:
            self.pipeline.capture(Transaction.from_request(request))
        elif outputs.next_state is not ControllerState.DATA_PHASE:
            self.pipeline.release()
        self.pipeline.clock_wdata(request.wdata)

        if outputs.next_state is not self._state:
            logger.debug(f"Controller {self._state.value} -> {outputs.next_state.value}")
        self._state = outputs.next_state

    def reset(self) -> None:
        self._state = ControllerState.IDLE
        self.pipeline.clear()
