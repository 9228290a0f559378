"""Pipelined bus slave: transaction controller composed with a register unit."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ahbsim.core.burst import BurstProgress
from ahbsim.core.controller import ControllerState, TransactionController
from ahbsim.core.pipeline import PipelineRegisters, Transaction
from ahbsim.core.register import RegisterFile
from ahbsim.core.register_unit import RegisterUnit
from ahbsim.core.signals import BusRequest, BusResponse
from ahbsim.interfaces.bus_slave import BusSlave
from ahbsim.utils.consts import WINDOW_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlaveSnapshot:
    """Snapshot of pipeline state for debug output."""

    cycle: int
    state: ControllerState
    transaction: Optional[Transaction]
    wdata: int
    burst_beat: int
    burst_active: bool
    burst_address: int


class PipelinedBusSlave(BusSlave):
    """A register-file peripheral behind a two-stage bus pipeline.

    Each step() is one clock period: the register unit and controller are
    evaluated against the latched transaction and the request on the bus,
    the response is produced, then the clock edge commits writes, advances
    the burst and captures the next address phase.
    """

    def __init__(self, name: str, registers: RegisterFile, base_addr: int = 0):
        if base_addr % WINDOW_SIZE != 0:
            raise ValueError(f"Base address 0x{base_addr:08X} is not 4 KiB aligned")
        self._name = name
        self.size = WINDOW_SIZE
        self.base_addr = base_addr
        self.controller = TransactionController()
        self.unit = RegisterUnit(registers, base_addr)
        self._cycle_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def registers(self) -> RegisterFile:
        return self.unit.registers

    @property
    def state(self) -> ControllerState:
        return self.controller.state

    @property
    def pipeline(self) -> PipelineRegisters:
        return self.controller.pipeline

    @property
    def burst(self) -> BurstProgress:
        return self.unit.burst

    def contains(self, address: int) -> bool:
        return self.base_addr <= address < self.base_addr + self.size

    def step(self, request: BusRequest) -> BusResponse:
        result = self.unit.evaluate(
            self.controller.transaction, self.controller.transfer_valid
        )
        outputs = self.controller.outputs(request, result)
        response = BusResponse(ready=outputs.ready, resp=outputs.resp, rdata=result.rdata)

        # Clock edge
        self.unit.commit(result, request.wdata)
        if outputs.abandon:
            self.unit.abandon()
        self.controller.clock(request, outputs)
        self._cycle_count += 1
        return response

    def tick(self, cycles: int = 1) -> None:
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        for _ in range(cycles):
            self.step(BusRequest.idle())

    def reset(self) -> None:
        """Asynchronous reset: controller, pipeline, burst state and registers."""
        self.controller.reset()
        self.unit.reset()
        self.registers.reset()
        self._cycle_count = 0
        logger.info(f"{self._name} reset")

    def get_snapshot(self) -> SlaveSnapshot:
        burst = self.unit.burst
        return SlaveSnapshot(
            cycle=self._cycle_count,
            state=self.controller.state,
            transaction=self.controller.transaction,
            wdata=self.controller.pipeline.wdata,
            burst_beat=burst.beat,
            burst_active=burst.active,
            burst_address=burst.address,
        )
