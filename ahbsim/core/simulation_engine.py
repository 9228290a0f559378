"""Simulation engine for driving request streams through a bus slave."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from ahbsim.core.signals import BusRequest, BusResponse

if TYPE_CHECKING:
    from ahbsim.core.peripheral import PipelinedBusSlave


@dataclass(frozen=True)
class CycleRecord:
    """One cycle of bus activity as seen from outside the slave."""

    cycle: int
    request: BusRequest
    response: BusResponse
    state: str


class SimulationEngine:
    """Minimal simulation engine.

    Applies one request per cycle and keeps the resulting trace.
    """

    def run(self, slave: "PipelinedBusSlave", requests: Iterable[BusRequest]) -> list[CycleRecord]:
        """Apply each request for one cycle and return the trace."""
        trace = []
        for request in requests:
            state = slave.state.value
            response = slave.step(request)
            trace.append(
                CycleRecord(
                    cycle=slave.cycle_count - 1,
                    request=request,
                    response=response,
                    state=state,
                )
            )
        return trace

    def run_idle(self, slave: "PipelinedBusSlave", cycles: int = 1) -> list[CycleRecord]:
        """Run idle cycles, e.g. to drain the pipeline."""
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        return self.run(slave, (BusRequest.idle() for _ in range(cycles)))

    def reset(self, slave: "PipelinedBusSlave") -> None:
        """Reset the slave."""
        slave.reset()
