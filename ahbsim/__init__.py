"""Cycle-accurate model of a pipelined peripheral bus slave.

A transaction controller admits address phases, latches them into a
one-slot pipeline and hands them to a register unit that decodes, checks
and performs the access (including wrapping and incrementing bursts) in
the following cycle.

Getting started:
    from ahbsim import BusRequest, TransferType, create_device

    csr = create_device("csr")
    csr.step(BusRequest(sel=True, trans=TransferType.NONSEQ, addr=0x40000000))
    response = csr.step(BusRequest.idle())
"""

# Core abstractions
from ahbsim.core.burst import burst_addresses, next_address
from ahbsim.core.clock import Clock
from ahbsim.core.controller import ControllerState, TransactionController, transition
from ahbsim.core.device import create_device, list_available_devices, verify_devices_registered
from ahbsim.core.peripheral import PipelinedBusSlave
from ahbsim.core.register_unit import RegisterUnit
from ahbsim.core.signals import (
    BurstType,
    BusRequest,
    BusResponse,
    Response,
    TransferSize,
    TransferType,
)
from ahbsim.core.simulation_engine import SimulationEngine
from ahbsim.interfaces.bus_slave import BusSlave

# Device implementations (auto-registers when imported)
from ahbsim.csr import CsrPeripheral

__all__ = [
    # Core
    "BusSlave",
    "Clock",
    "ControllerState",
    "PipelinedBusSlave",
    "RegisterUnit",
    "SimulationEngine",
    "TransactionController",
    "transition",
    "next_address",
    "burst_addresses",
    # Signals
    "BurstType",
    "BusRequest",
    "BusResponse",
    "Response",
    "TransferSize",
    "TransferType",
    # Device creation
    "create_device",
    "list_available_devices",
    "verify_devices_registered",
    # Concrete devices
    "CsrPeripheral",
]
