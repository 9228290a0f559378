"""Core modules for the bus model.

- signals: bus encodings and per-cycle request/response bundles
- pipeline: latched transaction and delayed write data
- burst: burst address generation and beat tracking
- register: register storage and register file
- register_unit: decode, fault checks and data paths
- controller: address/data phase state machine
- peripheral: controller + register unit as one clocked slave
- device: device registry and factory
"""

from ahbsim.core.burst import BeatPlan, BurstProgress, burst_addresses, next_address
from ahbsim.core.clock import Clock
from ahbsim.core.controller import (
    ControllerOutputs,
    ControllerState,
    TransactionController,
    transition,
)
from ahbsim.core.device import DeviceRegistry, create_device, list_available_devices
from ahbsim.core.peripheral import PipelinedBusSlave, SlaveSnapshot
from ahbsim.core.pipeline import PipelineRegisters, Transaction
from ahbsim.core.register import (
    AccessMode,
    ReadOnlyRegister,
    Register,
    RegisterDescriptor,
    RegisterFile,
    SimpleRegister,
    WriteOnlyRegister,
)
from ahbsim.core.register_unit import DataPhaseResult, RegisterUnit
from ahbsim.core.simulation_engine import CycleRecord, SimulationEngine

__all__ = [
    # Register abstractions
    "AccessMode",
    "Register",
    "SimpleRegister",
    "ReadOnlyRegister",
    "WriteOnlyRegister",
    "RegisterFile",
    "RegisterDescriptor",
    # Pipeline
    "Transaction",
    "PipelineRegisters",
    "BeatPlan",
    "BurstProgress",
    "burst_addresses",
    "next_address",
    # Controller / register unit
    "ControllerOutputs",
    "ControllerState",
    "TransactionController",
    "transition",
    "DataPhaseResult",
    "RegisterUnit",
    "PipelinedBusSlave",
    "SlaveSnapshot",
    # Clock / engine
    "Clock",
    "CycleRecord",
    "SimulationEngine",
    # Device registry
    "DeviceRegistry",
    "create_device",
    "list_available_devices",
]
