"""
Pytest configuration and shared fixtures for the ahbsim test suite.
"""

import sys
import tempfile
from pathlib import Path
from typing import Optional, Sequence

import pytest
import yaml

# Ensure project root is on PYTHONPATH so 'ahbsim' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from ahbsim.core.burst import burst_addresses  # noqa: E402
from ahbsim.core.signals import (  # noqa: E402
    BurstType,
    BusRequest,
    BusResponse,
    TransferSize,
    TransferType,
    lane_strobe,
    place_on_lanes,
)
from ahbsim.csr import CsrPeripheral  # noqa: E402

CSR_BASE = 0x40000000

CSR_REGISTERS = {
    "CTRL": {"offset": 0x000, "access": "rw", "reset": 0x00000000},
    "STATUS": {"offset": 0x004, "access": "ro", "reset": 0x00000001},
    "INT_EN": {"offset": 0x008, "access": "rw", "reset": 0x00000000},
    "DATA": {"offset": 0x00C, "access": "rw", "reset": 0x00000000},
    "INT_STAT": {"offset": 0x010, "access": "ro", "reset": 0x00000000},
    "CONFIG": {"offset": 0x014, "access": "rw", "reset": 0x00000000},
    "CMD": {"offset": 0x018, "access": "wo", "reset": 0x00000000},
    "SCRATCH": {"offset": 0x01C, "access": "rw", "reset": 0x00000000},
    "ID": {"offset": 0x020, "access": "ro", "reset": 0x41484201},
}


class BusDriver:
    """Requester model that issues transfers one cycle at a time.

    Address phases are held until the slave signals ready; the write data
    for a beat is driven in the cycle after its address phase.
    """

    def __init__(self, slave):
        self.slave = slave
        self.trace: list[tuple[BusRequest, BusResponse]] = []

    def cycle(self, request: BusRequest) -> BusResponse:
        response = self.slave.step(request)
        self.trace.append((request, response))
        return response

    def idle(self, cycles: int = 1) -> None:
        for _ in range(cycles):
            self.cycle(BusRequest.idle())

    def address_phase(self, request: BusRequest, limit: int = 8) -> BusResponse:
        for _ in range(limit):
            response = self.cycle(request)
            if response.ready:
                return response
        raise AssertionError(f"address phase not accepted within {limit} cycles")

    def write(
        self,
        addr: int,
        value: int,
        size: int = TransferSize.WORD,
        strobe: Optional[int] = None,
    ) -> BusResponse:
        if strobe is None:
            strobe = lane_strobe(addr, size)
        self.address_phase(
            BusRequest(
                sel=True,
                trans=TransferType.NONSEQ,
                addr=addr,
                size=size,
                write=True,
                strobe=strobe,
            )
        )
        return self.cycle(BusRequest.idle(wdata=place_on_lanes(addr, value)))

    def read(self, addr: int, size: int = TransferSize.WORD) -> BusResponse:
        self.address_phase(
            BusRequest(sel=True, trans=TransferType.NONSEQ, addr=addr, size=size)
        )
        return self.cycle(BusRequest.idle())

    def burst(
        self,
        addr: int,
        burst: BurstType,
        size: int = TransferSize.WORD,
        data: Optional[Sequence[int]] = None,
        beats: Optional[int] = None,
    ) -> list[BusResponse]:
        """Run a whole burst; data given means a write burst."""
        write = data is not None
        addresses = burst_addresses(addr, size, burst, beats)

        def beat_request(index: int, wdata: int) -> BusRequest:
            return BusRequest(
                sel=True,
                trans=TransferType.NONSEQ if index == 0 else TransferType.SEQ,
                addr=addresses[index],
                size=size,
                burst=burst,
                write=write,
                strobe=lane_strobe(addresses[index], size),
                wdata=wdata,
            )

        self.address_phase(beat_request(0, 0))
        responses = []
        for index, beat_addr in enumerate(addresses):
            wdata = place_on_lanes(beat_addr, data[index]) if data is not None else 0
            if index + 1 < len(addresses):
                request = beat_request(index + 1, wdata)
            else:
                request = BusRequest.idle(wdata=wdata)
            response = self.cycle(request)
            responses.append(response)
            if response.error:
                break
        return responses


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


@pytest.fixture
def valid_device_config_dict():
    """
    Fixture providing a complete valid device configuration dictionary.
    """
    return {
        "name": "csr",
        "window": {"base": CSR_BASE, "size": 0x1000},
        "registers": {name: dict(reg) for name, reg in CSR_REGISTERS.items()},
    }


@pytest.fixture
def temp_config_yaml_file(temp_yaml_file, valid_device_config_dict):
    """
    Fixture that writes a valid device configuration to a temporary YAML file.
    """
    with open(temp_yaml_file, "w", encoding="utf-8") as f:
        yaml.dump(valid_device_config_dict, f)

    yield temp_yaml_file


@pytest.fixture
def csr():
    """A freshly built CSR block from the bundled register map."""
    return CsrPeripheral()


@pytest.fixture
def driver(csr):
    return BusDriver(csr)


def pytest_configure(config):
    """
    Hook for initial pytest configuration.

    Used to add custom markers and configuration.
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
