"""Control/status register block.

Wires the bundled register map into a pipelined bus slave:
- RegisterFile built from config.yaml
- Transaction controller + register unit (PipelinedBusSlave)
- Host-side hooks for the surrounding system to publish and observe state
"""

from typing import Any, Optional
from pathlib import Path

from ahbsim.core.peripheral import PipelinedBusSlave
from ahbsim.core.register import RegisterFile, make_register
from ahbsim.utils.config_loader import DeviceConfig, load_config


class CsrPeripheral(PipelinedBusSlave):
    """Nine-register control/status block in a 4 KiB window."""

    def __init__(
        self,
        config: Optional[DeviceConfig] = None,
        config_path: Optional[str] = None,
        base_addr: Optional[int] = None,
        **_kwargs: Any,
    ):
        if config is None:
            path = config_path or str(Path(__file__).parent / "config.yaml")
            config = load_config("csr", path=path)
        self.config = config

        registers = RegisterFile()
        for descriptor in config.descriptors():
            registers.add(make_register(descriptor))

        base = config.window.base if base_addr is None else base_addr
        super().__init__(name=config.name.upper(), registers=registers, base_addr=base)

    def read_register(self, name: str) -> int:
        """Raw content of a register as the surrounding system sees it."""
        return self.registers.find(name).value

    def write_register(self, name: str, value: int) -> None:
        """Publish a value into a register, regardless of its bus access mode."""
        self.registers.find(name).load(value)

    def address_of(self, name: str) -> int:
        """Absolute bus address of a register."""
        return self.base_addr + self.registers.find(name).offset

    def get_register_map(self) -> dict:
        """Return a human-readable description of the register layout."""
        return {
            "name": self.name,
            "base": f"0x{self.base_addr:08X}",
            "size": f"0x{self.size:X}",
            "registers": [
                {
                    "name": desc.name,
                    "offset": f"0x{desc.offset:03X}",
                    "access": desc.access.value,
                    "reset": f"0x{desc.reset_value:08X}",
                    "description": desc.description,
                }
                for desc in self.registers.descriptors()
            ],
        }
