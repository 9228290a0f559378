"""Hardware register abstraction layer.

Registers are the storage behind the bus. This module provides a clean
contract for register behavior (32-bit content, byte-lane writes, access
mode) without tying it to the pipeline that drives it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from ahbsim.core.exceptions import AddressDecodeError
from ahbsim.utils.consts import BYTE_LANES, DATA_MASK, WINDOW_SIZE


class AccessMode(Enum):
    """How the bus may access a register."""

    READ_WRITE = "rw"
    READ_ONLY = "ro"
    WRITE_ONLY = "wo"

    @property
    def writable(self) -> bool:
        return self is not AccessMode.READ_ONLY


@dataclass(frozen=True)
class RegisterDescriptor:
    """Metadata about a single register.

    This is documentation for register maps and tooling; the actual
    read/write behavior is implemented by the Register subclasses.
    """

    offset: int
    name: str
    access: AccessMode = AccessMode.READ_WRITE
    reset_value: int = 0
    description: str = ""


def merge_lanes(old: int, new: int, strobe: int) -> int:
    """Replace the byte lanes of old selected by strobe with those of new."""
    result = old
    for lane in range(BYTE_LANES):
        if strobe & (1 << lane):
            mask = 0xFF << (8 * lane)
            result = (result & ~mask) | (new & mask)
    return result & DATA_MASK


class Register(ABC):
    """Base class for any 32-bit register.

    For plain storage use SimpleRegister. For registers with special bus
    behavior subclass and override read() / write_lanes().
    """

    access = AccessMode.READ_WRITE

    def __init__(
        self, offset: int, name: str = "", reset_value: int = 0, description: str = ""
    ):
        """Initialize a register.

        Args:
            offset: Byte offset within the peripheral window (4-byte aligned)
            name: Register name used in diagnostics
            reset_value: Value to return to on reset()
            description: Free-form text for register maps
        """
        self.offset = offset
        self.name = name or f"REG_{offset:03X}"
        self.reset_value = reset_value & DATA_MASK
        self.description = description
        self.value = self.reset_value

    @abstractmethod
    def read(self) -> int:
        """Return the full 32-bit content seen by a bus read."""
        ...

    @abstractmethod
    def write_lanes(self, value: int, strobe: int) -> None:
        """Apply a bus write.

        Args:
            value: 32-bit write data with each byte on its lane
            strobe: 4-bit byte-lane enable mask
        """
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset to default state."""
        ...

    def load(self, value: int) -> None:
        """Set the content from the surrounding system, bypassing access rules."""
        self.value = value & DATA_MASK

    @property
    def descriptor(self) -> RegisterDescriptor:
        return RegisterDescriptor(
            offset=self.offset,
            name=self.name,
            access=self.access,
            reset_value=self.reset_value,
            description=self.description,
        )


class SimpleRegister(Register):
    """A register that is just storage (no side effects)."""

    def read(self) -> int:
        return self.value

    def write_lanes(self, value: int, strobe: int) -> None:
        self.value = merge_lanes(self.value, value, strobe)

    def reset(self) -> None:
        self.value = self.reset_value


class ReadOnlyRegister(SimpleRegister):
    """A read-only register. Its content only changes through load()."""

    access = AccessMode.READ_ONLY

    def write_lanes(self, value: int, strobe: int) -> None:
        pass  # Bus writes are rejected before reaching here


class WriteOnlyRegister(SimpleRegister):
    """A write-only register. Reads always return the reset value."""

    access = AccessMode.WRITE_ONLY

    def read(self) -> int:
        return self.reset_value


_REGISTER_TYPES: dict[AccessMode, type[SimpleRegister]] = {
    AccessMode.READ_WRITE: SimpleRegister,
    AccessMode.READ_ONLY: ReadOnlyRegister,
    AccessMode.WRITE_ONLY: WriteOnlyRegister,
}


def make_register(descriptor: RegisterDescriptor) -> Register:
    """Build the register type matching a descriptor's access mode."""
    cls = _REGISTER_TYPES[descriptor.access]
    return cls(
        descriptor.offset,
        descriptor.name,
        descriptor.reset_value,
        descriptor.description,
    )


class RegisterFile:
    """Storage and dispatch for a set of registers.

    Maps window offset -> Register. Offsets must be 4-byte aligned and lie
    inside the 4 KiB window.
    """

    def __init__(self):
        self._registers: dict[int, Register] = {}

    def add(self, reg: Register) -> None:
        """Add a register to this file.

        Raises:
            ValueError: If the offset is taken, misaligned or out of the window
        """
        if reg.offset % BYTE_LANES != 0:
            raise ValueError(f"Register offset 0x{reg.offset:X} is not 4-byte aligned")
        if not 0 <= reg.offset < WINDOW_SIZE:
            raise ValueError(f"Register offset 0x{reg.offset:X} is outside the window")
        if reg.offset in self._registers:
            raise ValueError(f"Register at offset 0x{reg.offset:X} already exists")
        self._registers[reg.offset] = reg

    def get_register(self, offset: int) -> Optional[Register]:
        """Return the register at offset, or None."""
        return self._registers.get(offset)

    def find(self, name: str) -> Register:
        """Return the register called name.

        Raises:
            KeyError: If no register has that name
        """
        for reg in self._registers.values():
            if reg.name == name:
                return reg
        raise KeyError(name)

    def peek(self, offset: int) -> int:
        """Host-side read of the raw content, ignoring bus access rules."""
        return self._require(offset).value

    def poke(self, offset: int, value: int) -> None:
        """Host-side write of the raw content, ignoring bus access rules."""
        self._require(offset).load(value)

    def reset(self) -> None:
        """Reset all registers."""
        for reg in self._registers.values():
            reg.reset()

    @property
    def offsets(self) -> list[int]:
        return sorted(self._registers)

    def descriptors(self) -> list[RegisterDescriptor]:
        return [self._registers[offset].descriptor for offset in self.offsets]

    def __iter__(self) -> Iterator[Register]:
        return iter(self._registers[offset] for offset in self.offsets)

    def __len__(self) -> int:
        return len(self._registers)

    def __contains__(self, offset: object) -> bool:
        return offset in self._registers

    # Private helpers -------------------------------------------------------

    def _require(self, offset: int) -> Register:
        reg = self._registers.get(offset)
        if reg is None:
            raise AddressDecodeError(offset, message=f"No register at offset 0x{offset:03X}")
        return reg
