"""Device registry and factory.

Provides discovery and instantiation of bus slave implementations that
are registered globally during module initialization.

Device implementations call register_device() in their package's
__init__.py, so importing the package is enough to make them available.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Type

if TYPE_CHECKING:
    from ahbsim.interfaces.bus_slave import BusSlave


class DeviceRegistry:
    """Registry of available device implementations.

    THREAD SAFETY: Not thread-safe. All registration should happen during
    module initialization before any threads are spawned.
    """

    def __init__(self):
        self._devices: dict[str, Type[BusSlave]] = {}

    def register(self, name: str, device_class: Type[BusSlave]) -> None:
        """Register a device implementation."""
        if name in self._devices:
            raise ValueError(f"Device '{name}' already registered")
        self._devices[name] = device_class

    def get(self, name: str) -> Type[BusSlave]:
        """Get a device class by name."""
        if name not in self._devices:
            raise ValueError(
                f"Unknown device '{name}'. Available: {list(self._devices.keys())}"
            )
        return self._devices[name]

    def list_devices(self) -> list[str]:
        """List all registered device names."""
        return list(self._devices.keys())

    def create(self, name: str, **kwargs) -> Any:
        """Instantiate a device by name."""
        device_class = self.get(name)
        return device_class(**kwargs)


# Global registry
_REGISTRY = DeviceRegistry()


def register_device(name: str, device_class: Type[BusSlave]) -> None:
    """Register a device globally."""
    _REGISTRY.register(name, device_class)


def get_device(name: str) -> Type[BusSlave]:
    """Get a device class by name."""
    return _REGISTRY.get(name)


def create_device(name: str, **kwargs) -> Any:
    """Create a device instance by name."""
    return _REGISTRY.create(name, **kwargs)


def list_available_devices() -> list[str]:
    """List all registered devices."""
    return _REGISTRY.list_devices()


def verify_devices_registered() -> None:
    """Verify that at least one device is registered.

    Raises:
        RuntimeError: If no devices are registered
    """
    if not list_available_devices():
        raise RuntimeError(
            "No devices registered! Ensure device modules are imported. "
            "Example: from ahbsim.csr import CsrPeripheral"
        )
