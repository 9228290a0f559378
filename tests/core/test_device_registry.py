import pytest

from ahbsim.core.device import (
    DeviceRegistry,
    create_device,
    get_device,
    list_available_devices,
    register_device,
    verify_devices_registered,
)
from ahbsim.csr import CsrPeripheral


class DummyDevice:
    def __init__(self, **kwargs):
        self.kwargs = kwargs


def test_device_registry_basic_operations():
    registry = DeviceRegistry()
    registry.register("dummy", DummyDevice)
    assert registry.get("dummy") is DummyDevice
    assert registry.list_devices() == ["dummy"]

    instance = registry.create("dummy", foo=1)
    assert isinstance(instance, DummyDevice)
    assert instance.kwargs == {"foo": 1}

    with pytest.raises(ValueError):
        registry.register("dummy", DummyDevice)

    with pytest.raises(ValueError):
        registry.get("missing")


def test_global_registry_functions(monkeypatch):
    registry = DeviceRegistry()
    monkeypatch.setattr("ahbsim.core.device._REGISTRY", registry)

    register_device("dummy", DummyDevice)
    assert get_device("dummy") is DummyDevice
    assert list_available_devices() == ["dummy"]
    instance = create_device("dummy", bar=2)
    assert isinstance(instance, DummyDevice)
    assert instance.kwargs == {"bar": 2}


def test_verify_devices_registered(monkeypatch):
    registry = DeviceRegistry()
    monkeypatch.setattr("ahbsim.core.device._REGISTRY", registry)

    with pytest.raises(RuntimeError):
        verify_devices_registered()

    registry.register("dummy", DummyDevice)
    verify_devices_registered()


def test_csr_is_registered_on_import():
    assert "csr" in list_available_devices()
    assert isinstance(create_device("csr"), CsrPeripheral)
