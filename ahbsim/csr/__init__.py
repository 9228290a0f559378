"""Control/status register block device.

Importing this package registers the device as "csr".
"""

from ahbsim.core.device import register_device

from .peripheral import CsrPeripheral

register_device("csr", CsrPeripheral)

__all__ = ["CsrPeripheral"]
