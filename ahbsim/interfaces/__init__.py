"""Interface abstractions for the bus model.

- BusSlave: clocked bus slave contract (abstract base class)
- IClock, ClockSubscriber: clock pub/sub
"""

from ahbsim.interfaces.bus_slave import BusSlave
from ahbsim.interfaces.clock import ClockSubscriber, IClock

__all__ = [
    "BusSlave",
    "ClockSubscriber",
    "IClock",
]
