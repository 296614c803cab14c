"""Abstract base class for battery providers."""

from abc import ABC, abstractmethod
from typing import Any

from g935_battery.core.types import Reading


class BatteryProvider(ABC):
    """A source of battery data for the headset.

    Implementations:
    - HidppProvider: HID++ battery request written straight to the headset
    - SysfsProvider: kernel wireless_status and power_supply attributes

    Exactly one provider is active per process, selected at startup.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Mode name used on the command line (e.g., 'hid')."""
        ...

    @abstractmethod
    def locate(self) -> Any:
        """Find the headset and return a handle for a single acquisition.

        Raises DeviceNotFound when the headset is not attached. Never
        retries; the poller's interval is the retry.
        """
        ...

    @abstractmethod
    def read(self) -> Reading:
        """Locate the headset and perform one synchronous acquisition.

        Raises an AcquisitionError subclass when no reading is possible.
        """
        ...
