"""Core abstractions for headset battery acquisition and status reporting."""

from g935_battery.core.types import (
    ProviderType,
    BatterySample,
    Reading,
    Severity,
    StatusRecord,
)
from g935_battery.core.errors import (
    AcquisitionError,
    DeviceNotFound,
    ReadTimeout,
    UnexpectedFieldValue,
    IOFailure,
)
from g935_battery.core.provider import BatteryProvider
from g935_battery.core.curve import estimate_battery_level
from g935_battery.core.status import classify, classify_reading
from g935_battery.core.reporter import PollState, StatusReporter

__all__ = [
    "ProviderType",
    "BatterySample",
    "Reading",
    "Severity",
    "StatusRecord",
    "AcquisitionError",
    "DeviceNotFound",
    "ReadTimeout",
    "UnexpectedFieldValue",
    "IOFailure",
    "BatteryProvider",
    "estimate_battery_level",
    "classify",
    "classify_reading",
    "PollState",
    "StatusReporter",
]
