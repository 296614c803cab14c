"""Core data types for headset battery acquisition and status reporting."""

import json
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class ProviderType(Enum):
    """How the battery data was obtained."""
    HID_PROPRIETARY = auto()
    SYSFS = auto()


class Severity(Enum):
    """Display priority understood by i3status-rs / i3blocks."""
    IDLE = "Idle"
    CRITICAL = "Critical"
    WARNING = "Warning"
    INFO = "Info"
    GOOD = "Good"


@dataclass(frozen=True)
class BatterySample:
    """A single battery acquisition.

    ``voltage`` is whatever raw unit the source reports (millivolts over
    HID++, microvolts from sysfs). ``percentage`` is either curve-fitted
    from the voltage or taken as-is from the kernel.
    """
    voltage: int
    percentage: float
    charging: bool
    provider: ProviderType = ProviderType.HID_PROPRIETARY


@dataclass(frozen=True)
class Reading:
    """Connectivity plus an optional battery sample.

    A connected headset may still have ``sample=None`` while the driver has
    no valid battery data. A disconnected reading never carries a
    meaningful percentage.
    """
    connected: bool
    sample: Optional[BatterySample] = None


@dataclass(frozen=True)
class StatusRecord:
    """One status-bar record."""
    text: str = ""
    severity: Optional[Severity] = None
    icon: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.severity is None

    def to_dict(self) -> dict:
        if self.is_empty:
            return {"text": self.text}
        return {"state": self.severity.value, "text": self.text, "icon": self.icon}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))


EMPTY_RECORD = StatusRecord()
