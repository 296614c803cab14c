"""sysfs provider - reads the kernel's view of the headset.

Needs a kernel whose hid-logitech-hidpp driver exposes the headset battery
under /sys/class/power_supply/ and the USB ``wireless_status`` attribute
on the receiver interface (Linux 6.5+).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pyudev

from g935_battery.core.errors import DeviceNotFound, IOFailure, UnexpectedFieldValue
from g935_battery.core.provider import BatteryProvider
from g935_battery.core.types import BatterySample, ProviderType, Reading
from g935_battery.providers.hid_driver import PRODUCT_ID, VENDOR_ID

log = logging.getLogger(__name__)

DEVICE_NAME = "G935 Gaming Headset"

USB_DEVICES_DIR = Path("/sys/bus/usb/devices")
POWER_SUPPLY_DIR = Path("/sys/class/power_supply")

# HID++ lives on interface 3 of configuration 1
INTERFACE_SUFFIX = ":1.3"
WIRELESS_STATUS_ATTR = "wireless_status"

CONNECTED = "connected"
DISCONNECTED = "disconnected"

STATUS_CHARGING = "Charging"
STATUS_DISCHARGING = "Discharging"
STATUS_UNKNOWN = "Unknown"
STATUS_FULL = "Full"
STATUS_NOT_CHARGING = "Not charging"

_CHARGING_STATES = {STATUS_CHARGING, STATUS_FULL}
_KNOWN_STATES = {
    STATUS_CHARGING, STATUS_DISCHARGING, STATUS_UNKNOWN,
    STATUS_FULL, STATUS_NOT_CHARGING,
}


def _read_sysfs(path: Path) -> Optional[str]:
    """Read a sysfs attribute file, returning stripped content or None if absent."""
    try:
        return path.read_text().strip()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise IOFailure(f"Could not read {path}: {e}") from e


def _read_int(path: Path) -> int:
    value = _read_sysfs(path)
    if value is None:
        raise IOFailure(f"Missing attribute {path}")
    try:
        return int(value)
    except ValueError:
        raise UnexpectedFieldValue(path.name, value) from None


@dataclass(frozen=True)
class SysfsLocation:
    """Where the headset's attributes live. Either half may be missing."""
    wireless_status: Optional[Path] = None
    power_supply: Optional[Path] = None


class SysfsProvider(BatteryProvider):
    """Battery provider reading wireless_status and power_supply attributes."""

    def __init__(self, usb_root: Path = USB_DEVICES_DIR,
                 power_supply_root: Path = POWER_SUPPLY_DIR,
                 context: Optional[pyudev.Context] = None):
        self._usb_root = Path(usb_root)
        self._power_supply_root = Path(power_supply_root)
        self._context = context

    @property
    def name(self) -> str:
        return "sysfs"

    def _get_context(self) -> pyudev.Context:
        if self._context is None:
            self._context = pyudev.Context()
        return self._context

    def find_wireless_status(self) -> Optional[Path]:
        """Find the receiver's wireless_status attribute from its bus/port address."""
        try:
            devices = self._get_context().list_devices(subsystem="usb", DEVTYPE="usb_device")
            for device in devices:
                attrs = device.attributes
                try:
                    vid = int(attrs.asstring("idVendor"), 16)
                    pid = int(attrs.asstring("idProduct"), 16)
                except (KeyError, ValueError):
                    continue
                if (vid, pid) != (VENDOR_ID, PRODUCT_ID):
                    continue

                try:
                    busnum = attrs.asstring("busnum")
                    ports = attrs.asstring("devpath")
                except KeyError:
                    log.debug("Receiver %s has no bus/port address", device.sys_name)
                    continue
                path = self._usb_root / f"{busnum}-{ports}{INTERFACE_SUFFIX}" / WIRELESS_STATUS_ATTR
                if path.is_file():
                    return path
                log.debug("Receiver found at %s-%s but %s is missing", busnum, ports, path)
        except OSError as e:
            raise IOFailure(f"USB enumeration failed: {e}") from e
        return None

    def find_power_supply(self) -> Optional[Path]:
        """Find the power_supply entry whose model_name is the headset's."""
        if not self._power_supply_root.is_dir():
            return None

        try:
            entries = sorted(self._power_supply_root.iterdir())
        except OSError as e:
            raise IOFailure(f"power_supply scan failed: {e}") from e

        for entry in entries:
            if _read_sysfs(entry / "model_name") == DEVICE_NAME:
                return entry
        return None

    def locate(self) -> SysfsLocation:
        location = SysfsLocation(
            wireless_status=self.find_wireless_status(),
            power_supply=self.find_power_supply(),
        )
        if location.wireless_status is None and location.power_supply is None:
            raise DeviceNotFound(f"Could not find {DEVICE_NAME}")
        return location

    def read(self) -> Reading:
        location = self.locate()
        if location.wireless_status is None:
            raise DeviceNotFound(f"No {WIRELESS_STATUS_ATTR} attribute for {DEVICE_NAME}")

        link = _read_sysfs(location.wireless_status)
        if link is None:
            raise DeviceNotFound(f"{location.wireless_status} disappeared")
        if link == DISCONNECTED:
            return Reading(connected=False)
        if link != CONNECTED:
            raise UnexpectedFieldValue(WIRELESS_STATUS_ATTR, link)

        if location.power_supply is None:
            log.debug("Headset connected but no power_supply entry yet")
            return Reading(connected=True)

        return Reading(connected=True, sample=self._read_battery(location.power_supply))

    def _read_battery(self, ps_dir: Path) -> Optional[BatterySample]:
        status = _read_sysfs(ps_dir / "status")
        if status is None or status == STATUS_UNKNOWN:
            return None
        if status not in _KNOWN_STATES:
            raise UnexpectedFieldValue("status", status)

        return BatterySample(
            voltage=_read_int(ps_dir / "voltage_now"),
            percentage=_read_int(ps_dir / "capacity"),
            charging=status in _CHARGING_STATES,
            provider=ProviderType.SYSFS,
        )
