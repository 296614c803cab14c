"""HID++ provider - asks the headset for its battery voltage directly.

Report layout ported from HeadsetControl's Logitech G935 support.
"""

import logging
from typing import Any, Dict, List

import hid

from g935_battery.core.curve import estimate_battery_level
from g935_battery.core.errors import DeviceNotFound, IOFailure, ReadTimeout, UnexpectedFieldValue
from g935_battery.core.provider import BatteryProvider
from g935_battery.core.types import BatterySample, ProviderType, Reading

log = logging.getLogger(__name__)

# Logitech G935 Gaming Headset USB IDs
VENDOR_ID = 0x046D
PRODUCT_ID = 0x0A87

HIDPP_LONG_MESSAGE = 0x11
HIDPP_LONG_MESSAGE_LENGTH = 20
HIDPP_DEVICE_RECEIVER = 0xFF

# Battery voltage feature index and function on the G935
HIDPP_FEATURE_BATTERY_VOLTAGE = 0x08
HIDPP_FUNCTION_GET_VOLTAGE = 0x0A

STATE_CHARGING = 0x03

READ_TIMEOUT_MS = 5000
MIN_RESPONSE_LENGTH = 7


def build_battery_request() -> List[int]:
    """Build the 20-byte HID++ long report requesting battery voltage."""
    packet = [0x00] * HIDPP_LONG_MESSAGE_LENGTH
    packet[0] = HIDPP_LONG_MESSAGE
    packet[1] = HIDPP_DEVICE_RECEIVER
    packet[2] = HIDPP_FEATURE_BATTERY_VOLTAGE
    packet[3] = HIDPP_FUNCTION_GET_VOLTAGE
    return packet


def parse_battery_response(response) -> BatterySample:
    """Parse a battery response.

    Response format:
      Bytes 0x04-0x05: Battery voltage in mV (big-endian)
      Byte 0x06:       State (0x01 = idle, 0x03 = charging)
    """
    if len(response) < MIN_RESPONSE_LENGTH:
        raise UnexpectedFieldValue("battery response", bytes(response).hex())

    voltage = (response[4] << 8) | response[5]
    return BatterySample(
        voltage=voltage,
        percentage=estimate_battery_level(voltage),
        charging=response[6] == STATE_CHARGING,
        provider=ProviderType.HID_PROPRIETARY,
    )


def list_devices() -> List[Dict[str, Any]]:
    """Return a list of dicts describing all G935 HID interfaces found."""
    try:
        devices = hid.enumerate(VENDOR_ID, PRODUCT_ID)
    except OSError as e:
        raise IOFailure(f"HID enumeration failed: {e}") from e

    result = []
    for dev in devices:
        result.append({
            "product_id": f"{dev['product_id']:04X}",
            "path": dev["path"].decode() if isinstance(dev["path"], bytes) else dev["path"],
            "interface": dev["interface_number"],
            "usage_page": f"0x{dev['usage_page']:04X}",
            "manufacturer": dev["manufacturer_string"],
            "product": dev["product_string"],
        })
    return result


class HidppProvider(BatteryProvider):
    """Battery provider talking HID++ to the headset.

    The device is opened for each read and closed again, so an unplugged
    and replugged dongle is picked up on the next cycle.
    """

    def __init__(self, timeout_ms: int = READ_TIMEOUT_MS):
        self._timeout_ms = timeout_ms

    @property
    def name(self) -> str:
        return "hid"

    def locate(self) -> hid.device:
        dev = hid.device()
        try:
            dev.open(VENDOR_ID, PRODUCT_ID)
        except (OSError, IOError) as e:
            raise DeviceNotFound("Could not find G935 Gaming Headset") from e
        return dev

    def read(self) -> Reading:
        dev = self.locate()
        try:
            response = self._exchange(dev, build_battery_request())
        finally:
            dev.close()

        sample = parse_battery_response(response)
        log.debug("Battery voltage %d mV, state byte 0x%02X", sample.voltage, response[6])

        # A negative estimate means the wireless link is down
        if sample.percentage < 0:
            return Reading(connected=False)
        return Reading(connected=True, sample=sample)

    def _exchange(self, dev: hid.device, packet: List[int]) -> List[int]:
        try:
            dev.write(packet)
            response = dev.read(HIDPP_LONG_MESSAGE_LENGTH, timeout_ms=self._timeout_ms)
        except (OSError, ValueError) as e:
            raise IOFailure(f"HID transfer failed: {e}") from e

        if not response:
            raise ReadTimeout("Device read timed out.")
        return response
