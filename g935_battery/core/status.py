"""Map a battery reading to a status-bar severity, text and icon."""

from g935_battery.core.types import EMPTY_RECORD, Reading, Severity, StatusRecord

ICON_DISCHARGING = "headset"
ICON_CHARGING = "headset_charging"
DISCONNECTED_TEXT = "Disconnected"

FULL_PERCENT = 99
CRITICAL_PERCENT = 5
WARNING_PERCENT = 15


def classify(connected: bool, charging: bool, percentage: float) -> StatusRecord:
    """Classify a reading.

    Thresholds are fixed: charging at 99% or more is Good, discharging at
    5% or less is Critical, up to 15% is Warning, everything else is Info.
    """
    if not connected:
        return StatusRecord(
            text=DISCONNECTED_TEXT, severity=Severity.IDLE, icon=ICON_DISCHARGING
        )

    if charging:
        severity = Severity.GOOD if percentage >= FULL_PERCENT else Severity.INFO
    elif percentage <= CRITICAL_PERCENT:
        severity = Severity.CRITICAL
    elif percentage <= WARNING_PERCENT:
        severity = Severity.WARNING
    else:
        severity = Severity.INFO

    return StatusRecord(
        text=f"{percentage:.0f}%",
        severity=severity,
        icon=ICON_CHARGING if charging else ICON_DISCHARGING,
    )


def classify_reading(reading: Reading) -> StatusRecord:
    """Classify a provider reading; connected without a sample is "no data"."""
    if not reading.connected:
        return classify(False, False, 0)
    if reading.sample is None:
        return EMPTY_RECORD
    return classify(True, reading.sample.charging, reading.sample.percentage)
