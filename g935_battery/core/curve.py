"""Voltage to percentage curve for the G935 battery cell.

The firmware reports raw cell voltage in millivolts. The fit below is
empirical (calibrated against HeadsetControl logs) and must be kept exactly
as is.
"""

LINEAR_MAX_MV = 3525
SATURATION_MV = 4030

# f(x) = c4*x^4 + c3*x^3 + c2*x^2 + c1*x + c0
_C4 = 3.7268473047e-9
_C3 = -5.605626214573775e-5
_C2 = 0.3156051902814949
_C1 = -788.0937250298629
_C0 = 736315.3077118985


def estimate_battery_level(voltage: int) -> float:
    """Estimate battery percentage from a voltage in millivolts.

    Values below roughly 3367 mV come out negative; the HID++ reader uses
    that as its disconnected signal.
    """
    v = float(voltage)
    if v <= LINEAR_MAX_MV:
        return 0.03 * v - 101.0
    if v > SATURATION_MV:
        return 100.0
    return _C4 * v ** 4 + _C3 * v ** 3 + _C2 * v ** 2 + _C1 * v + _C0
