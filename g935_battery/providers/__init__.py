"""Battery provider implementations."""

from typing import Dict, Type

from g935_battery.core.provider import BatteryProvider
from g935_battery.providers.hid_driver import HidppProvider
from g935_battery.providers.sysfs import SysfsProvider

PROVIDERS: Dict[str, Type[BatteryProvider]] = {
    "hid": HidppProvider,
    "sysfs": SysfsProvider,
}


def create_provider(mode: str, **kwargs) -> BatteryProvider:
    """Instantiate the provider registered under ``mode``."""
    try:
        provider_cls = PROVIDERS[mode]
    except KeyError:
        raise ValueError(f"Unknown acquisition mode: {mode!r}") from None
    return provider_cls(**kwargs)


__all__ = ["HidppProvider", "SysfsProvider", "PROVIDERS", "create_provider"]
