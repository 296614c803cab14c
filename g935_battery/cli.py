#!/usr/bin/env python3
"""Command-line interface for the G935 headset battery reporter."""

import sys
import logging
import argparse

from g935_battery import config as cfg
from g935_battery.core.errors import AcquisitionError
from g935_battery.core.profile import PactlProfileSwitcher
from g935_battery.core.provider import BatteryProvider
from g935_battery.core.reporter import PollState, StatusReporter
from g935_battery.providers import PROVIDERS, create_provider
from g935_battery.providers.hid_driver import list_devices

log = logging.getLogger(__name__)

DEFAULT_MODE = "hid"


def _create_provider(mode: str, config: dict) -> BatteryProvider:
    if mode == "sysfs":
        return create_provider(
            mode,
            usb_root=cfg.get(config, "sysfs.usb_root"),
            power_supply_root=cfg.get(config, "sysfs.power_supply_root"),
        )
    return create_provider(mode)


def _create_switcher(config: dict) -> PactlProfileSwitcher:
    return PactlProfileSwitcher(
        card=cfg.get(config, "profile.card"),
        profile=cfg.get(config, "profile.profile"),
        command=cfg.get(config, "profile.command"),
    )


def query_battery(provider: BatteryProvider, field: str) -> int:
    """Print one battery field plus the charging line. Returns the exit code."""
    try:
        reading = provider.read()
    except AcquisitionError as e:
        print(e, file=sys.stderr)
        return 1

    if not reading.connected:
        print("Wireless connection disconnected.", file=sys.stderr)
        return 1
    if reading.sample is None:
        print("Battery status unavailable.", file=sys.stderr)
        return 1

    print(getattr(reading.sample, field))
    print(f"Charging: {int(reading.sample.charging)}")
    return 0


def print_device_list() -> int:
    try:
        devices = list_devices()
    except AcquisitionError as e:
        print(e, file=sys.stderr)
        return 1

    if not devices:
        print("No G935 Gaming Headset found.")
        print("\nTroubleshooting:")
        print("  1. Make sure the USB receiver is plugged in")
        print("  2. Check udev rules grant access to the hidraw node")
        print("  3. Try running with sudo")
        return 1

    print(f"Found {len(devices)} G935 HID interface(s):\n")
    for dev in devices:
        for key, val in dev.items():
            print(f"  {key}: {val}")
        print()
    return 0


def _configured_mode(config: dict) -> str:
    mode = cfg.get(config, "acquisition.mode", DEFAULT_MODE)
    if mode not in PROVIDERS:
        log.warning("Ignoring unknown acquisition.mode %r in config, using %r", mode, DEFAULT_MODE)
        return DEFAULT_MODE
    return mode


def build_parser(config: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="g935-battery",
        description="Logitech G935 Gaming Headset Battery Reporter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  %(prog)s get-battery-percentage       Print battery percentage
  %(prog)s get-battery-voltage          Print raw battery voltage
  %(prog)s get-i3-status                Stream i3status-rs JSON records
  %(prog)s --mode sysfs get-i3-status   Use the kernel driver instead of HID++
  %(prog)s list-devices                 List G935 HID interfaces
""",
    )
    parser.add_argument(
        "--mode", "-m", choices=sorted(PROVIDERS),
        default=_configured_mode(config),
        help="Acquisition mode (default: %(default)s)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True
    sub.add_parser("get-battery-percentage", help="Print battery percentage")
    sub.add_parser("get-battery-voltage", help="Print raw battery voltage")
    sub.add_parser("list-devices", help="List G935 HID interfaces")

    status = sub.add_parser("get-i3-status", help="Continuously print status-bar JSON")
    status.add_argument(
        "--interval", "-i", type=int,
        default=cfg.get(config, "polling.interval_ms", 500),
        help="Poll interval in milliseconds (default: %(default)s)",
    )
    status.add_argument(
        "--switch-profile", "-p", action=argparse.BooleanOptionalAction,
        default=cfg.get(config, "profile.enabled", False),
        help="Switch the card profile when the headset connects or disconnects",
    )
    status.add_argument("--once", action="store_true", help="Print a single record and exit")

    return parser


def main(argv=None):
    config = cfg.load_config()
    args = build_parser(config).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "list-devices":
        return print_device_list()

    provider = _create_provider(args.mode, config)
    if args.command == "get-battery-voltage":
        return query_battery(provider, "voltage")
    if args.command == "get-battery-percentage":
        return query_battery(provider, "percentage")

    switcher = _create_switcher(config) if args.switch_profile else None
    reporter = StatusReporter(provider, switcher=switcher, interval=args.interval / 1000.0)
    if args.once:
        reporter.poll_once(PollState())
        return 0

    log.debug("Polling %s every %d ms", provider.name, args.interval)
    try:
        reporter.run()
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
